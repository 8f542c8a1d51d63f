#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/utils/decorators.py
"""Utility decorators for slatedown components.

Centralizes optional-dependency checks so that components depending on
third-party parsers fail with a helpful DependencyError instead of a bare
ImportError.

"""

from __future__ import annotations

import importlib
import logging
from functools import wraps
from typing import Any, Callable, List, Tuple

from slatedown.exceptions import DependencyError
from slatedown.utils.packages import check_version_requirement

logger = logging.getLogger(__name__)


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    component_name : str
        Name of the component (e.g., "markdown parser"). Appears in error messages.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "mistune")
        - import_name: Module name for import statement (e.g., "mistune")
        - version_spec: Version requirement (e.g., ">=3.0.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("markdown parser", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(self, markdown):
        ...     import mistune
        ...     # parsing logic here

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                logger.debug("Dependency check failed for %s: missing=%s", component_name, missing)
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator
