#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the slatedown library.

This module defines specialized exception classes for the error conditions
that can occur while serializing document trees to Markdown or parsing
Markdown back into a tree.

Exception Hierarchy
-------------------
- SlatedownError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for serializer or parser)

  - ParsingError (Markdown or JSON input that cannot become a document)

  - RenderingError (output generation failures)
    - UnhandledNodeTypeError (strict mode: no rule accepted a node)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations


class SlatedownError(Exception):
    """Base exception class for all slatedown-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(SlatedownError):
    """Exception raised for invalid input parameters, options or rules.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the parameter that failed validation
    parameter_value : Any, optional
        The invalid value that was provided

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: object = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is passed.

    Parameters
    ----------
    component_name : str
        Name of the component that received the options ("serializer", "parser")
    expected_type : type
        The options class the component expects
    received_type : type
        The class that was actually passed

    """

    def __init__(self, component_name: str, expected_type: type, received_type: type):
        """Initialize with the expected and received option classes."""
        message = (
            f"Invalid options type for {component_name}: "
            f"expected {expected_type.__name__}, got {received_type.__name__}"
        )
        super().__init__(message, parameter_name="options")
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(SlatedownError):
    """Exception raised when input cannot be turned into a document tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Stage that failed (e.g. "markdown", "json")
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(SlatedownError):
    """Exception raised when a document cannot be rendered to Markdown."""


class UnhandledNodeTypeError(RenderingError):
    """Exception raised in strict mode when no rule accepts a node.

    Parameters
    ----------
    kind : str
        Node kind ("block", "inline", "mark", "string")
    node_type : str or None
        The node's type tag, if it has one

    """

    def __init__(self, kind: str, node_type: str | None = None):
        """Initialize with the kind and type of the unhandled node."""
        if node_type:
            message = f"No serialization rule matched {kind} node of type '{node_type}'"
        else:
            message = f"No serialization rule matched {kind} node"
        super().__init__(message)
        self.kind = kind
        self.node_type = node_type


class DependencyError(SlatedownError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    component_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    original_import_error : ImportError, optional
        The import error raised while probing the first missing package

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        message_parts = []

        if missing_packages:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            message_parts.append(f"{component_name} requires the following packages: {pkg_list}")

        if version_mismatches:
            mismatch_str = ", ".join(
                f"'{name}' (requires {required}, but {installed} is installed)"
                for name, required, installed in version_mismatches
            )
            message_parts.append(f"{component_name} has version mismatches: {mismatch_str}")

        message = "\n".join(message_parts)

        if not install_command:
            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                install_command = "pip install " + " ".join(f"'{name}{spec}'" for name, spec in all_packages)
        if install_command:
            message += f"\nInstall with: {install_command}"

        super().__init__(message, original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
        self.original_import_error = original_import_error
