#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/utils/escape.py
"""Markdown text escaping utilities.

Plain text runs only escape the handful of characters that carry meaning in
the mention, image, link and link-card syntax. Emphasis and code characters
are left alone; those constructs are produced structurally by mark rules.

"""

from __future__ import annotations

import re

from slatedown.constants import MARKDOWN_ESCAPE_CHARS

_UNESCAPE_PATTERN = re.compile(r"\\([" + re.escape("".join(MARKDOWN_ESCAPE_CHARS)) + r"])")


def escape_markdown(text: str) -> str:
    r"""Escape Markdown-significant characters in a plain text run.

    The characters ``\ @ ! [ ] %`` are each prefixed with a backslash. The
    backslash is handled first so that the escapes added for the other
    characters are not escaped again.

    Parameters
    ----------
    text : str
        Raw text

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("50% off [today]!")
        '50\\% off \\[today\\]\\!'

    """
    if not text:
        return text

    for char in MARKDOWN_ESCAPE_CHARS:
        text = text.replace(char, "\\" + char)
    return text


def unescape_markdown(text: str) -> str:
    r"""Reverse :func:`escape_markdown`.

    Only backslash sequences produced by :func:`escape_markdown` are removed.

        >>> unescape_markdown("50\\% off")
        '50% off'

    """
    if not text:
        return text
    return _UNESCAPE_PATTERN.sub(r"\1", text)
