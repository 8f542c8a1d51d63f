#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/slatedown/utils/urls.py
"""URL encoding for link, image and link-card targets."""

from __future__ import annotations

import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Characters encodeURI leaves untouched, plus "%" so existing escapes survive
_URI_SAFE_CHARS = ";,/?:@&=+$-_.!~*'()#%"


def encode(url: str) -> str:
    """Percent-encode a URL or path for use as a Markdown link target.

    Reserved URL characters and existing ``%`` escapes are kept as they are.
    Spaces, non-ASCII characters and other unsafe characters are encoded as
    UTF-8 percent escapes.

    Parameters
    ----------
    url : str
        Raw URL or path

    Returns
    -------
    str
        Encoded URL; an empty string for empty input

    Examples
    --------
        >>> encode("https://example.com/a b?q=ü")
        'https://example.com/a%20b?q=%C3%BC'

    """
    if not url:
        return ""

    encoded = quote(url, safe=_URI_SAFE_CHARS)
    if encoded != url:
        logger.debug("Encoded URL %r as %r", url, encoded)
    return encoded
