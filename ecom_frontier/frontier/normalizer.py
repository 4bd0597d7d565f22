from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

_ALLOWED_SCHEMES = frozenset(("http", "https"))
_WHITESPACE_OR_CONTROL = re.compile(r"[\x00-\x20\x7f]")


def normalize_url(url: Optional[str], base: Optional[str] = None) -> Optional[str]:
    """
    Resolve ``url`` against ``base`` into a canonical absolute URL.

    Relative, protocol-relative and absolute links all resolve. The result has
    a lower-case scheme and host, a ``/`` path when empty and no fragment;
    path and query are left untouched.

    Returns ``None`` when the link cannot become a crawlable http(s) URL:
    blank input, embedded whitespace or control characters, other schemes
    (``javascript:``, ``mailto:`` ...), a missing host or an invalid port.
    """
    if not url:
        return None
    url = url.strip()
    if not url or _WHITESPACE_OR_CONTROL.search(url):
        return None

    try:
        absolute = urljoin(base, url) if base else url
        parts = urlsplit(absolute)
        # Accessing .port validates it; .hostname strips userinfo/brackets.
        parts.port
        hostname = parts.hostname
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if scheme not in _ALLOWED_SCHEMES or not hostname:
        return None

    netloc = parts.netloc
    userinfo, sep, hostport = netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{hostport.lower()}"
    path = parts.path or "/"
    return urlunsplit((scheme, netloc, path, parts.query, ""))
