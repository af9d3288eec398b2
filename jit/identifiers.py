"""Ticket reference → issue key normalization."""

import re

from jit.errors import ResolutionError

_URL_PREFIXES = ("http://", "https://")

# The key must end the path or be followed by another segment, so
# /browse/RW-1931x does not yield RW-1931.
_BROWSE_KEY = re.compile(r"/browse/([A-Z]+-[0-9]+)(?:/|$)")


def resolve_identifier(raw: str) -> str:
    """Return the issue key for a bare key or a browse URL.

    RW-1931                                      → RW-1931
    https://acme.atlassian.net/browse/RW-1931    → RW-1931
    https://acme.atlassian.net/browse/RW-1931/x  → RW-1931

    Anything that isn't a URL is passed through untouched; Jira rejects bad keys
    for us.
    """
    if not raw.startswith(_URL_PREFIXES):
        return raw
    match = _BROWSE_KEY.search(raw)
    if match is None:
        raise ResolutionError(raw)
    return match.group(1)
