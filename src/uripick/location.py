"""Location parsing: split a raw location string into protocol and path.

Examples:
    s3://bucket/key      -> Location("s3", "bucket/key")
    mem:/a               -> Location("mem", "a")
    file:///a/b          -> Location("file", "a/b")
    a/b/c                -> Location(None, "a/b/c")
    /abs/*.txt           -> Location(None, "abs/*.txt")
    //double/slash       -> Location(None, "/double/slash")
"""

import re
from dataclasses import dataclass

# Registry key for locations without a scheme (bare local paths)
NO_PROTOCOL = None

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." ) followed by ":"
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")


@dataclass(frozen=True)
class Location:
    """A parsed location: protocol (None when absent) and adapter path."""

    protocol: str | None
    path: str


def split_protocol(raw: str) -> tuple[str | None, str]:
    """Split raw into (protocol, remainder) without touching the remainder."""
    match = _SCHEME_RE.match(raw)
    if match is None:
        return NO_PROTOCOL, raw
    return match.group(1).lower(), raw[match.end():]


def parse_location(raw: str) -> Location:
    """Parse a location string into a Location.

    Never raises for string input; anything without a recognisable scheme
    becomes a bare path. At most one leading "/" is stripped from the path.
    """
    protocol, path = split_protocol(raw)

    # drop the authority marker of scheme://...
    if protocol is not NO_PROTOCOL and path.startswith("//"):
        path = path[2:]

    if path.startswith("/"):
        path = path[1:]

    return Location(protocol=protocol, path=path)
