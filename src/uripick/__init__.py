"""uripick - route stream requests to adapters by URI protocol.

Public API re-exports for programmatic access.
"""

from uripick.discovery import build_picker, load_all_adapters, register_adapters
from uripick.errors import UnknownProtocolError, UripickError
from uripick.location import NO_PROTOCOL, Location, parse_location
from uripick.picker import AdapterPicker
from uripick.protocols import Adapter
from uripick.registry import AdapterRegistry
from uripick.streams import MergedStream, merge_streams

__all__ = [
    # dispatch
    "AdapterPicker",
    "AdapterRegistry",
    "Adapter",
    "build_picker",
    # locations
    "Location",
    "NO_PROTOCOL",
    "parse_location",
    # streams
    "MergedStream",
    "merge_streams",
    # plugins
    "load_all_adapters",
    "register_adapters",
    # errors
    "UnknownProtocolError",
    "UripickError",
]
