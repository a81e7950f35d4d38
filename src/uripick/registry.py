"""Adapter registry: maps protocol names to adapters.

The registry is a plain object, not a module-level singleton. Share one
instance explicitly when several pickers should see the same adapters.
"""

from typing import TYPE_CHECKING

from uripick.errors import UnknownProtocolError

if TYPE_CHECKING:
    from uripick.protocols import Adapter


def _key(protocol: str | None) -> str | None:
    # URI schemes are case-insensitive and parse_location lower-cases them
    return protocol.lower() if isinstance(protocol, str) else protocol


class AdapterRegistry:
    """Mapping from protocol (or None for bare paths) to one adapter.

    Protocol names are case-insensitive: "S3" and "s3" are the same key.
    Later registrations replace earlier ones. Adapters are stored by
    reference and are not checked against the Adapter protocol; a missing
    operation only surfaces when it is called.
    """

    def __init__(self):
        self._adapters: dict[str | None, "Adapter"] = {}

    def add(self, protocol: str | None, adapter: "Adapter") -> None:
        """Register adapter for protocol, replacing any previous one."""
        self._adapters[_key(protocol)] = adapter

    def get(self, protocol: str | None) -> "Adapter | None":
        """Return the adapter for protocol, or None if unregistered."""
        return self._adapters.get(_key(protocol))

    def resolve(self, protocol: str | None) -> "Adapter":
        """Return the adapter for protocol.

        Raises:
            UnknownProtocolError: no adapter is registered for protocol.
        """
        adapter = self._adapters.get(_key(protocol))
        if adapter is None:
            raise UnknownProtocolError(protocol)
        return adapter

    def remove(self, protocol: str | None) -> None:
        """Unregister protocol. Unknown protocols are ignored."""
        self._adapters.pop(_key(protocol), None)

    def clear(self) -> None:
        """Unregister every adapter."""
        self._adapters.clear()

    def protocols(self) -> list[str | None]:
        """List registered protocols (lower-cased), the bare-path key (None) first."""
        return sorted(self._adapters, key=lambda p: (p is not None, p or ""))

    def __contains__(self, protocol: str | None) -> bool:
        return _key(protocol) in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def __repr__(self) -> str:
        return f"AdapterRegistry(protocols={self.protocols()!r})"
