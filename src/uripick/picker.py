"""Adapter picker: routes src/dest requests to adapters by protocol."""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from uripick.location import parse_location
from uripick.registry import AdapterRegistry
from uripick.streams import close_stream, merge_streams

if TYPE_CHECKING:
    from uripick.protocols import Adapter


class AdapterPicker:
    """Dispatch stream requests to the adapter registered for each protocol.

    The picker keeps no state between calls besides its registry, so every
    ``src``/``dest`` call sees the registrations current at call time.

    Example:
        picker = AdapterPicker()
        picker.add("mem", MemoryAdapter())
        picker.add(None, LocalAdapter())
        for item in picker.src(["mem://a/*", "src/*.txt"]):
            ...
    """

    def __init__(self, registry: AdapterRegistry | None = None):
        self._registry = registry if registry is not None else AdapterRegistry()

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def _resolve(self, location: str) -> tuple["Adapter", str]:
        uri = parse_location(location)
        return self._registry.resolve(uri.protocol), uri.path

    def src(
        self,
        globs: str | Iterable[str],
        options: Mapping[str, Any] | None = None,
    ) -> Iterable[Any]:
        """Create a stream of items for globs using the matching adapters.

        A single string is handed straight to its adapter and the adapter's
        stream is returned as is. Any other iterable of strings is resolved
        in full before any adapter is called, so an unknown protocol anywhere
        fails the whole request; the adapters' streams are then merged.

        Raises:
            UnknownProtocolError: a location has no registered adapter.
        """
        if isinstance(globs, str):
            adapter, path = self._resolve(globs)
            return adapter.src(path, options)

        targets = [self._resolve(glob) for glob in globs]
        streams = []
        try:
            for adapter, path in targets:
                streams.append(adapter.src(path, options))
        except Exception:
            for stream in streams:
                close_stream(stream)
            raise

        return merge_streams(*streams)

    def dest(self, uri: str, options: Mapping[str, Any] | None = None) -> Iterable[Any]:
        """Create a stream writing items to uri using the matching adapter.

        Raises:
            UnknownProtocolError: uri has no registered adapter.
        """
        adapter, path = self._resolve(uri)
        return adapter.dest(path, options)

    def add(self, protocol: str | None, adapter: "Adapter") -> None:
        """Register adapter for protocol (None for bare paths)."""
        self._registry.add(protocol, adapter)

    def get(self, protocol: str | None) -> "Adapter | None":
        """Return the adapter registered for protocol, or None."""
        return self._registry.get(protocol)

    def remove(self, protocol: str | None) -> None:
        """Unregister protocol."""
        self._registry.remove(protocol)

    def clear(self) -> None:
        """Unregister every adapter."""
        self._registry.clear()
