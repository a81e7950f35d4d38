"""Protocol definition for stream adapters."""

from typing import Any, Iterable, Mapping, Protocol


class Adapter(Protocol):
    """Protocol for stream adapters.

    Adapters are opaque backends: the picker hands them a path (the part of
    the location after the protocol) and returns whatever iterable they
    produce. An adapter only needs to implement the operations it will be
    asked for.
    """

    def src(self, path: str, options: Mapping[str, Any] | None = None) -> Iterable[Any]:
        """Return a stream of the items found at path."""
        ...

    def dest(self, path: str, options: Mapping[str, Any] | None = None) -> Iterable[Any]:
        """Return a stream that writes items to path."""
        ...
