"""Shared fixtures and in-memory adapters for uripick tests."""

import pytest

from uripick import AdapterPicker, AdapterRegistry


class MemoryAdapter:
    """Adapter backed by a dict of path -> list of items.

    Records every call as (operation, path, options) and collects items
    written through dest() under written[path].
    """

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.calls = []
        self.written = {}

    def src(self, path, options=None):
        self.calls.append(("src", path, options))
        return iter(list(self.files.get(path, [])))

    def dest(self, path, options=None):
        self.calls.append(("dest", path, options))
        sink = self.written.setdefault(path, [])
        return _Sink(sink)


class _Sink:
    """Minimal writable stream: send(item) appends to a list."""

    def __init__(self, sink):
        self.sink = sink

    def send(self, item):
        self.sink.append(item)

    def __iter__(self):
        return iter(self.sink)


class FailingAdapter:
    """Adapter whose src stream yields some items, then raises."""

    def __init__(self, items=(), error=None):
        self.items = list(items)
        self.error = error or RuntimeError("backend unavailable")

    def src(self, path, options=None):
        def stream():
            yield from self.items
            raise self.error

        return stream()


@pytest.fixture
def registry():
    return AdapterRegistry()


@pytest.fixture
def picker(registry):
    return AdapterPicker(registry)


@pytest.fixture
def mem():
    return MemoryAdapter(
        {
            "a": ["a1", "a2"],
            "b": ["b1", "b2", "b3"],
            "dir/*.txt": ["x.txt", "y.txt"],
        }
    )


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Set up a temporary config directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path / "uripick"
