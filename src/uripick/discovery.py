"""Adapter discovery: drop-in files, installed entry points and config bindings.

An adapter plugin is a module declaring:

    ADAPTER_INTERFACE_VERSION = 1
    NAME = "memory"
    PROTOCOLS = ["mem"]          # None registers the module for bare paths

    def src(path, options=None): ...
    def dest(path, options=None): ...

Only one of src/dest is required. Modules that fail to import or do not
match this shape are skipped with a warning.
"""

import importlib.metadata
import importlib.util
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import ModuleType

from uripick.config import adapters_dir, get_protocol_bindings, load_configured_adapters, warn
from uripick.picker import AdapterPicker
from uripick.registry import AdapterRegistry

# Current adapter interface version
ADAPTER_INTERFACE_VERSION = 1

ENTRY_POINT_GROUP = "uripick.adapters"

_DROPIN_PREFIX = "uripick_dropin_adapter_"


def _validate_adapter(module: ModuleType, origin: str) -> str | None:
    """Check a module against the adapter plugin contract.

    Returns an error message string if invalid, None if valid.
    """
    for attr, expected_type in (("ADAPTER_INTERFACE_VERSION", int), ("NAME", str), ("PROTOCOLS", list)):
        if not hasattr(module, attr):
            return f"{origin}: missing required attribute '{attr}'"
        value = getattr(module, attr)
        if not isinstance(value, expected_type):
            return f"{origin}: '{attr}' must be {expected_type.__name__}, got {type(value).__name__}"

    if module.ADAPTER_INTERFACE_VERSION != ADAPTER_INTERFACE_VERSION:
        return (
            f"{origin}: incompatible interface version {module.ADAPTER_INTERFACE_VERSION}, "
            f"expected {ADAPTER_INTERFACE_VERSION}"
        )

    if not module.PROTOCOLS:
        return f"{origin}: PROTOCOLS must not be empty"
    bad = [p for p in module.PROTOCOLS if p is not None and not isinstance(p, str)]
    if bad:
        return f"{origin}: PROTOCOLS entries must be str or None, got {type(bad[0]).__name__}"

    if not any(callable(getattr(module, op, None)) for op in ("src", "dest")):
        return f"{origin}: missing required function 'src' or 'dest'"

    return None


def _accept(module: ModuleType, origin: str) -> bool:
    error = _validate_adapter(module, origin)
    if error:
        warn(error)
        return False
    return True


def _import_dropins(path: Path) -> Iterator[ModuleType]:
    for py_file in sorted(path.glob("*.py")):
        if py_file.name.startswith("_"):
            continue

        spec = importlib.util.spec_from_file_location(f"{_DROPIN_PREFIX}{py_file.stem}", py_file)
        if spec is None or spec.loader is None:
            warn(f"could not load drop-in module {py_file.name}")
            continue
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            warn(f"failed to import drop-in module {py_file.name}: {e}")
            continue

        if _accept(module, f"drop-in {py_file.name}"):
            yield module


def load_dropin_adapters(path: Path) -> list[ModuleType]:
    """Import and validate the .py adapter files in path (skipping _*.py)."""
    if not path.is_dir():
        return []
    return list(_import_dropins(path))


def load_entrypoint_adapters() -> list[ModuleType]:
    """Load adapters installed under the 'uripick.adapters' entry point group."""
    adapters = []
    for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
        try:
            module = ep.load()
        except Exception as e:
            warn(f"failed to load entry point {ENTRY_POINT_GROUP} '{ep.name}': {e}")
            continue

        if _accept(module, f"entry point '{ep.name}'"):
            adapters.append(module)
    return adapters


def load_all_adapters(dropin_path: Path | None = None) -> list[ModuleType]:
    """Load adapters from all sources, deduplicated by NAME.

    Priority: drop-in > entry point (drop-ins can override installed adapters).
    The result is ordered from highest to lowest priority.
    """
    if dropin_path is None:
        dropin_path = adapters_dir()

    by_name: dict[str, ModuleType] = {}
    for adapter in load_dropin_adapters(dropin_path) + load_entrypoint_adapters():
        # Expected when a drop-in overrides an installed adapter
        by_name.setdefault(adapter.NAME, adapter)
    return list(by_name.values())


def register_adapters(registry: AdapterRegistry, adapters: Iterable[ModuleType]) -> None:
    """Register each adapter module under every protocol it declares.

    Later adapters win when two declare the same protocol.
    """
    for adapter in adapters:
        for protocol in adapter.PROTOCOLS:
            registry.add(protocol, adapter)


def build_picker(dropin_path: Path | None = None, *, use_config: bool = True) -> AdapterPicker:
    """Create an AdapterPicker populated from plugins and config.toml.

    Entry point adapters are registered first, then drop-ins, then protocol
    bindings from config.toml, so each layer overrides the previous one.
    """
    registry = AdapterRegistry()
    register_adapters(registry, reversed(load_all_adapters(dropin_path)))

    if use_config:
        for protocol, adapter in load_configured_adapters(get_protocol_bindings()).items():
            registry.add(protocol, adapter)

    return AdapterPicker(registry)
