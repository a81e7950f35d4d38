"""User configuration (~/.config/uripick/config.toml).

tomlkit is used so that set_config round-trips the file with comments and
formatting intact.

Example config.toml:

    [protocols]
    mem = "mypkg.adapters.memory"
    s3 = "mypkg.adapters.s3:S3Adapter"
    _ = "mypkg.adapters.local"    # bare paths (no protocol)
"""

import importlib
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

PROTOCOLS_TABLE = "protocols"

# "_" can never be a URI scheme, so it stands for locations without one
NO_PROTOCOL_KEY = "_"


def warn(message: str) -> None:
    """Print a warning message to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


def config_dir() -> Path:
    """Return $XDG_CONFIG_HOME/uripick (~/.config/uripick by default)."""
    base = os.environ.get("XDG_CONFIG_HOME") or "~/.config"
    return Path(base).expanduser() / "uripick"


def adapters_dir() -> Path:
    """Return the drop-in adapters directory."""
    return config_dir() / "adapters"


def config_file() -> Path:
    return config_dir() / "config.toml"


def load_object(spec: str) -> Any:
    """Import an object from a "package.module" or "package.module:attr" spec."""
    module_name, _, attr_path = spec.strip().partition(":")
    if not module_name:
        raise ValueError(f"invalid import spec '{spec}'")

    obj: Any = importlib.import_module(module_name)
    for attr in filter(None, attr_path.split(".")):
        obj = getattr(obj, attr)
    return obj


def load_config() -> TOMLDocument:
    """Load config.toml, returning an empty document if missing or invalid."""
    path = config_file()
    if not path.exists():
        return tomlkit.document()

    try:
        return tomlkit.parse(path.read_text())
    except TOMLKitError as e:
        warn(f"ignoring invalid config file {path}: {e}")
        return tomlkit.document()


def get_config(key: str) -> Any:
    """Get a scalar config value by dotted key (e.g. "protocols.mem").

    Returns None for missing keys and for tables.
    """
    value: Any = load_config()
    for part in key.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]

    if isinstance(value, Mapping):
        return None
    if hasattr(value, "unwrap"):
        return value.unwrap()
    return value


def set_config(key: str, value: Any) -> None:
    """Set a config value by dotted key, creating tables as needed."""
    doc = load_config()
    parts = key.split(".")

    table: Any = doc
    for part in parts[:-1]:
        if part not in table:
            table[part] = tomlkit.table()
        table = table[part]
        if not isinstance(table, Mapping):
            raise ValueError(f"config key '{part}' in '{key}' is not a table")

    table[parts[-1]] = value

    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomlkit.dumps(doc))


def get_protocol_bindings(doc: Mapping[str, Any] | None = None) -> dict[str | None, str]:
    """Return the [protocols] table as {protocol: import spec}.

    The "_" key maps to None, the key used for bare paths. Non-string
    entries are skipped with a warning.
    """
    if doc is None:
        doc = load_config()

    table = doc.get(PROTOCOLS_TABLE)
    if not isinstance(table, Mapping):
        return {}

    bindings: dict[str | None, str] = {}
    for key, spec in table.items():
        if not isinstance(spec, str):
            warn(f"config [{PROTOCOLS_TABLE}] '{key}' must be an import string, got {type(spec).__name__}")
            continue
        protocol = None if key == NO_PROTOCOL_KEY else str(key)
        bindings[protocol] = str(spec)
    return bindings


def load_configured_adapters(bindings: Mapping[str | None, str]) -> dict[str | None, Any]:
    """Import the adapter bound to each protocol.

    Classes are instantiated with no arguments. Bindings that fail to import,
    or whose object has neither src nor dest, are skipped with a warning.
    """
    adapters: dict[str | None, Any] = {}
    for protocol, spec in bindings.items():
        label = NO_PROTOCOL_KEY if protocol is None else protocol
        try:
            adapter = load_object(spec)
            if isinstance(adapter, type):
                adapter = adapter()
        except Exception as e:
            warn(f"config protocol '{label}': failed to load '{spec}': {e}")
            continue

        if not any(callable(getattr(adapter, op, None)) for op in ("src", "dest")):
            warn(f"config protocol '{label}': '{spec}' has no 'src' or 'dest'")
            continue

        adapters[protocol] = adapter
    return adapters
