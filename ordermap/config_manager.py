"""Configuration manager for ordermap using TOML files."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict

import toml

from . import config
from .config import DEFAULT_CONFIG, MappingSettings, OutputSettings

logger = logging.getLogger(__name__)

# Keys that may be set from the command line, with their value types.
SETTABLE_KEYS = {
    "mapping.require_items": bool,
    "mapping.require_customer_name": bool,
    "output.indent": int,
    "output.exclude": list,
}


def load_full_config() -> Dict[str, Any]:
    """Load the raw TOML config (all sections), or an empty dict."""
    if not config.CONFIG_FILE.exists():
        return {}
    try:
        with open(config.CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (toml.TomlDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config.CONFIG_FILE, exc)
        return {}


def _valid_value(kind: type, value: Any) -> bool:
    if kind is bool:
        return isinstance(value, bool)
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def load_config() -> Dict[str, Any]:
    """Load configuration merged over the defaults.

    Returns:
        Dict with ``mapping`` and ``output`` sections. Unknown sections in
        the file are preserved; missing or invalid keys fall back to
        defaults with a warning.
    """
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in load_full_config().items():
        if section not in merged:
            merged[section] = values
            continue
        if not isinstance(values, dict):
            logger.warning("Ignoring config section '%s': expected a table, got %r", section, values)
            continue
        for name, value in values.items():
            kind = SETTABLE_KEYS.get(f"{section}.{name}")
            if kind is not None and not _valid_value(kind, value):
                logger.warning("Ignoring invalid config value %s.%s = %r", section, name, value)
                continue
            merged[section][name] = value
    return merged


def _save_full_config(data: Dict[str, Any]) -> None:
    config.ensure_base_dir()
    with open(config.CONFIG_FILE, "w", encoding="utf-8") as f:
        toml.dump(data, f)


def save_config(section: str, values: Dict[str, Any]) -> None:
    """Update one section of the config file, preserving the others."""
    data = load_full_config()
    current = data.get(section)
    if not isinstance(current, dict):
        current = {}
    current.update(values)
    data[section] = current
    _save_full_config(data)


def set_value(key: str, raw: str) -> Any:
    """Parse ``raw`` for a dotted ``section.name`` key and save it.

    Returns:
        The parsed value that was written.

    Raises:
        KeyError: if the key is not settable.
        ValueError: if the value cannot be parsed for that key.
    """
    if key not in SETTABLE_KEYS:
        raise KeyError(key)
    kind = SETTABLE_KEYS[key]
    if kind is bool:
        lowered = raw.strip().lower()
        if lowered not in ("true", "false"):
            raise ValueError(f"Expected true or false, got {raw!r}")
        value: Any = lowered == "true"
    elif kind is int:
        value = int(raw)
        if value < 0:
            raise ValueError(f"Expected a non-negative integer, got {raw!r}")
    else:
        value = [part.strip() for part in raw.split(",") if part.strip()]
    section, name = key.split(".", 1)
    save_config(section, {name: value})
    return value


def clear_config() -> bool:
    """Delete the config file. Returns False if there was nothing to delete."""
    if not config.CONFIG_FILE.exists():
        return False
    config.CONFIG_FILE.unlink()
    return True


def load_mapping_settings() -> MappingSettings:
    section = load_config()["mapping"]
    return MappingSettings(
        require_items=section["require_items"],
        require_customer_name=section["require_customer_name"],
    )


def load_output_settings() -> OutputSettings:
    section = load_config()["output"]
    return OutputSettings(
        indent=section["indent"],
        exclude=list(section["exclude"]),
    )
