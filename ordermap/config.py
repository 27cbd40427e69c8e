"""Configuration paths and settings for ordermap."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

BASE_DIR = Path(os.environ.get("ORDERMAP_HOME", str(Path.home() / ".ordermap"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

DATE_FORMAT = "%Y-%m-%d"

DEFAULT_CONFIG = {
    "mapping": {
        "require_items": True,
        "require_customer_name": False,
    },
    "output": {
        "indent": 2,
        "exclude": [],
    },
}


@dataclass
class MappingSettings:
    """Policy switches for the read-side mapper."""
    # Missing "items" raises MissingFieldError instead of mapping to [].
    require_items: bool = True
    # A customer with neither "name" nor "firstName"/"lastName" is an error.
    require_customer_name: bool = False


@dataclass
class OutputSettings:
    indent: int = 2
    exclude: List[str] = field(default_factory=list)


def ensure_base_dir() -> None:
    """Create the configuration directory if needed."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
