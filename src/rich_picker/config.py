"""YAML-based configuration for rich_picker.

Reads ``~/.config/rich-picker/config.yaml`` (respecting ``XDG_CONFIG_HOME``)
and merges it over ``DEFAULT_CONFIG``. Every key is optional.

Example config.yaml:

    pagination:
      ratio: 0.25
      max_threshold: 8
    search:
      throttle: true
    view:
      max_visible_items: 15
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .pagination import PaginationConfig
from .themes import Theme

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "pagination": {
        "ratio": 0.2,
        "min_threshold": 1,
        "max_threshold": 5,
    },
    "search": {
        "filtering": True,
        "throttle": False,
        "throttle_delay": 0.3,
    },
    "view": {
        "max_visible_items": 12,
        "panel_width": 80,
    },
}


@dataclass
class PickerConfig:
    """Resolved configuration values."""

    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    filtering: bool = True
    throttle: bool = False
    throttle_delay: float = 0.3
    theme: Theme = field(default_factory=Theme)


def get_config_dir() -> Path:
    """Get the rich-picker config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "rich-picker"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_raw_config(path: Path | None = None) -> dict[str, Any]:
    """Load the merged config dict (defaults + file)."""
    path = path or get_config_path()
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), _read_yaml(path))


def load_config(path: Path | None = None) -> PickerConfig:
    """Load and resolve configuration.

    ``RICH_PICKER_MAX_VISIBLE`` overrides ``view.max_visible_items``.

    Raises:
        ValueError: If the pagination section holds invalid constants.
    """
    cfg = load_raw_config(path)
    pagination = cfg.get("pagination") or {}
    search = cfg.get("search") or {}
    view = cfg.get("view") or {}

    max_visible = _env_int(
        "RICH_PICKER_MAX_VISIBLE",
        int(view.get("max_visible_items", DEFAULT_CONFIG["view"]["max_visible_items"])),
    )

    return PickerConfig(
        pagination=PaginationConfig(
            ratio=float(pagination.get("ratio", 0.2)),
            min_threshold=int(pagination.get("min_threshold", 1)),
            max_threshold=int(pagination.get("max_threshold", 5)),
        ),
        filtering=bool(search.get("filtering", True)),
        throttle=bool(search.get("throttle", False)),
        throttle_delay=float(search.get("throttle_delay", 0.3)),
        theme=Theme(
            max_visible_items=max(1, max_visible),
            panel_width=int(view.get("panel_width", DEFAULT_CONFIG["view"]["panel_width"])),
        ),
    )
