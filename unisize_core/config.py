from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any


CONFIG_TABLE = "unified_text_size"
DEFAULT_MIN_SIZE = 1
DEFAULT_MAX_SIZE = 250


class SizeBoundsError(ValueError):
    pass


@dataclass(frozen=True)
class SyncConfig:
    min_size: int = DEFAULT_MIN_SIZE
    max_size: int = DEFAULT_MAX_SIZE
    immediate_setup: bool = True

    def __post_init__(self) -> None:
        if self.min_size < 1:
            raise SizeBoundsError(f"min_size must be >= 1, got {self.min_size}")
        if self.max_size < self.min_size:
            raise SizeBoundsError(f"max_size ({self.max_size}) must be >= min_size ({self.min_size})")


def load_sync_config(path: str | Path) -> SyncConfig:
    """Read `[unified_text_size]` from a TOML file; absent keys use defaults."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return sync_config_from_mapping(raw.get(CONFIG_TABLE, {}))


def sync_config_from_mapping(table: Any) -> SyncConfig:
    if not isinstance(table, dict):
        raise ValueError(f"`{CONFIG_TABLE}` must be a table")
    return SyncConfig(
        min_size=_coerce_int(table.get("min_size", DEFAULT_MIN_SIZE), "min_size"),
        max_size=_coerce_int(table.get("max_size", DEFAULT_MAX_SIZE), "max_size"),
        immediate_setup=_coerce_bool(table.get("immediate_setup", True), "immediate_setup"),
    )


def _coerce_int(value: Any, field_name: str) -> int:
    # bool is an int subclass.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"`{field_name}` must be an integer")
    return value


def _coerce_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a boolean")
    return value
