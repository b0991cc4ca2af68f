from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union

# Presentation defaults for canvas renderers. The generator itself never looks
# at pixels; hosts use these to derive a GridContext.
CELL_SIZE_PRESETS = {"small": 18, "medium": 12, "large": 8}
DEFAULT_CELL_SIZE = CELL_SIZE_PRESETS["medium"]
DEFAULT_VIEWPORT_WIDTH = 1000
DEFAULT_VIEWPORT_HEIGHT = 800
DEFAULT_ROOM_COUNT = 5


class ConfigurationError(ValueError):
    """Raised before generation when inputs can never yield a layout."""


@dataclass(frozen=True)
class GridContext:
    columns: int
    rows: int

    def __post_init__(self):
        if self.columns < 1 or self.rows < 1:
            raise ConfigurationError(f"grid must be at least 1x1, got {self.columns}x{self.rows}")

    @classmethod
    def from_viewport(cls, width_px: int, height_px: int, cell_size: int) -> "GridContext":
        """Whole cells that fit in a viewport: floor(px / cell)."""
        if cell_size < 1:
            raise ConfigurationError(f"cell_size must be positive, got {cell_size}")
        return cls(int(width_px) // cell_size, int(height_px) // cell_size)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows


@dataclass
class GeneratorConfig:
    min_size: int = 4
    max_size: int = 8
    room_margin: int = 1
    placement_attempt_cap: int = 100
    door_width_fraction: float = 0.2

    def validate(self) -> "GeneratorConfig":
        if self.min_size < 1:
            raise ConfigurationError(f"min_size must be >= 1, got {self.min_size}")
        if self.max_size < self.min_size:
            raise ConfigurationError(f"max_size ({self.max_size}) is below min_size ({self.min_size})")
        if self.room_margin < 0:
            raise ConfigurationError(f"room_margin must be >= 0, got {self.room_margin}")
        if self.placement_attempt_cap < 1:
            raise ConfigurationError(f"placement_attempt_cap must be >= 1, got {self.placement_attempt_cap}")
        if not 0 < self.door_width_fraction <= 1:
            raise ConfigurationError(f"door_width_fraction must be in (0, 1], got {self.door_width_fraction}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GeneratorConfig":
        """Build a config from MAZEGEN_* variables, falling back to defaults."""
        if environ is None:
            environ = os.environ
        env_map = {
            "MAZEGEN_MIN_ROOM_SIZE": ("min_size", int),
            "MAZEGEN_MAX_ROOM_SIZE": ("max_size", int),
            "MAZEGEN_ROOM_MARGIN": ("room_margin", int),
            "MAZEGEN_PLACEMENT_ATTEMPT_CAP": ("placement_attempt_cap", int),
            "MAZEGEN_DOOR_WIDTH_FRACTION": ("door_width_fraction", float),
        }
        values = {}
        for env_key, (attr, cast) in env_map.items():
            raw = environ.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[attr] = cast(raw)
            except ValueError:
                raise ConfigurationError(f"{env_key} must be {cast.__name__}, got {raw!r}") from None
        return cls(**values).validate()

    def smallest_grid(self) -> GridContext:
        """Smallest grid on which a min_size room still has a non-empty sampling range."""
        side = self.min_size + 2 * self.room_margin + 1
        return GridContext(side, side)


def resolve_cell_size(value: Union[str, int, None]) -> int:
    """Map a preset name ('small', 'medium', 'large') or a positive int to a cell size in px."""
    if value is None or value == "":
        return DEFAULT_CELL_SIZE
    if isinstance(value, str):
        key = value.strip().lower()
        if key in CELL_SIZE_PRESETS:
            return CELL_SIZE_PRESETS[key]
        if not key.isdigit():
            raise ConfigurationError(f"unknown size preset {value!r}; expected one of {sorted(CELL_SIZE_PRESETS)}")
        value = int(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"cell size must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"cell size must be positive, got {value}")
    return value


def ensure_grid_fits(grid: GridContext, config: GeneratorConfig) -> None:
    """Reject grids too small for even a minimum-size room with margins."""
    need = config.smallest_grid()
    if grid.columns < need.columns or grid.rows < need.rows:
        raise ConfigurationError(
            f"grid {grid.columns}x{grid.rows} cannot hold a {config.min_size}x{config.min_size} room "
            f"with margin {config.room_margin} (needs at least {need.columns}x{need.rows})"
        )


__all__ = [
    "CELL_SIZE_PRESETS",
    "DEFAULT_CELL_SIZE",
    "DEFAULT_ROOM_COUNT",
    "DEFAULT_VIEWPORT_HEIGHT",
    "DEFAULT_VIEWPORT_WIDTH",
    "ConfigurationError",
    "GeneratorConfig",
    "GridContext",
    "ensure_grid_fits",
    "resolve_cell_size",
]
