"""Public generator package interface.

    from mazegen.generator import GridContext, generate
    result = generate(GridContext(50, 67), room_count=5, seed=42)
"""

from .config import (
    CELL_SIZE_PRESETS,
    ConfigurationError,
    GeneratorConfig,
    GridContext,
    ensure_grid_fits,
    resolve_cell_size,
)
from .connectivity import connect_rooms, room_distance
from .doors import Door, try_place_door
from .pipeline import GenerationResult, generate
from .rooms import Room, place_room
from .tunnels import carve_path
from .walls import Side, WallPoint, select_wall_point

__all__ = [
    "CELL_SIZE_PRESETS",
    "ConfigurationError",
    "Door",
    "GenerationResult",
    "GeneratorConfig",
    "GridContext",
    "Room",
    "Side",
    "WallPoint",
    "carve_path",
    "connect_rooms",
    "ensure_grid_fits",
    "generate",
    "place_room",
    "resolve_cell_size",
    "room_distance",
    "select_wall_point",
    "try_place_door",
]
