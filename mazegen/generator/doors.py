"""Door validation and placement.

A door is recorded at a wall point only when the cell just outside that wall
point is part of the corridor that was carved for it. A failed check is an
ordinary outcome (the door is simply omitted), never an error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .tunnels import Cell
from .walls import Side, WallPoint

# Door segment spans 20%..80% of the cell along the wall
DOOR_INSET = 0.2
DEFAULT_DOOR_WIDTH_FRACTION = 0.2

Point = Tuple[float, float]


@dataclass(frozen=True)
class Door:
    start: Point
    end: Point
    thickness: float
    wall_point: WallPoint

    def to_pixels(self, cell_size: int):
        """Scale the segment into canvas space; thickness becomes a line width in px."""
        (x1, y1), (x2, y2) = self.start, self.end
        return {
            "x1": x1 * cell_size,
            "y1": y1 * cell_size,
            "x2": x2 * cell_size,
            "y2": y2 * cell_size,
            "width": cell_size * self.thickness,
        }

    def to_dict(self):
        return {
            "start": list(self.start),
            "end": list(self.end),
            "thickness": self.thickness,
            "wall_point": self.wall_point.to_dict(),
        }


def door_segment(point: WallPoint) -> Tuple[Point, Point]:
    """Centerline of a door lying on the outer edge of ``point``'s cell."""
    if point.side.horizontal:
        y = point.y + (0 if point.side is Side.TOP else 1)
        return (point.x + DOOR_INSET, y), (point.x + 1 - DOOR_INSET, y)
    x = point.x + (0 if point.side is Side.LEFT else 1)
    return (x, point.y + DOOR_INSET), (x, point.y + 1 - DOOR_INSET)


def is_door_connected(point: WallPoint, corridor: Sequence[Cell]) -> bool:
    return point.outward_cell() in corridor


def try_place_door(
    point: WallPoint,
    corridor: Sequence[Cell],
    door_width_fraction: float = DEFAULT_DOOR_WIDTH_FRACTION,
) -> Optional[Door]:
    if not is_door_connected(point, corridor):
        return None
    start, end = door_segment(point)
    return Door(start, end, door_width_fraction, point)


__all__ = ["DOOR_INSET", "Door", "door_segment", "is_door_connected", "try_place_door"]
