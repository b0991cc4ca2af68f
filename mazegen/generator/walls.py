from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .rooms import Room


class Side(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def outward(self) -> Tuple[int, int]:
        return _OUTWARD[self]

    @property
    def horizontal(self) -> bool:
        """True for walls that run along the x axis."""
        return self in (Side.TOP, Side.BOTTOM)


_OUTWARD = {
    Side.TOP: (0, -1),
    Side.RIGHT: (1, 0),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
}


@dataclass(frozen=True)
class WallPoint:
    x: int
    y: int
    side: Side

    def outward_cell(self) -> Tuple[int, int]:
        """The cell just outside the wall, where a corridor starts or ends."""
        dx, dy = self.side.outward
        return (self.x + dx, self.y + dy)

    def to_dict(self):
        return {"x": self.x, "y": self.y, "side": self.side.value}


def wall_candidates(room: Room) -> Iterator[WallPoint]:
    """Interior wall cells (corners excluded) in Top, Bottom, Left, Right order."""
    top, bottom = room.y, room.y + room.height - 1
    left, right = room.x, room.x + room.width - 1
    for x in range(left + 1, right):
        yield WallPoint(x, top, Side.TOP)
    for x in range(left + 1, right):
        yield WallPoint(x, bottom, Side.BOTTOM)
    for y in range(top + 1, bottom):
        yield WallPoint(left, y, Side.LEFT)
    for y in range(top + 1, bottom):
        yield WallPoint(right, y, Side.RIGHT)


def select_wall_point(room: Room, target: Room) -> Optional[WallPoint]:
    """Pick the wall cell of ``room`` nearest (rectilinear) to ``target``'s center.

    Returns None when the room is too small to have any non-corner wall cell.
    """
    cx, cy = target.center
    best: Optional[WallPoint] = None
    best_dist = float("inf")
    for point in wall_candidates(room):
        d = abs(point.x - cx) + abs(point.y - cy)
        if d < best_dist:
            best_dist = d
            best = point
    return best


__all__ = ["Side", "WallPoint", "select_wall_point", "wall_candidates"]
