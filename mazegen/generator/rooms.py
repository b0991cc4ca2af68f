import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .config import GeneratorConfig, GridContext

log = get_logger("mazegen.rooms")


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    width: int
    height: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def overlaps(self, other: "Room") -> bool:
        """Inclusive bounding-box test: touching edges count as overlap."""
        return not (
            self.x + self.width < other.x
            or self.x > other.x + other.width
            or self.y + self.height < other.y
            or self.y > other.y + other.height
        )

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def place_room(
    existing: Sequence[Room],
    grid: GridContext,
    config: Optional[GeneratorConfig] = None,
    rng=None,
) -> Optional[Room]:
    """Try to fit one randomly sized room beside ``existing``; None when attempts run out."""
    room, _attempts = _try_place(existing, grid, config or GeneratorConfig(), rng or random)
    return room


def place_rooms(room_count: int, grid: GridContext, config: GeneratorConfig, rng) -> Tuple[List[Room], int]:
    """Place up to ``room_count`` non-overlapping rooms.

    Returns (rooms, attempts_used). Slots whose attempts run out are dropped,
    so len(rooms) may be below room_count.
    """
    rooms: List[Room] = []
    attempts_used = 0
    for slot in range(room_count):
        room, attempts = _try_place(rooms, grid, config, rng)
        attempts_used += attempts
        if room is None:
            log.debug(event="room_dropped", slot=slot, attempts=attempts, placed=len(rooms))
            continue
        rooms.append(room)
    return rooms, attempts_used


def _try_place(existing: Sequence[Room], grid: GridContext, config: GeneratorConfig, rng) -> Tuple[Optional[Room], int]:
    width = rng.randint(config.min_size, config.max_size)
    height = rng.randint(config.min_size, config.max_size)
    margin = config.room_margin
    # trailing margin keeps one spare cell past the room for corridors
    max_x = grid.columns - width - 1 - margin
    max_y = grid.rows - height - 1 - margin
    if max_x < margin or max_y < margin:
        return None, 0
    for attempt in range(1, config.placement_attempt_cap + 1):
        x = rng.randint(margin, max_x)
        y = rng.randint(margin, max_y)
        candidate = Room(x, y, width, height)
        if not any(candidate.overlaps(r) for r in existing):
            return candidate, attempt
    return None, config.placement_attempt_cap


__all__ = ["Room", "place_room", "place_rooms"]
