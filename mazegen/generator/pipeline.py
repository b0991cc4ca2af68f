"""Generation pipeline.

``generate`` runs every phase to completion and returns one immutable
``GenerationResult``; nothing is kept between runs. Phases:

    * place rooms (bounded attempts per slot; slots may be dropped)
    * order room pairs into a spanning tree (nearest unconnected room first)
    * per pair: pick a wall point on each room, carve an L-shaped corridor
      between the cells just outside them, and keep a door at each end whose
      outward cell lies on that corridor

Outcomes that are expected under pressure (dropped rooms, pairs without a wall
point, rejected doors) are counted in ``metrics`` rather than raised.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .config import ConfigurationError, GeneratorConfig, GridContext, ensure_grid_fits
from .connectivity import Edge, connect_rooms, reachable_rooms
from .doors import Door, try_place_door
from .metrics import init_metrics
from .rooms import Room, place_rooms
from .tiles import CORRIDOR, DOOR, EMPTY, ROOM
from .tunnels import Corridor, carve_path
from .walls import select_wall_point

log = get_logger("mazegen.pipeline")


@dataclass(frozen=True)
class GenerationResult:
    grid: GridContext
    rooms: Tuple[Room, ...]
    corridors: Tuple[Corridor, ...]
    doors: Tuple[Door, ...]
    edges: Tuple[Edge, ...] = ()
    seed: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False)

    # Convenience outputs
    def to_ascii(self) -> str:
        cols, rows = self.grid.columns, self.grid.rows
        raster = [[EMPTY for _ in range(rows)] for _ in range(cols)]
        for corridor in self.corridors:
            for x, y in corridor:
                if self.grid.contains(x, y):
                    raster[x][y] = CORRIDOR
        for room in self.rooms:
            for x, y in room.cells():
                raster[x][y] = ROOM
        for door in self.doors:
            wp = door.wall_point
            raster[wp.x][wp.y] = DOOR
        return "\n".join("".join(raster[x][y] for x in range(cols)) for y in range(rows))

    def to_json(self, cell_size: Optional[int] = None) -> Dict[str, Any]:
        doors = []
        for door in self.doors:
            d = door.to_dict()
            if cell_size:
                d["pixels"] = door.to_pixels(cell_size)
            doors.append(d)
        index = {r: i for i, r in enumerate(self.rooms)}
        # Callers get their own copy; the result stays untouched
        metrics = dict(self.metrics)
        if "phase_ms" in metrics:
            metrics["phase_ms"] = dict(metrics["phase_ms"])
        return {
            "seed": self.seed,
            "columns": self.grid.columns,
            "rows": self.grid.rows,
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [[list(c) for c in corridor] for corridor in self.corridors],
            "doors": doors,
            "edges": [[index[a], index[b]] for a, b in self.edges],
            "metrics": metrics,
        }


def generate(
    grid: GridContext,
    room_count: int,
    rng=None,
    config: Optional[GeneratorConfig] = None,
    *,
    seed: Optional[int] = None,
    strict: bool = False,
) -> GenerationResult:
    """Build a fresh layout on ``grid`` with up to ``room_count`` rooms.

    ``rng`` is any object with ``randint`` (e.g. ``random.Random``). When it is
    omitted a ``random.Random(seed)`` is created, so passing only ``seed`` is
    enough for reproducible output. ``strict`` additionally rejects grids too
    small to ever hold a room instead of returning an empty layout.
    """
    if room_count < 0:
        raise ConfigurationError(f"room_count must be >= 0, got {room_count}")
    config = (config or GeneratorConfig()).validate()
    if strict:
        ensure_grid_fits(grid, config)
    if rng is None:
        rng = random.Random(seed)

    metrics: Dict[str, Any] = init_metrics()
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    rooms, attempts = _phase("place_rooms", place_rooms, room_count, grid, config, rng)
    metrics["rooms_requested"] = room_count
    metrics["rooms_placed"] = len(rooms)
    metrics["rooms_dropped"] = room_count - len(rooms)
    metrics["placement_attempts"] = attempts

    edges = _phase("connect_rooms", connect_rooms, rooms)
    if len(rooms) > 200:
        log.warn(event="connector_scaling_limit", rooms=len(rooms))

    corridors, doors, carved = _phase("carve_corridors", _carve_corridors, edges, config, metrics)
    metrics["connections"] = len(carved)
    metrics["unreachable_rooms"] = len(rooms) - len(reachable_rooms(rooms, carved))
    metrics["corridor_cells"] = sum(len(c) for c in corridors)
    metrics["doors_created"] = len(doors)
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    metrics["phase_ms"] = phase_times

    log.debug(
        event="maze_generated",
        seed=seed,
        columns=grid.columns,
        rows=grid.rows,
        rooms=len(rooms),
        corridors=len(corridors),
        doors=len(doors),
        runtime_ms=metrics["runtime_ms"],
    )
    return GenerationResult(
        grid=grid,
        rooms=tuple(rooms),
        corridors=tuple(corridors),
        doors=tuple(doors),
        edges=tuple(carved),
        seed=seed,
        metrics=metrics,
    )


def _carve_corridors(edges: List[Edge], config: GeneratorConfig, metrics: Dict[str, Any]):
    corridors: List[Corridor] = []
    doors: List[Door] = []
    carved: List[Edge] = []
    for src, dst in edges:
        p1 = select_wall_point(src, dst)
        p2 = select_wall_point(dst, src)
        if p1 is None or p2 is None:
            # Rooms under 3 cells on both axes have no door site; leave the pair unlinked.
            metrics["connections_skipped"] += 1
            log.debug(event="connection_skipped", src=src.to_dict(), dst=dst.to_dict())
            continue
        corridor = carve_path(p1, p2)
        corridors.append(corridor)
        carved.append((src, dst))
        for point in (p1, p2):
            door = try_place_door(point, corridor, config.door_width_fraction)
            if door is None:
                metrics["doors_rejected"] += 1
                log.debug(event="door_rejected", x=point.x, y=point.y, side=point.side.value)
                continue
            doors.append(door)
    return corridors, doors, carved


__all__ = ["GenerationResult", "generate"]
