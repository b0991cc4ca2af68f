"""Room connection ordering.

Grows a spanning tree from the first room by repeatedly linking the closest
unconnected room to any connected one (Prim-style, without a heap). Room counts
stay in the tens, so the O(n^3) scan is fine; past a few hundred rooms this is
the first thing to replace.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from .rooms import Room

Edge = Tuple[Room, Room]


def room_distance(a: Room, b: Room) -> float:
    """Rectilinear distance between room centers."""
    (ax, ay), (bx, by) = a.center, b.center
    return abs(ax - bx) + abs(ay - by)


def connect_rooms(rooms: Sequence[Room]) -> List[Edge]:
    """Return (from, to) edges of a spanning tree over ``rooms``, in growth order.

    Ties go to the first pair met, scanning connected rooms in the order they
    joined and unconnected rooms in input order.
    """
    if len(rooms) < 2:
        return []
    connected: List[Room] = [rooms[0]]
    unconnected: List[Room] = list(rooms[1:])
    edges: List[Edge] = []
    while unconnected:
        best = None
        for c in connected:
            for idx, u in enumerate(unconnected):
                d = room_distance(c, u)
                if best is None or d < best[0]:
                    best = (d, c, idx)
        _d, src, idx = best
        dst = unconnected.pop(idx)
        connected.append(dst)
        edges.append((src, dst))
    return edges


def reachable_rooms(rooms: Sequence[Room], edges: Sequence[Edge]) -> Set[int]:
    """Indices of rooms reachable from rooms[0] over ``edges`` (undirected)."""
    if not rooms:
        return set()
    index = {r: i for i, r in enumerate(rooms)}
    adjacency: Dict[int, List[int]] = {i: [] for i in range(len(rooms))}
    for a, b in edges:
        ia, ib = index[a], index[b]
        adjacency[ia].append(ib)
        adjacency[ib].append(ia)
    seen = {0}
    stack = [0]
    while stack:
        cur = stack.pop()
        for nxt in adjacency[cur]:
            if nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
    return seen


__all__ = ["Edge", "connect_rooms", "reachable_rooms", "room_distance"]
