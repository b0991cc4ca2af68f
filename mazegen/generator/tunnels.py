from typing import List, Tuple

from .walls import WallPoint

Cell = Tuple[int, int]
Corridor = Tuple[Cell, ...]


def carve_path(a: WallPoint, b: WallPoint) -> Corridor:
    """L-shaped corridor between the cells just outside two wall points.

    Steps horizontally from a's outward cell to b's column, then vertically to
    b's row, then appends the end cell. Rooms and other corridors in the way
    are not avoided. Length is |dx| + |dy| + 1.
    """
    (x, y) = a.outward_cell()
    (gx, gy) = b.outward_cell()
    cells: List[Cell] = []
    while x != gx:
        cells.append((x, y))
        x += 1 if gx > x else -1
    while y != gy:
        cells.append((x, y))
        y += 1 if gy > y else -1
    cells.append((x, y))
    return tuple(cells)


__all__ = ["Cell", "Corridor", "carve_path"]
