from collections import deque
from typing import Iterable, Set

from quoridor.models import Cell, Orientation, Wall

DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_move_blocked(src: Cell, dst: Cell, walls: Iterable[Wall]) -> bool:
    """Return True if a wall sits on the edge between two adjacent cells.

    A wall spans two cells, so each edge can be covered by a wall anchored
    on its own line or one step before it.
    """
    if src.row == dst.row:
        wall_col = min(src.col, dst.col)
        return any(
            w.orientation is Orientation.VERTICAL
            and w.col == wall_col
            and w.row in (src.row, src.row - 1)
            for w in walls
        )
    wall_row = min(src.row, dst.row)
    return any(
        w.orientation is Orientation.HORIZONTAL
        and w.row == wall_row
        and w.col in (src.col, src.col - 1)
        for w in walls
    )


def path_exists(start: Cell, destination_row: int, walls: Iterable[Wall]) -> bool:
    """Breadth-first search from ``start`` to any cell on ``destination_row``.

    Pawns are ignored, only walls cut the grid.
    """
    walls = tuple(walls)
    queue = deque([start])
    visited: Set[Cell] = {start}
    while queue:
        cell = queue.popleft()
        if cell.row == destination_row:
            return True
        for dr, dc in DIRECTIONS:
            nxt = cell.offset(dr, dc)
            if nxt in visited or not nxt.in_bounds():
                continue
            if is_move_blocked(cell, nxt, walls):
                continue
            visited.add(nxt)
            queue.append(nxt)
    return False

