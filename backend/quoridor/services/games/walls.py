from quoridor.models import WALL_ANCHOR_MAX, GameState, Orientation, Wall
from quoridor.services.games.board import path_exists


def _collides(candidate: Wall, existing: Wall) -> bool:
    same_anchor = candidate.row == existing.row and candidate.col == existing.col
    if same_anchor:
        # exact duplicate, or two walls crossing at one intersection
        return True
    if candidate.orientation is not existing.orientation:
        return False
    # collinear walls need a full gap between their anchors
    if candidate.orientation is Orientation.HORIZONTAL:
        return candidate.row == existing.row and abs(candidate.col - existing.col) < 2
    return candidate.col == existing.col and abs(candidate.row - existing.row) < 2


def validate_placement(candidate: Wall, state: GameState) -> bool:
    """Check whether ``candidate`` may be added to the board.

    Rejects out-of-range anchors, duplicates, crossings, collinear overlaps
    and any wall that would leave some player, not only the one placing it,
    without a route to its destination row. Never mutates ``state``.
    """
    if not (0 <= candidate.row <= WALL_ANCHOR_MAX and 0 <= candidate.col <= WALL_ANCHOR_MAX):
        return False

    if any(_collides(candidate, w) for w in state.walls):
        return False

    walls = [*state.walls, candidate]
    return all(path_exists(p.cell, p.destination, walls) for p in state.players)
