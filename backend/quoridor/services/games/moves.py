from typing import Set

from quoridor.models import Cell, GameState, Player
from quoridor.services.games.board import DIRECTIONS, is_move_blocked


def _open_step(src: Cell, dst: Cell, state: GameState) -> bool:
    """A step onto ``dst`` that stays on the board, crosses no wall and lands on an empty cell."""
    return (
        dst.in_bounds()
        and not is_move_blocked(src, dst, state.walls)
        and state.occupant(dst) is None
    )


def legal_destinations(player: Player, state: GameState) -> Set[Cell]:
    """Every cell ``player`` may move its pawn to this turn.

    Facing an adjacent pawn, the straight jump over it takes precedence;
    only when that is blocked (board edge, wall or another pawn) are the two
    cells beside the jumped pawn offered instead.
    """
    origin = player.cell
    moves: Set[Cell] = set()

    for dr, dc in DIRECTIONS:
        step = origin.offset(dr, dc)
        if not step.in_bounds() or is_move_blocked(origin, step, state.walls):
            continue

        if state.occupant(step) is None:
            moves.add(step)
            continue

        jump = step.offset(dr, dc)
        if _open_step(step, jump, state):
            moves.add(jump)
            continue

        # sidestep around the opponent, perpendicular to the jump direction
        sides = ((0, -1), (0, 1)) if dc == 0 else ((-1, 0), (1, 0))
        for sr, sc in sides:
            side = step.offset(sr, sc)
            if _open_step(step, side, state):
                moves.add(side)

    return moves
