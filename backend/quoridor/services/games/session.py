import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Set

from quoridor.errors import ResourceError, ValidationError
from quoridor.models import (
    Action,
    Cell,
    GameState,
    MoveAction,
    Participant,
    PlaceWallAction,
    Player,
)
from quoridor.services.games.moves import legal_destinations
from quoridor.services.games.walls import validate_placement

# Seat order follows join order: top, bottom, left, right edges
SEAT_STARTS = (Cell(0, 4), Cell(8, 4), Cell(4, 0), Cell(4, 8))
SEAT_DESTINATIONS = (8, 0, 8, 0)
MAX_SEATS = len(SEAT_STARTS)


def wall_allowance(player_count: int) -> int:
    return 10 if player_count < 4 else 5


class SessionStatus(str, Enum):
    OPEN = 'open'
    IN_PROGRESS = 'in_progress'
    FINISHED = 'finished'


@dataclass
class ActionOutcome:
    """What an accepted action did, for the broadcast layer to announce."""

    kind: str
    state: dict
    winner: Optional[dict] = None

    @property
    def finished(self) -> bool:
        return self.winner is not None


class GameSession:
    """Authoritative game for one room.

    Not thread-safe on its own; the owning room serializes calls.
    """

    def __init__(self):
        self.status = SessionStatus.OPEN
        self.state: Optional[GameState] = None
        self.winner: Optional[Player] = None

    def start(self, participants: Sequence[Participant], rng=random, min_players: int = 2) -> GameState:
        if self.status is not SessionStatus.OPEN:
            raise ResourceError('The game has already started')
        count = len(participants)
        if count < min_players:
            raise ResourceError(f'At least {min_players} players are needed to start the game')
        if count > MAX_SEATS:
            raise ResourceError(f'At most {MAX_SEATS} players can take a seat')

        walls = wall_allowance(count)
        players: List[Player] = []
        for seat, participant in enumerate(participants):
            start = SEAT_STARTS[seat]
            players.append(Player(
                id=participant.id,
                nickname=participant.nickname,
                row=start.row,
                col=start.col,
                walls_left=walls,
                destination=SEAT_DESTINATIONS[seat],
            ))

        self.state = GameState(players=players, turn_index=rng.randrange(count))
        self.status = SessionStatus.IN_PROGRESS
        return self.state

    def _require_in_progress(self) -> GameState:
        if self.status is SessionStatus.FINISHED:
            raise ValidationError('The game is over')
        if self.status is not SessionStatus.IN_PROGRESS or self.state is None:
            raise ResourceError('The game has not started')
        return self.state

    def legal_moves(self, actor_id: str) -> Set[Cell]:
        state = self._require_in_progress()
        player = state.player_by_id(actor_id)
        if player is None:
            raise ValidationError('You are not playing in this game')
        return legal_destinations(player, state)

    def apply(self, actor_id: str, action: Action) -> ActionOutcome:
        """Validate and apply one action from ``actor_id``.

        Raises ``ValidationError`` without touching any state when the action
        is out of turn or illegal.
        """
        state = self._require_in_progress()
        player = state.current_player
        if player.id != actor_id:
            raise ValidationError('It is not your turn')

        if isinstance(action, MoveAction):
            if action.target not in legal_destinations(player, state):
                raise ValidationError('That move is not allowed')
            player.row, player.col = action.target.row, action.target.col
            if player.row == player.destination:
                self.status = SessionStatus.FINISHED
                self.winner = player
                return ActionOutcome(kind=action.type, state=state.to_dict(), winner=player.to_dict())
        elif isinstance(action, PlaceWallAction):
            if player.walls_left <= 0:
                raise ValidationError('You have no walls left')
            if not validate_placement(action.wall, state):
                raise ValidationError('A wall cannot be placed there')
            state.walls.append(action.wall)
            player.walls_left -= 1
        else:
            raise ValidationError('Unknown action')

        state.turn_index = (state.turn_index + 1) % len(state.players)
        return ActionOutcome(kind=action.type, state=state.to_dict())
