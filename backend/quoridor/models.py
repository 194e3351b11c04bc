from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from quoridor.errors import ValidationError

BOARD_SIZE = 9
# Wall anchors index the 8x8 grid of gaps between cells
WALL_ANCHOR_MAX = BOARD_SIZE - 2


class Orientation(str, Enum):
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


@dataclass(frozen=True)
class Cell:
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def offset(self, dr: int, dc: int) -> 'Cell':
        return Cell(self.row + dr, self.col + dc)

    def to_dict(self):
        return {'row': self.row, 'col': self.col}


@dataclass(frozen=True)
class Wall:
    row: int  # top-left anchor on the gap grid
    col: int
    orientation: Orientation

    def to_dict(self):
        return {'row': self.row, 'col': self.col, 'orientation': self.orientation.value}


@dataclass
class Participant:
    """A connection sitting in a room lobby."""

    id: str
    nickname: str

    def to_dict(self):
        return {'id': self.id, 'nickname': self.nickname}


@dataclass
class Player:
    id: str
    nickname: str
    row: int
    col: int
    walls_left: int
    destination: int  # row this pawn must reach

    @property
    def cell(self) -> Cell:
        return Cell(self.row, self.col)

    def to_dict(self):
        return {
            'id': self.id,
            'nickname': self.nickname,
            'row': self.row,
            'col': self.col,
            'wallsLeft': self.walls_left,
            'destination': self.destination,
        }


@dataclass
class GameState:
    players: List[Player]
    walls: List[Wall] = field(default_factory=list)
    turn_index: int = 0

    @property
    def current_player(self) -> Player:
        return self.players[self.turn_index]

    def occupant(self, cell: Cell) -> Optional[Player]:
        for p in self.players:
            if p.row == cell.row and p.col == cell.col:
                return p
        return None

    def player_by_id(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def to_dict(self):
        return {
            'walls': [w.to_dict() for w in self.walls],
            'players': [p.to_dict() for p in self.players],
            'turnIndex': self.turn_index,
        }


@dataclass(frozen=True)
class MoveAction:
    target: Cell
    type = 'move'


@dataclass(frozen=True)
class PlaceWallAction:
    wall: Wall
    type = 'place-wall'


Action = Union[MoveAction, PlaceWallAction]


def _coordinate(payload: dict, key: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; a JSON true is not a coordinate
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f'{key} must be an integer')
    return value


def parse_action(data) -> Action:
    """Build an action from its wire form.

    ``{"type": "move", "payload": {"row", "col"}}`` or
    ``{"type": "place-wall", "payload": {"row", "col", "orientation"}}``.
    Coordinates are only type-checked here; range checks belong to the
    legality engines so an off-board wall is rejected like any other
    illegal wall.
    """
    if not isinstance(data, dict):
        raise ValidationError('action must be an object')
    payload = data.get('payload')
    if not isinstance(payload, dict):
        raise ValidationError('action payload must be an object')

    action_type = data.get('type')
    if action_type == MoveAction.type:
        return MoveAction(Cell(_coordinate(payload, 'row'), _coordinate(payload, 'col')))
    if action_type == PlaceWallAction.type:
        try:
            orientation = Orientation(payload.get('orientation'))
        except ValueError:
            raise ValidationError('orientation must be horizontal or vertical') from None
        wall = Wall(_coordinate(payload, 'row'), _coordinate(payload, 'col'), orientation)
        return PlaceWallAction(wall)
    raise ValidationError(f'unknown action type: {action_type!r}')
