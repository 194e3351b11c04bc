from quoridor.models import Cell, GameState, Orientation, Player, Wall
from quoridor.services.games.moves import legal_destinations

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def _player(pid, row, col, destination=8):
    return Player(id=pid, nickname=pid, row=row, col=col, walls_left=10, destination=destination)


def _state(*players, walls=()):
    return GameState(players=list(players), walls=list(walls))


def test_open_board_offers_four_neighbours():
    a = _player('a', 4, 4)
    assert legal_destinations(a, _state(a)) == {Cell(3, 4), Cell(5, 4), Cell(4, 3), Cell(4, 5)}


def test_board_edges_trim_destinations():
    a = _player('a', 0, 0)
    assert legal_destinations(a, _state(a)) == {Cell(1, 0), Cell(0, 1)}


def test_walls_remove_blocked_steps():
    a = _player('a', 4, 4)
    state = _state(a, walls=[Wall(4, 4, H), Wall(3, 3, V)])
    # (4,4,H) blocks the step down, (3,3,V) blocks the step left
    assert legal_destinations(a, state) == {Cell(3, 4), Cell(4, 5)}


def test_straight_jump_takes_precedence():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    moves = legal_destinations(a, _state(a, b))
    assert Cell(5, 4) in moves
    assert Cell(4, 4) not in moves
    assert Cell(4, 3) not in moves
    assert Cell(4, 5) not in moves


def test_sidestep_when_jump_blocked_by_wall():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    # wall below the opponent
    moves = legal_destinations(a, _state(a, b, walls=[Wall(4, 4, H)]))
    assert Cell(5, 4) not in moves
    assert Cell(4, 4) not in moves
    assert {Cell(4, 3), Cell(4, 5)} <= moves


def test_sidestep_when_jump_runs_off_board():
    a = _player('a', 7, 4)
    b = _player('b', 8, 4, destination=0)
    moves = legal_destinations(a, _state(a, b))
    assert moves == {Cell(6, 4), Cell(7, 3), Cell(7, 5), Cell(8, 3), Cell(8, 5)}


def test_sidestep_respects_walls_beside_opponent():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    # (4,4,H) blocks the jump
    walls = [Wall(4, 4, H), Wall(3, 3, V)]
    moves = legal_destinations(a, _state(a, b, walls=walls))
    # (3,3,V) covers rows 3-4 between columns 3 and 4: blocks b's left side and a's left step
    assert Cell(4, 3) not in moves
    assert Cell(4, 5) in moves
    assert Cell(3, 3) not in moves


def test_horizontal_jump_sidesteps_go_up_and_down():
    a = _player('a', 4, 3)
    b = _player('b', 4, 4, destination=0)
    moves = legal_destinations(a, _state(a, b, walls=[Wall(3, 4, V)]))
    # (3,4,V) blocks (4,4)->(4,5)
    assert Cell(4, 5) not in moves
    assert {Cell(3, 4), Cell(5, 4)} <= moves


def test_wall_between_pawns_prevents_any_jump():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    moves = legal_destinations(a, _state(a, b, walls=[Wall(3, 4, H)]))
    assert not moves & {Cell(4, 4), Cell(5, 4), Cell(4, 3), Cell(4, 5)}


def test_jump_never_lands_on_a_third_pawn():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    c = _player('c', 5, 4, destination=0)
    moves = legal_destinations(a, _state(a, b, c))
    assert Cell(5, 4) not in moves
    assert {Cell(4, 3), Cell(4, 5)} <= moves


def test_sidestep_skips_occupied_cells():
    a = _player('a', 3, 4)
    b = _player('b', 4, 4, destination=0)
    c = _player('c', 4, 5, destination=0)
    moves = legal_destinations(a, _state(a, b, c, walls=[Wall(4, 4, H)]))
    assert Cell(4, 5) not in moves
    assert Cell(4, 3) in moves


def test_duplicate_destinations_collapse():
    # two opponents whose sidesteps share a cell
    a = _player('a', 4, 4)
    b = _player('b', 3, 4, destination=0)
    c = _player('c', 4, 3, destination=0)
    walls = [Wall(2, 4, H), Wall(3, 2, V)]
    moves = legal_destinations(a, _state(a, b, c, walls=walls))
    # (3,3) is reachable around both b and c but listed once
    assert moves == {Cell(3, 3), Cell(3, 5), Cell(5, 3), Cell(5, 4), Cell(4, 5)}
