"""Outbound Socket.IO notifications.

The only place room and game state leaves the process. Callers hand over
snapshots taken under the room lock; nothing here reads the registries.
"""

from flask import current_app

from quoridor import socketio


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


def _emit(event, data, to=None):
    socketio.emit(event, data, to=to, namespace=_namespace())


# ---- unicast ----

def send_error(sid: str, error) -> None:
    _emit('error-message', error.to_dict(), to=sid)


def ack_nickname(sid: str, nickname: str) -> None:
    _emit('nickname-set', nickname, to=sid)


def ack_room_created(sid: str, code: str) -> None:
    _emit('room-created', code, to=sid)


def ack_room_joined(sid: str, code: str) -> None:
    _emit('joined-room', code, to=sid)


def send_legal_moves(sid: str, cells) -> None:
    ordered = sorted(cells, key=lambda c: (c.row, c.col))
    _emit('legal-moves', [c.to_dict() for c in ordered], to=sid)


# ---- room-wide ----

def announce_lobby(code: str, lobby: dict) -> None:
    _emit('update-lobby', lobby, to=code)


def announce_game_started(code: str, state: dict) -> None:
    _emit('game-started', state, to=code)


def announce_outcome(code: str, outcome) -> None:
    _emit('update-game-state', outcome.state, to=code)
    if outcome.finished:
        _emit('game-over', outcome.winner, to=code)


def announce_room_closed(code: str) -> None:
    _emit('room-closed', {'code': code}, to=code)
    socketio.close_room(code, namespace=_namespace())


# ---- everybody connected ----

def announce_user_list(users) -> None:
    _emit('update-user-list', users)


def announce_chat(nickname: str, text: str) -> None:
    _emit('chat-message', {'nickname': nickname, 'text': text})
