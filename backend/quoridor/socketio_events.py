import functools

from flask import current_app, request
from flask_socketio import join_room

from quoridor import broadcaster
from quoridor.errors import GameError, ValidationError
from quoridor.models import parse_action
from quoridor.services.games.scheduler import schedule_room_teardown


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _directory():
    return current_app.extensions['rooms']


def _identities():
    return current_app.extensions['identities']


def _room_code(data):
    """Room codes arrive bare or as ``{"room_code": ...}``."""
    if isinstance(data, dict):
        return data.get('room_code') or data.get('code')
    return data


def _reports_errors(handler):
    """Turn a rejected request into an ``error-message`` for its sender only."""

    @functools.wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except GameError as exc:
            current_app.logger.info(
                f"[rejected] sid={_get_sid()} event={handler.__name__} kind={exc.kind} reason={exc}"
            )
            broadcaster.send_error(_get_sid(), exc)

    return wrapper


def handle_connect(auth=None):
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    broadcaster.announce_user_list(_identities().connect(sid))


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")

    def _notify(result):
        if result.destroyed:
            current_app.logger.info(f"[room-destroy] room={result.code} empty")
        else:
            broadcaster.announce_lobby(result.code, result.lobby)

    _directory().leave(sid, notify=_notify)
    broadcaster.announce_user_list(_identities().disconnect(sid))


def handle_set_nickname(nickname):
    sid = _get_sid()
    users = _identities().set_nickname(sid, nickname)
    broadcaster.announce_user_list(users)
    broadcaster.ack_nickname(sid, _identities().nickname(sid))


@_reports_errors
def handle_create_room(data):
    sid = _get_sid()

    def _notify(lobby):
        join_room(lobby['code'])
        broadcaster.ack_room_created(sid, lobby['code'])
        broadcaster.announce_lobby(lobby['code'], lobby)

    lobby = _directory().create(_room_code(data), _identities().participant(sid), notify=_notify)
    current_app.logger.info(f"[room-create] room={lobby['code']} host={sid}")


@_reports_errors
def handle_join_room(data):
    sid = _get_sid()

    def _notify(lobby):
        join_room(lobby['code'])
        broadcaster.announce_lobby(lobby['code'], lobby)
        broadcaster.ack_room_joined(sid, lobby['code'])

    lobby = _directory().join(_room_code(data), _identities().participant(sid), notify=_notify)
    current_app.logger.info(f"[room-join] room={lobby['code']} sid={sid} players={len(lobby['players'])}")


@_reports_errors
def handle_start_game(data):
    sid = _get_sid()

    def _notify(lobby):
        broadcaster.announce_game_started(lobby['code'], lobby['gameState'])
        broadcaster.announce_lobby(lobby['code'], lobby)

    lobby = _directory().start_game(_room_code(data), sid, notify=_notify)
    current_app.logger.info(
        f"[game-start] room={lobby['code']} players={len(lobby['players'])} first_turn={lobby['gameState']['turnIndex']}"
    )


@_reports_errors
def handle_game_action(data, action=None):
    sid = _get_sid()
    if action is None and isinstance(data, dict):
        action = data.get('action')
    parsed = parse_action(action)

    def _notify(result):
        broadcaster.announce_outcome(result.code, result.outcome)

    result = _directory().apply_action(_room_code(data), sid, parsed, notify=_notify)
    current_app.logger.info(f"[action] room={result.code} sid={sid} type={result.outcome.kind}")
    if result.outcome.finished:
        winner = result.outcome.winner
        current_app.logger.info(f"[game-over] room={result.code} winner={winner['id']} nickname={winner['nickname']}")
        schedule_room_teardown(current_app._get_current_object(), result.code, result.room)


@_reports_errors
def handle_request_legal_moves(data):
    sid = _get_sid()
    cells = _directory().legal_moves(_room_code(data), sid)
    broadcaster.send_legal_moves(sid, cells)


@_reports_errors
def handle_chat_message(text):
    if not isinstance(text, str) or not text.strip():
        raise ValidationError('Chat messages cannot be empty')
    limit = current_app.config.get('CHAT_MAX_LENGTH', 500)
    broadcaster.announce_chat(_identities().nickname(_get_sid()), text[:limit])


def register_socketio_handlers(socketio, namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('set-nickname', handle_set_nickname, namespace=namespace)
    socketio.on_event('set-identity', handle_set_nickname, namespace=namespace)
    socketio.on_event('create-room', handle_create_room, namespace=namespace)
    socketio.on_event('join-room', handle_join_room, namespace=namespace)
    socketio.on_event('start-game', handle_start_game, namespace=namespace)
    socketio.on_event('game-action', handle_game_action, namespace=namespace)
    socketio.on_event('request-legal-moves', handle_request_legal_moves, namespace=namespace)
    socketio.on_event('send-chat-message', handle_chat_message, namespace=namespace)
