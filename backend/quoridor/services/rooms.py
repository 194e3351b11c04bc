"""Room directory and connection identities.

Both registries are shared by every socket handler thread. Structural
changes go through the directory lock; anything touching one room's
players or game goes through that room's lock. Locks are always taken
directory first, then room.
"""

import random
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from quoridor.errors import ResourceError
from quoridor.models import Action, Cell, Participant
from quoridor.services.games.session import ActionOutcome, GameSession, SessionStatus

DEFAULT_NICKNAME = 'Anonymous'


def _notified(notify, result):
    # runs with the room lock held
    if notify is not None:
        notify(result)
    return result


def normalize_code(code) -> str:
    if not isinstance(code, str) or not code.strip():
        raise ResourceError('A room code is required')
    return code.strip().upper()


@dataclass
class Room:
    code: str
    participants: List[Participant]
    host_id: str
    session: GameSession = field(default_factory=GameSession)
    closed: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def to_dict(self):
        state = self.session.state
        return {
            'code': self.code,
            'players': [p.to_dict() for p in self.participants],
            'host': self.host_id,
            'status': self.session.status.value,
            'gameState': state.to_dict() if state is not None else None,
        }


@dataclass
class LeaveResult:
    code: str
    lobby: Optional[dict]  # None once the room has been destroyed

    @property
    def destroyed(self) -> bool:
        return self.lobby is None


@dataclass
class ActionResult:
    code: str
    room: Room
    outcome: ActionOutcome


class RoomDirectory:
    """Single owner of the room code to Room mapping."""

    def __init__(self, max_players: int = 4, min_players: int = 2):
        self.max_players = max_players
        self.min_players = min_players
        self._rooms: Dict[str, Room] = {}
        self._membership: Dict[str, str] = {}  # participant id -> room code
        self._lock = threading.RLock()

    @contextmanager
    def _locked(self, code):
        code = normalize_code(code)
        with self._lock:
            room = self._rooms.get(code)
        if room is None:
            raise ResourceError('That room does not exist')
        with room.lock:
            # torn down between the lookup and the lock
            if room.closed:
                raise ResourceError('That room does not exist')
            yield room

    def snapshot(self) -> List[dict]:
        with self._lock:
            rooms = list(self._rooms.values())
        summaries = []
        for room in rooms:
            with room.lock:
                if room.closed:
                    continue
                summaries.append({
                    'code': room.code,
                    'players': len(room.participants),
                    'status': room.session.status.value,
                })
        return summaries

    def create(self, code, participant: Participant, notify=None) -> dict:
        code = normalize_code(code)
        with self._lock:
            if participant.id in self._membership:
                raise ResourceError('You are already in a room')
            if code in self._rooms:
                raise ResourceError('That room code is already in use')
            room = Room(code=code, participants=[participant], host_id=participant.id)
            self._rooms[code] = room
            self._membership[participant.id] = code
            with room.lock:
                return _notified(notify, room.to_dict())

    def join(self, code, participant: Participant, notify=None) -> dict:
        code = normalize_code(code)
        with self._lock:
            if participant.id in self._membership:
                raise ResourceError('You are already in a room')
            room = self._rooms.get(code)
            if room is None:
                raise ResourceError('That room does not exist')
            with room.lock:
                if len(room.participants) >= self.max_players:
                    raise ResourceError('The room is full')
                if room.session.status is not SessionStatus.OPEN:
                    raise ResourceError('The game in this room has already started')
                room.participants.append(participant)
                self._membership[participant.id] = code
                return _notified(notify, room.to_dict())

    def leave(self, participant_id: str, notify=None) -> Optional[LeaveResult]:
        """Drop a participant from its room.

        Returns None when the participant is in no room, which is what a
        disconnect racing a teardown looks like.
        """
        with self._lock:
            code = self._membership.pop(participant_id, None)
            room = self._rooms.get(code) if code is not None else None
            if room is None:
                return None
            with room.lock:
                room.participants = [p for p in room.participants if p.id != participant_id]
                if not room.participants:
                    room.closed = True
                    del self._rooms[code]
                    return _notified(notify, LeaveResult(code=code, lobby=None))
                if room.host_id == participant_id:
                    # participants keep join order, so the earliest joiner inherits
                    room.host_id = room.participants[0].id
                return _notified(notify, LeaveResult(code=code, lobby=room.to_dict()))

    def discard(self, code: str, room: Room) -> bool:
        """Remove ``room`` if it is still the room registered under ``code``."""
        with self._lock:
            if self._rooms.get(code) is not room:
                return False
            with room.lock:
                room.closed = True
                del self._rooms[code]
                for p in room.participants:
                    if self._membership.get(p.id) == code:
                        del self._membership[p.id]
                return True

    def start_game(self, code, participant_id: str, rng=None, notify=None) -> dict:
        with self._locked(code) as room:
            if room.host_id != participant_id:
                raise ResourceError('Only the host can start the game')
            room.session.start(room.participants, rng=rng or random, min_players=self.min_players)
            return _notified(notify, room.to_dict())

    def apply_action(self, code, participant_id: str, action: Action, notify=None) -> ActionResult:
        with self._locked(code) as room:
            outcome = room.session.apply(participant_id, action)
            return _notified(notify, ActionResult(code=room.code, room=room, outcome=outcome))

    def legal_moves(self, code, participant_id: str) -> Set[Cell]:
        with self._locked(code) as room:
            return room.session.legal_moves(participant_id)

    def lobby(self, code) -> dict:
        with self._locked(code) as room:
            return room.to_dict()


class IdentityRegistry:
    """Connection id to display name, for every connected socket."""

    def __init__(self):
        self._names: Dict[str, str] = {}
        self._lock = threading.Lock()

    def connect(self, sid: str) -> List[dict]:
        with self._lock:
            self._names[sid] = DEFAULT_NICKNAME
            return self._listing()

    def disconnect(self, sid: str) -> List[dict]:
        with self._lock:
            self._names.pop(sid, None)
            return self._listing()

    def set_nickname(self, sid: str, nickname) -> List[dict]:
        name = nickname.strip() if isinstance(nickname, str) else ''
        with self._lock:
            self._names[sid] = name or DEFAULT_NICKNAME
            return self._listing()

    def nickname(self, sid: str) -> str:
        with self._lock:
            return self._names.get(sid, DEFAULT_NICKNAME)

    def participant(self, sid: str) -> Participant:
        return Participant(id=sid, nickname=self.nickname(sid))

    def _listing(self) -> List[dict]:
        return [{'id': sid, 'nickname': name} for sid, name in self._names.items()]
