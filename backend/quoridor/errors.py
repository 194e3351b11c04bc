"""Errors surfaced to a single participant as ``error-message`` events.

None of these end a connection or touch room state: handlers catch
``GameError`` and report it back to whoever sent the request.
"""


class GameError(Exception):
    kind = 'error'

    def to_dict(self):
        return {'kind': self.kind, 'message': str(self)}


class ValidationError(GameError):
    """Illegal move, illegal wall, out-of-turn action or malformed payload."""

    kind = 'validation'


class ResourceError(GameError):
    """Unknown or duplicate room code, full room, non-host start and the like."""

    kind = 'resource'
