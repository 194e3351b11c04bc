import time

from quoridor import socketio
from quoridor.broadcaster import announce_room_closed
from quoridor.services.rooms import Room


def schedule_room_teardown(app, code: str, room: Room) -> None:
    """Remove a finished room after GAME_OVER_TEARDOWN_SEC seconds.

    - No-ops in TESTING mode unless ENABLE_TEARDOWN_IN_TESTS is set, in
      which case the worker runs inline
    - Only the exact room that finished is removed; if it is already gone,
      or the code now belongs to a new room, nothing happens
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_TEARDOWN_IN_TESTS'):
        return

    delay = int(app.config.get('GAME_OVER_TEARDOWN_SEC', 10))
    deadline = time.time() + delay
    app.logger.info(f"[teardown-set] room={code} delay={delay}s")

    def _worker(expected_code: str, expected_room: Room, until: float):
        sleep_for = max(0.0, until - time.time())
        if sleep_for:
            time.sleep(sleep_for)
        with app.app_context():
            directory = app.extensions['rooms']
            if not directory.discard(expected_code, expected_room):
                app.logger.info(f"[teardown-skip] room={expected_code} already gone")
                return
            app.logger.info(f"[teardown-fire] room={expected_code} removed")
            announce_room_closed(expected_code)

    if app.config.get('TESTING'):
        _worker(code, room, deadline)
    else:
        socketio.start_background_task(_worker, code, room, deadline)
