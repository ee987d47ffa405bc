from typing import Callable, Optional, Set, Tuple


class RoomTaskScheduler:
    """Runs deferred per-room tasks such as hiding a mismatched pair.

    - Ensures a single pending task per (room id, room token), so a room
      recreated under the same id never waits on its predecessor's timer
    - Runs as a Socket.IO background task (green thread or thread,
      whatever async mode the server uses)
    - In TESTING mode the task runs inline unless ENABLE_SCHEDULER_IN_TESTS is set
    - The callback must re-fetch its room; it is not handed a Room reference
    """

    def __init__(self, app, socketio):
        self.app = app
        self.socketio = socketio
        self._pending: Set[Tuple[str, Optional[str]]] = set()

    def is_pending(self, room_id, token=None) -> bool:
        return (room_id, token) in self._pending

    def schedule(self, room_id: str, delay: float, callback: Callable[[], None], token=None) -> bool:
        app = self.app
        key = (room_id, token)
        if key in self._pending:
            app.logger.info(f"[timer-skip] room={room_id} token={token} already scheduled")
            return False
        self._pending.add(key)
        app.logger.info(f"[timer-set] room={room_id} token={token} delay={delay}s")

        def _worker():
            self.socketio.sleep(delay)
            with app.app_context():
                self._pending.discard(key)
                app.logger.info(f"[timer-fire] room={room_id} token={token}")
                callback()

        if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            _worker()
        else:
            self.socketio.start_background_task(_worker)
        return True
