import threading
import time
from typing import Callable, Dict, Optional


class RoundTransitionScheduler:
    """Arms one-shot delayed actions, at most one pending per room code.

    `spawn` starts a background task (normally `socketio.start_background_task`)
    and `sleep` must cooperate with the Socket.IO async mode
    (normally `socketio.sleep`). Both are injectable so tests can run timers
    without waiting.
    """

    def __init__(self, spawn: Callable, sleep: Callable[[float], None] = time.sleep, logger=None):
        self._spawn = spawn
        self._sleep = sleep
        self._logger = logger
        self._pending: Dict[str, object] = {}
        # Workers claim tokens on background threads while events cancel them
        self._lock = threading.Lock()

    def pending(self, room_code: str) -> bool:
        with self._lock:
            return room_code in self._pending

    def schedule(self, room_code: str, delay: float, action: Callable[[], None]) -> object:
        """Run `action` after `delay` seconds unless cancelled or superseded first.

        The action receives no room handle; it must look the room up again
        when it fires.
        """
        token = object()
        with self._lock:
            self._pending[room_code] = token
        if self._logger:
            self._logger.info(f"[timer-set] room={room_code} delay={delay}s")
        self._spawn(self._worker, room_code, token, delay, action)
        return token

    def cancel(self, room_code: str) -> bool:
        with self._lock:
            cancelled = self._pending.pop(room_code, None) is not None
        if cancelled and self._logger:
            self._logger.info(f"[timer-cancel] room={room_code}")
        return cancelled

    def _claim(self, room_code: str, token: object) -> bool:
        with self._lock:
            if self._pending.get(room_code) is not token:
                return False
            del self._pending[room_code]
            return True

    def _worker(self, room_code: str, token: object, delay: float, action: Callable[[], None]) -> None:
        if delay > 0:
            self._sleep(delay)
        if not self._claim(room_code, token):
            if self._logger:
                self._logger.info(f"[timer-abort] room={room_code} cancelled or superseded")
            return
        if self._logger:
            self._logger.info(f"[timer-fire] room={room_code}")
        action()


def run_inline(fn: Callable, *args, **kwargs) -> Optional[object]:
    """Spawner that runs the task synchronously in the caller's thread."""
    return fn(*args, **kwargs)
