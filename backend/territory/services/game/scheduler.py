import itertools
import threading
from typing import Set


class Scheduler:
    """Delayed callbacks run on Socket.IO background tasks.

    ``schedule`` returns a token; ``cancel`` invalidates it so the sleeping
    worker exits without calling back. Workers are not interrupted, they just
    wake up and find their token gone.
    """

    def __init__(self, socketio, logger=None):
        self.socketio = socketio
        self.logger = logger
        self._tokens = itertools.count(1)
        self._live: Set[int] = set()
        self._lock = threading.Lock()

    def schedule(self, delay_ms: int, callback, *args) -> int:
        token = next(self._tokens)
        with self._lock:
            self._live.add(token)
        if self.logger:
            self.logger.debug(f"[timer-set] token={token} delay={delay_ms}ms callback={callback.__name__}")
        self.socketio.start_background_task(self._worker, token, max(0, delay_ms), callback, args)
        return token

    def cancel(self, token) -> None:
        if token is None:
            return
        with self._lock:
            self._live.discard(token)

    def _worker(self, token: int, delay_ms: int, callback, args) -> None:
        self.socketio.sleep(delay_ms / 1000.0)
        with self._lock:
            if token not in self._live:
                if self.logger:
                    self.logger.debug(f"[timer-skip] token={token} cancelled")
                return
            self._live.discard(token)
        if self.logger:
            self.logger.debug(f"[timer-fire] token={token} callback={callback.__name__}")
        callback(*args)
