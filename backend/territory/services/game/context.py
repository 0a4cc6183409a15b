import logging
import threading
import time

from .grid import GridStore
from .players import Leaderboard, PlayerRegistry
from .rounds import RoundController


def now_ms() -> int:
    return int(time.time() * 1000)


class GameContext:
    """All authoritative game state for one server process.

    Built by ``create_app`` and stored on ``app.extensions['territory']``.
    Every mutation (socket intents and timer callbacks alike) runs under
    ``lock``.
    """

    def __init__(self, config, broadcaster, scheduler, clock=now_ms, logger=None):
        self.lock = threading.RLock()
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.broadcaster = broadcaster
        self.scheduler = scheduler

        self.registry = PlayerRegistry()
        self.leaderboard = Leaderboard(self.registry, size=int(config.get('LEADERBOARD_SIZE', 10)))
        self.grid = GridStore(
            self.registry,
            clock,
            size=int(config.get('GRID_SIZE', 50)),
            cooldown_ms=int(config.get('CELL_COOLDOWN_MS', 5000)),
        )
        self.rounds = RoundController(
            self,
            duration_ms=int(config.get('ROUND_DURATION_MS', 600_000)),
            tick_interval_ms=int(config.get('ROUND_TICK_INTERVAL_MS', 5000)),
            victory_threshold=int(config.get('VICTORY_THRESHOLD', 1000)),
        )

    def shutdown(self):
        self.rounds.shutdown()
