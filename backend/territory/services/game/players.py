import itertools
from typing import Dict, List, Optional

from territory.models import PALETTE, Player, generate_player_name


class PlayerRegistry:
    """Connected players keyed by Socket.IO session id.

    Disconnected players are kept (offline) until the next round starts so
    late leaderboard reads and score adjustments still resolve.
    """

    def __init__(self, palette=None, name_factory=generate_player_name):
        self.palette = list(palette or PALETTE)
        self.name_factory = name_factory
        self._players: Dict[str, Player] = {}
        # Never reset: reconnecting keeps cycling through the palette
        self._color_counter = itertools.count()
        self._join_counter = itertools.count()

    def register(self, connection_id) -> Player:
        color = self.palette[next(self._color_counter) % len(self.palette)]
        player = Player(connection_id, self.name_factory(), color, next(self._join_counter))
        self._players[connection_id] = player
        return player

    def mark_offline(self, connection_id) -> Optional[Player]:
        player = self._players.get(connection_id)
        if player is not None:
            player.online = False
        return player

    def get(self, connection_id) -> Optional[Player]:
        return self._players.get(connection_id)

    def all(self) -> List[Player]:
        return list(self._players.values())

    def online(self) -> List[Player]:
        return [p for p in self._players.values() if p.online]

    def reset_scores(self) -> None:
        for player in self._players.values():
            player.score = 0

    def prune_offline(self) -> int:
        """Drop offline players. Only safe once no cell references them."""
        stale = [pid for pid, p in self._players.items() if not p.online]
        for pid in stale:
            del self._players[pid]
        return len(stale)


class Leaderboard:
    def __init__(self, registry: PlayerRegistry, size: int = 10):
        self.registry = registry
        self.size = size

    def rank(self) -> List[Player]:
        ranked = sorted(self.registry.online(), key=lambda p: (-p.score, p.join_seq))
        return ranked[:self.size]

    def leader(self) -> Optional[Player]:
        ranked = self.rank()
        return ranked[0] if ranked else None

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self.rank()]
