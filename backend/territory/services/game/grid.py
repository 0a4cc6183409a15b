from typing import Dict, List, Optional, Tuple

from territory.errors import AlreadyOwned, InvalidCoordinate, OnCooldown, UnknownPlayer
from territory.models import Cell


def coerce_coordinate(value, size: int) -> int:
    """Return ``value`` as an int in [0, size) or raise InvalidCoordinate.

    Integral floats (``3.0``) are accepted since JSON clients cannot always
    tell them apart; fractions, bools, strings and None are not.
    """
    if isinstance(value, bool):
        raise InvalidCoordinate()
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidCoordinate()
        value = int(value)
    if not isinstance(value, int):
        raise InvalidCoordinate()
    if not 0 <= value < size:
        raise InvalidCoordinate()
    return value


class GridStore:
    """Ownership table for the square board.

    Callers hold the game lock around ``initialize`` and ``claim``; the store
    itself does no locking.
    """

    def __init__(self, registry, clock, size: int = 50, cooldown_ms: int = 5000):
        self.registry = registry
        self.clock = clock
        self.size = size
        self.cooldown_ms = cooldown_ms
        self._cells: Dict[Tuple[int, int], Cell] = {}
        self.initialize()

    def initialize(self) -> None:
        cells = {}
        for x in range(self.size):
            for y in range(self.size):
                cells[(x, y)] = Cell(x, y)
        # Swap in one assignment so readers never see a half-built board
        self._cells = cells

    def get(self, x, y) -> Cell:
        x = coerce_coordinate(x, self.size)
        y = coerce_coordinate(y, self.size)
        return self._cells[(x, y)]

    def claim(self, player_id, x, y) -> Cell:
        cell = self.get(x, y)
        now = self.clock()

        if cell.is_locked(now, self.cooldown_ms):
            raise OnCooldown(cell.cooldown_remaining(now, self.cooldown_ms))

        if cell.owner_id is not None and cell.owner_id == player_id:
            raise AlreadyOwned()

        player = self.registry.get(player_id)
        if player is None or not player.online:
            raise UnknownPlayer()

        if cell.owner_id is not None:
            previous = self.registry.get(cell.owner_id)
            if previous is not None:
                previous.score = max(0, previous.score - 1)

        cell.owner_id = player.id
        cell.captured_at = now
        cell.color = player.color
        player.score += 1
        return cell

    def snapshot(self) -> List[dict]:
        now = self.clock()
        return [cell.to_view(now, self.cooldown_ms) for cell in self._cells.values()]

    def find(self, x, y) -> Optional[Cell]:
        try:
            return self.get(x, y)
        except InvalidCoordinate:
            return None
