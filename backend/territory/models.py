import random


PALETTE = [
    '#EF4444', '#3B82F6', '#10B981', '#F59E0B',
    '#8B5CF6', '#EC4899', '#14B8A6', '#F97316',
]


def generate_player_name():
    """Generate a throwaway display name; players never choose their own."""
    return f"Player{random.randint(0, 999)}"


class Player:
    def __init__(self, id, name, color, join_seq):
        self.id = id
        self.name = name
        self.color = color
        self.score = 0
        self.online = True
        # Monotonic join order, used to break leaderboard ties
        self.join_seq = join_seq

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'score': self.score,
            'online': self.online,
        }

    def __repr__(self):
        return f"<Player {self.id} {self.name} score={self.score}>"


class Cell:
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.owner_id = None
        self.captured_at = 0
        # Copied from the owner at claim time, not looked up live
        self.color = None

    def is_locked(self, now, cooldown_ms):
        return self.owner_id is not None and now - self.captured_at < cooldown_ms

    def cooldown_remaining(self, now, cooldown_ms):
        if self.owner_id is None:
            return 0
        return max(0, cooldown_ms - (now - self.captured_at))

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'ownerId': self.owner_id,
            'color': self.color,
            'capturedAt': self.captured_at,
        }

    def to_view(self, now, cooldown_ms):
        """Snapshot form with the derived lock fields computed at read time."""
        view = self.to_dict()
        view['locked'] = self.is_locked(now, cooldown_ms)
        view['cooldownRemaining'] = self.cooldown_remaining(now, cooldown_ms)
        return view
