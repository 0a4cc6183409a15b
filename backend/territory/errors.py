"""Rejections of a single client intent.

None of these are fatal to the process. The socket gateway catches
``GameError`` and replies to the originating session only.
"""


class GameError(Exception):
    """Base class for every intent rejection."""

    message = 'Request rejected'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class InvalidCoordinate(GameError):
    message = 'Invalid coordinates'


class OnCooldown(GameError):
    message = 'Cell on cooldown'

    def __init__(self, remaining_ms=0, message=None):
        self.remaining_ms = remaining_ms
        super().__init__(message)


class AlreadyOwned(GameError):
    message = 'Already your cell'


class UnknownPlayer(GameError):
    message = 'User not found'


class RoundNotActive(GameError):
    message = 'Round not active. Start a round first!'


class RoundAlreadyActive(GameError):
    message = 'Round already active'
