"""
Custom exceptions.

The rules core itself never raises for bad input (it fails closed). These are raised by the
service and boundary layers when a rejected request has to be reported back to a caller.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game"""


class GameStateError(GameError):
    """Request does not fit the current state of the game (ex. game already finished)"""


class IllegalMoveError(GameError):
    """The move is not in the set of legal moves"""


class NotYourTurnError(GameError):
    """Selected a piece of the color that is not to move"""


class PromotionPendingError(GameStateError):
    """A pawn reached the last rank. Need a piece type before the game can continue"""


class InvalidRequestError(GameError):
    """Request could not be interpreted"""


class InvalidFENError(InvalidRequestError):
    """Board placement string could not be parsed"""


class RepositoryError(GameError):
    """Persistence layer could not find / store a record"""
