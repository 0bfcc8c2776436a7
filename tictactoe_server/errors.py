"""Errors raised by the game core and the line protocol."""


class GameError(Exception):
    """Base class for rejected game operations. State is never changed."""


class GameFull(GameError):
    pass


class NotYourTurn(GameError):
    pass


class CellTaken(GameError):
    """Target cell is occupied or outside the board."""


class PeerDisconnected(ConnectionError):
    """The client closed its end of the stream."""


class ProtocolError(Exception):
    pass
