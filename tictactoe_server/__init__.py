"""
Two-seat tic-tac-toe server over a plain-text TCP line protocol.
"""

from .board import Board, Symbol, BOARD_CELLS
from .errors import GameError, GameFull, NotYourTurn, CellTaken, PeerDisconnected, ProtocolError
from .game_state import GameState, Phase, Win, Draw
from .server import GameServer

__version__ = "1.0.0"
