"""
Plain-text line protocol.
Inbound: one move per line, a decimal cell index 0-8.
Outbound: human-readable text, optionally ANSI coloured.
"""
import re
import socket
import threading
from typing import Optional

from .board import BOARD_CELLS, Symbol
from .errors import PeerDisconnected, ProtocolError
from .game_state import Phase

ENC = "utf-8"
MAX_LINE_LENGTH = 1024

# any value outside the board, rejected by the cell check like an occupied cell
INVALID_POSITION = -1

# ASCII digits only, int() alone also takes other Unicode digits and underscores
MOVE_PATTERN = re.compile(r"[+-]?[0-9]+")


def decode_move(line: str) -> int:
    text = line.strip()
    if not MOVE_PATTERN.fullmatch(text):
        return INVALID_POSITION
    return int(text)


class LineSocket:
    """Line-buffered reader and lock-guarded writer over one client socket."""

    def __init__(self, sock: socket.socket, timeout: Optional[float] = None):
        self.sock = sock
        self.sock.settimeout(timeout)
        self.file = self.sock.makefile("rb")
        self.send_lock = threading.Lock()
        self.last_version = -1
        self.closed = False

    def recv_line(self) -> str:
        line = self.file.readline(MAX_LINE_LENGTH + 1)
        if not line:
            raise PeerDisconnected("connection closed")
        if len(line) > MAX_LINE_LENGTH and not line.endswith(b"\n"):
            raise ProtocolError(f"line longer than {MAX_LINE_LENGTH} bytes")
        return line.decode(ENC, errors="replace").rstrip("\r\n")

    def send_text(self, text: str):
        data = text.encode(ENC)
        with self.send_lock:
            self.sock.sendall(data)

    def send_frame(self, text: str, version: int) -> bool:
        """Send a state frame unless a newer one already went out on this socket."""
        data = text.encode(ENC)
        with self.send_lock:
            if version < self.last_version:
                return False
            self.sock.sendall(data)
            self.last_version = version
        return True

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # peer already gone
        self.file.close()
        self.sock.close()


class TextRenderer:
    """Turns game events and snapshots into the text sent to clients."""

    WAITING = "waiting for an opponent to join"
    YOUR_TURN = "your turn:"
    OPPONENT_TURN = "opponent's turn!"
    NOT_YOUR_TURN = "IT'S NOT YOUR TURN"
    CELL_TAKEN = "THIS PLACE IS ALREADY TAKEN"
    YOU_WIN = "YOU WIN"
    YOU_LOSE = "YOU LOSE"
    GAME_FULL = "Game is full, try again later!"
    OPPONENT_LEFT = "Your opponent left the game."

    # ANSI SGR codes
    BLUE = "34"
    CYAN = "36"
    BOLD_GREEN = "1;32"
    BOLD_RED = "1;31"
    BOLD_YELLOW = "1;33"

    SYMBOL_STYLES = {Symbol.X: BLUE, Symbol.O: CYAN}

    def __init__(self, color: bool = True):
        self.color = color

    def paint(self, text: str, style: str) -> str:
        if not self.color:
            return text
        return f"\033[{style}m{text}\033[0m"

    def symbol(self, symbol: Symbol) -> str:
        return self.paint(symbol.value, self.SYMBOL_STYLES[symbol])

    def cell(self, pos: int, value: Optional[Symbol]) -> str:
        # an empty cell shows its own index so players know what to type
        return str(pos) if value is None else self.symbol(value)

    def board(self, snapshot) -> str:
        if snapshot.phase is not Phase.ACTIVE:
            return self.waiting()
        rows = []
        for i in range(0, BOARD_CELLS, 3):
            rows.append(" | ".join(self.cell(p, snapshot.cells[p]) for p in range(i, i + 3)))
        seats = sorted(snapshot.seats, key=lambda s: s.index)
        score = " ".join(f"{self.symbol(s.symbol)}:{s.score}" for s in seats)
        return "\n".join(rows) + f"\nscore: {score}\n"

    def waiting(self) -> str:
        return self.WAITING + "\n"

    def your_turn(self) -> str:
        return self.paint(self.YOUR_TURN, self.BOLD_GREEN) + "\n"

    def opponent_turn(self) -> str:
        return self.paint(self.OPPONENT_TURN, self.BOLD_RED) + "\n"

    def turn_notice(self, snapshot, session_id: str) -> str:
        if snapshot.turn == session_id:
            return self.your_turn()
        return self.opponent_turn()

    def not_your_turn(self) -> str:
        return self.paint(self.NOT_YOUR_TURN, self.BOLD_YELLOW) + "\n"

    def cell_taken(self) -> str:
        return self.paint(self.CELL_TAKEN, self.BOLD_RED) + "\n"

    def you_win(self) -> str:
        return "\n" + self.paint(self.YOU_WIN, self.BOLD_GREEN) + "\n\n"

    def you_lose(self) -> str:
        return "\n" + self.paint(self.YOU_LOSE, self.BOLD_YELLOW) + "\n\n"

    def game_full(self) -> str:
        return self.paint(self.GAME_FULL, self.BOLD_RED) + "\n"

    def opponent_left(self) -> str:
        return f"\n{self.OPPONENT_LEFT}\nReset.\nWaiting for a new opponent.\n"
