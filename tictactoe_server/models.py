from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .board import Symbol


class Seat:
    def __init__(self, session_id: str, index: int, conn: Any = None,
                 address: Optional[Tuple[str, int]] = None):
        self.session_id = session_id
        self.index = index
        self.symbol = Symbol.for_seat(index)
        self.score = 0
        # opaque output sink, the game core never writes to it
        self.conn = conn
        self.address = address

    def increment_score(self):
        self.score += 1

    def reset_score(self):
        self.score = 0

    def view(self) -> "SeatView":
        return SeatView(self.session_id, self.index, self.symbol, self.score,
                        self.conn, self.address)

    def __repr__(self):
        return f"Seat({self.index}, {self.symbol.value}, score={self.score})"


@dataclass(frozen=True)
class SeatView:
    """Read-only copy of a seat taken inside a snapshot."""
    session_id: str
    index: int
    symbol: Symbol
    score: int
    conn: Any = field(default=None, compare=False, repr=False)
    address: Optional[Tuple[str, int]] = field(default=None, compare=False, repr=False)
