"""
Authoritative game state shared by every connection handler.

All reads and writes go through one lock. Each public operation returns an
immutable Snapshot taken inside the same critical section, so callers can
broadcast a consistent view after the lock is released.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .board import Board, Symbol
from .errors import CellTaken, GameFull, NotYourTurn
from .models import Seat, SeatView

MAX_SEATS = 2


class Phase(Enum):
    WAITING = "waiting"
    ACTIVE = "active"


@dataclass(frozen=True)
class Snapshot:
    cells: Tuple[Optional[Symbol], ...]
    seats: Tuple[SeatView, ...]
    turn: Optional[str]
    phase: Phase
    # bumped by every state change, lets writers drop frames older than one already sent
    version: int = 0

    def seat(self, session_id: str) -> Optional[SeatView]:
        for seat in self.seats:
            if seat.session_id == session_id:
                return seat
        return None

    def scores(self):
        return {seat.symbol: seat.score for seat in self.seats}


@dataclass(frozen=True)
class Win:
    winner: SeatView
    loser: SeatView


@dataclass(frozen=True)
class Draw:
    pass


Outcome = Union[Win, Draw, None]


@dataclass(frozen=True)
class JoinResult:
    seat: SeatView
    game_ready: bool
    snapshot: Snapshot


@dataclass(frozen=True)
class LeaveResult:
    departed: SeatView
    remaining: Optional[SeatView]
    snapshot: Snapshot


@dataclass(frozen=True)
class MoveResult:
    snapshot: Snapshot
    outcome: Outcome = None


class GameState:
    """Board, seats and turn pointer behind a single exclusive lock."""

    def __init__(self):
        self.board = Board()
        self.seats: List[Seat] = []
        self.turn: Optional[str] = None
        self.version = 0
        self.lock = threading.Lock()

    @property
    def phase(self) -> Phase:
        with self.lock:
            return self._phase()

    def snapshot(self) -> Snapshot:
        with self.lock:
            return self._snapshot()

    def seat_for(self, session_id: str) -> Optional[SeatView]:
        with self.lock:
            seat = self._seat(session_id)
            return seat.view() if seat else None

    def join(self, session_id: str, conn=None, address=None) -> JoinResult:
        with self.lock:
            if len(self.seats) >= MAX_SEATS:
                raise GameFull("game is full")
            if self._seat(session_id) is not None:
                raise ValueError(f"session {session_id} is already seated")

            taken = {seat.index for seat in self.seats}
            index = min(i for i in range(MAX_SEATS) if i not in taken)
            seat = Seat(session_id, index, conn=conn, address=address)
            self.seats.append(seat)
            # newest joiner always holds the turn
            self.turn = session_id
            self.version += 1

            return JoinResult(seat.view(), len(self.seats) == MAX_SEATS, self._snapshot())

    def leave(self, session_id: str) -> Optional[LeaveResult]:
        with self.lock:
            seat = self._seat(session_id)
            if seat is None:
                return None

            self.seats.remove(seat)
            self.board.reset()
            remaining = None
            if self.seats:
                self.seats[0].reset_score()
                remaining = self.seats[0].view()
                self.turn = self.seats[0].session_id
            else:
                self.turn = None
            self.version += 1

            return LeaveResult(seat.view(), remaining, self._snapshot())

    def apply_move(self, session_id: str, pos: int) -> MoveResult:
        with self.lock:
            if self._phase() is not Phase.ACTIVE or session_id != self.turn:
                raise NotYourTurn("not your turn")
            if not self.board.is_free(pos):
                raise CellTaken(f"cell {pos} is not available")

            mover = self._seat(session_id)
            other = self._other(mover)
            self.board.place(pos, mover.symbol)
            self.turn = other.session_id

            outcome: Outcome = None
            symbol = self.board.winner()
            if symbol is not None:
                winner = self._seat_with(symbol)
                loser = self._seat_with(symbol.opposite())
                winner.increment_score()
                outcome = Win(winner.view(), loser.view())
            elif self.board.is_full():
                outcome = Draw()

            if outcome is not None:
                self.board.reset()
            self.version += 1

            return MoveResult(self._snapshot(), outcome)

    # callers must hold self.lock

    def _phase(self) -> Phase:
        return Phase.ACTIVE if len(self.seats) == MAX_SEATS else Phase.WAITING

    def _seat(self, session_id: str) -> Optional[Seat]:
        for seat in self.seats:
            if seat.session_id == session_id:
                return seat
        return None

    def _other(self, seat: Seat) -> Seat:
        return self.seats[1] if self.seats[0] is seat else self.seats[0]

    def _seat_with(self, symbol: Symbol) -> Seat:
        return next(seat for seat in self.seats if seat.symbol is symbol)

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            cells=self.board.cells(),
            seats=tuple(seat.view() for seat in self.seats),
            turn=self.turn,
            phase=self._phase(),
            version=self.version,
        )
