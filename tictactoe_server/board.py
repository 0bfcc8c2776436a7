"""
3x3 board value type.
Cells are addressed 0..8, row by row. None marks an empty cell.
"""
from enum import Enum
from typing import Optional, Tuple

BOARD_CELLS = 9

WIN_COMBINATIONS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
]


class Symbol(Enum):
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        return Symbol.O if self == Symbol.X else Symbol.X

    @classmethod
    def for_seat(cls, index: int) -> "Symbol":
        return (cls.X, cls.O)[index]


class Board:
    """Occupancy and win/draw computation. Not thread-safe on its own."""

    def __init__(self):
        self._cells = [None] * BOARD_CELLS

    def reset(self):
        for i in range(BOARD_CELLS):
            self._cells[i] = None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self._cells)

    def is_empty(self) -> bool:
        return all(cell is None for cell in self._cells)

    def is_free(self, pos) -> bool:
        # bool is an int subclass but never a cell index
        if not isinstance(pos, int) or isinstance(pos, bool):
            return False
        return 0 <= pos < BOARD_CELLS and self._cells[pos] is None

    def place(self, pos: int, symbol: Symbol):
        if not self.is_free(pos):
            raise ValueError(f"cell {pos!r} is not free")
        self._cells[pos] = symbol

    def winner(self) -> Optional[Symbol]:
        for a, b, c in WIN_COMBINATIONS:
            if self._cells[a] is not None and self._cells[a] == self._cells[b] == self._cells[c]:
                return self._cells[a]
        return None

    def cells(self) -> Tuple[Optional[Symbol], ...]:
        return tuple(self._cells)

    def __getitem__(self, pos: int) -> Optional[Symbol]:
        return self._cells[pos]

    def __repr__(self):
        marks = "".join(cell.value if cell else "." for cell in self._cells)
        return f"Board({marks!r})"
