"""
Board model for five-in-a-row.

Holds the canonical game state: a square grid of cells, the side to
move and the most recently placed stone. The state is a cheap value
object; search derives child states by copying, never by aliasing.
"""
import enum
from typing import Iterator, List, Optional, Tuple

import numpy as np

from gomoku import settings


class Piece(enum.IntEnum):
    """Cell contents and player identity."""
    EMPTY = 0
    CROSS = 1
    NOUGHT = 2

    @property
    def opponent(self) -> 'Piece':
        return other(self)


def other(piece: Piece) -> Piece:
    """Return the opposing side."""
    return Piece.NOUGHT if piece == Piece.CROSS else Piece.CROSS


# Line directions checked by winner(): vertical, horizontal and both diagonals
LINE_DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))


class BoardState:
    """
    Gomoku game state.

    Cells are indexed ``cells[x, y]`` and scanned row-major (x outer,
    y inner). CROSS always moves first.

    Attributes:
        size: Side length of the board.
        win_length: Number of consecutive stones needed to win.
        cells: ``(size, size)`` int8 array of Piece values.
        turn: Side to move next.
        last_move: ``(x, y)`` of the last placed stone, or None.

    Example:
        state = BoardState()
        state.place(7, 7, state.turn)
        for child in state.legal_move_states():
            ...
    """

    starting_side = Piece.CROSS

    def __init__(
        self,
        size: int = settings.BOARD_SIZE,
        win_length: int = settings.WIN_LENGTH,
    ):
        self.size = size
        self.win_length = win_length
        self.cells = np.zeros((size, size), dtype=np.int8)
        self.turn = self.starting_side
        self.last_move: Optional[Tuple[int, int]] = None

    def copy(self) -> 'BoardState':
        """Return an independent copy of this state."""
        clone = BoardState.__new__(BoardState)
        clone.size = self.size
        clone.win_length = self.win_length
        clone.cells = self.cells.copy()
        clone.turn = self.turn
        clone.last_move = self.last_move
        return clone

    @property
    def x(self) -> int:
        return self.last_move[0] if self.last_move else -1

    @property
    def y(self) -> int:
        return self.last_move[1] if self.last_move else -1

    def piece_at(self, x: int, y: int) -> Piece:
        return Piece(int(self.cells[x, y]))

    def last_player(self) -> Piece:
        return other(self.turn)

    def place(self, x: int, y: int, piece: Piece) -> bool:
        """
        Place a stone if the target cell is empty.

        Coordinates are expected to be inside the board; range checking
        belongs to the caller.

        Args:
            x: Row index.
            y: Column index.
            piece: The stone to place.

        Returns:
            True on success. False if the cell is occupied, in which
            case the state is left untouched.
        """
        if self.cells[x, y] != Piece.EMPTY:
            return False

        self.cells[x, y] = piece
        self.last_move = (x, y)
        self.turn = other(piece)
        return True

    def place_center(self) -> bool:
        """Place the side to move on the centre cell."""
        cx, cy = self.size // 2, self.size // 2
        return self.place(cx, cy, self.turn)

    def legal_move_states(self) -> Iterator['BoardState']:
        """
        Yield one child state per empty cell, in row-major order.

        Each child is an independent copy with the side to move placed
        on that cell. Calling this again starts a fresh sequence; the
        receiver is never modified.
        """
        piece = self.turn
        for x, y in self.empty_cells():
            child = self.copy()
            child.place(x, y, piece)
            yield child

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Coordinates of all empty cells in row-major order."""
        xs, ys = np.nonzero(self.cells == Piece.EMPTY)
        return list(zip(xs.tolist(), ys.tolist()))

    def stone_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_full(self) -> bool:
        return self.stone_count() == self.size * self.size

    def winner(self) -> Optional[Piece]:
        """
        Return the winning side, or None.

        Only lines through ``last_move`` are inspected: a run of at
        least ``win_length`` stones in any of the four directions wins.
        The winner is the side that made the last move.
        """
        if self.last_move is None:
            return None

        x, y = self.last_move
        piece = self.cells[x, y]
        if piece == Piece.EMPTY:
            return None

        for dx, dy in LINE_DIRECTIONS:
            count = 1 + self._run_length(x, y, dx, dy, piece) \
                + self._run_length(x, y, -dx, -dy, piece)
            if count >= self.win_length:
                return self.last_player()

        return None

    def _run_length(self, x: int, y: int, dx: int, dy: int, piece: int) -> int:
        """Count consecutive ``piece`` stones from (x, y) along (dx, dy), exclusive."""
        count = 0
        i, j = x + dx, y + dy
        while 0 <= i < self.size and 0 <= j < self.size and self.cells[i, j] == piece:
            count += 1
            i += dx
            j += dy
        return count

    def reset(self) -> None:
        """Clear the board and hand the move back to the starting side."""
        self.cells.fill(Piece.EMPTY)
        self.turn = self.starting_side
        self.last_move = None

    def __eq__(self, other_state: object) -> bool:
        if not isinstance(other_state, BoardState):
            return NotImplemented
        return (
            self.size == other_state.size
            and self.turn == other_state.turn
            and self.last_move == other_state.last_move
            and np.array_equal(self.cells, other_state.cells)
        )

    __hash__ = None

    def __str__(self) -> str:
        symbols = {Piece.EMPTY: '.', Piece.CROSS: 'X', Piece.NOUGHT: 'O'}
        return '\n'.join(
            ''.join(symbols[Piece(int(v))] for v in row)
            for row in self.cells
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(size={self.size}, turn={self.turn.name}, "
            f"last_move={self.last_move}, stones={self.stone_count()})"
        )
