"""
Base player abstraction for all player types.

A player looks at a board state and returns the cell it wants to play.
Match runners own the real board; players only ever see a copy.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from gomoku.game.board import BoardState, Piece

Move = Tuple[int, int]


class BasePlayer(ABC):
    """
    Abstract base class for all player types.

    Attributes:
        player_id: Unique identifier for this player instance.
        name: Human-readable name for display purposes.

    Example:
        class FirstCellPlayer(BasePlayer):
            def select_move(self, state):
                cells = state.empty_cells()
                return cells[0] if cells else None

            def get_player_type(self):
                return 'first_cell'
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or player_id

    @abstractmethod
    def select_move(self, state: 'BoardState') -> Optional[Move]:
        """
        Choose a cell for the side to move.

        Args:
            state: Current position. Players may modify it freely; the
                   runner passes a copy.

        Returns:
            ``(x, y)`` of an empty cell, or None if the player has no
            move to offer.
        """
        pass

    @abstractmethod
    def get_player_type(self) -> str:
        """Return the type identifier for this player (e.g. 'neural')."""
        pass

    def on_game_start(self, state: 'BoardState', piece: 'Piece') -> None:
        """Called when a new game starts with the colour this player plays."""
        pass

    def on_game_end(self, state: 'BoardState', winner: Optional['Piece']) -> None:
        """Called with the final position and the winning colour (None for a draw)."""
        pass

    def get_config(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'name': self.name,
            'type': self.get_player_type(),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.player_id})"

    def __str__(self) -> str:
        return f"{self.name} ({self.get_player_type()})"
