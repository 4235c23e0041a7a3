"""
Random player implementation.

Chooses uniformly among the moves the search would consider (cells
next to an existing stone), falling back to any empty cell on an empty
board. Useful as a baseline opponent.
"""
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..rng import RandomSource
from ..search import has_neighbor
from .base import BasePlayer, Move

if TYPE_CHECKING:
    from gomoku.game.board import BoardState


class RandomPlayer(BasePlayer):
    """
    A player that picks a random nearby move.

    Example:
        player = RandomPlayer(player_id='random_1', seed=7)
        move = player.select_move(state)
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ):
        super().__init__(player_id=player_id, name=name or 'Random Player')
        self.seed = seed
        self._rng = rng or RandomSource(seed)

    def select_move(self, state: 'BoardState') -> Optional[Move]:
        empty = state.empty_cells()
        if not empty:
            return None

        nearby = [(x, y) for x, y in empty if has_neighbor(state, x, y)]
        return self._rng.choice(nearby or empty)

    def get_player_type(self) -> str:
        return 'random'

    def get_config(self) -> Dict[str, Any]:
        config = super().get_config()
        config['seed'] = self.seed
        return config
