"""
Players that choose moves with the minimax search.

SearchPlayer takes any evaluation function. HeuristicPlayer and
NeuralPlayer fix it to the neighbour-density heuristic and to a
network forward pass respectively.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from gomoku import settings
from ..evaluation import NeuralEvaluator, neighbor_density
from ..search import SearchStats, choose_move
from .base import BasePlayer, Move

if TYPE_CHECKING:
    from gomoku.game.board import BoardState
    from ..encoders.base import BaseEncoder
    from ..evaluation import EvaluateFunction
    from ..networks.builder import ActivationNetwork


class SearchPlayer(BasePlayer):
    """
    A player driven by alpha-beta search.

    Attributes:
        evaluate: Evaluation function used at the cutoff depth.
        depth: Search depth including the root move.
        stats: Counters from the most recent search.
    """

    def __init__(
        self,
        player_id: str,
        evaluate: 'EvaluateFunction',
        depth: int = settings.SEARCH_DEPTH,
        name: Optional[str] = None,
    ):
        super().__init__(player_id=player_id, name=name or 'Search Player')
        self.evaluate = evaluate
        self.depth = depth
        self.stats = SearchStats()

    def select_move(self, state: 'BoardState') -> Optional[Move]:
        self.stats = SearchStats()
        return choose_move(state, self.evaluate, self.depth, self.stats)

    def get_player_type(self) -> str:
        return 'search'

    def get_config(self) -> Dict[str, Any]:
        config = super().get_config()
        config['depth'] = self.depth
        return config


class HeuristicPlayer(SearchPlayer):
    """Search player using the neighbour-density heuristic."""

    def __init__(
        self,
        player_id: str,
        depth: int = settings.SEARCH_DEPTH,
        name: Optional[str] = None,
    ):
        super().__init__(
            player_id=player_id,
            evaluate=neighbor_density,
            depth=depth,
            name=name or 'Heuristic Player',
        )

    def get_player_type(self) -> str:
        return 'heuristic'


class NeuralPlayer(SearchPlayer):
    """
    Search player using an evolved evaluator network.

    Example:
        player = NeuralPlayer.from_file('p1', 'data.json.gz')
        move = player.select_move(state)
    """

    def __init__(
        self,
        player_id: str,
        network: 'ActivationNetwork',
        encoder: Optional['BaseEncoder'] = None,
        depth: int = settings.SEARCH_DEPTH,
        name: Optional[str] = None,
    ):
        evaluator = NeuralEvaluator(network, encoder)
        super().__init__(
            player_id=player_id,
            evaluate=evaluator,
            depth=depth,
            name=name or 'Neural Player',
        )
        self.network = network
        self.encoder = evaluator.encoder

    @classmethod
    def from_file(
        cls,
        player_id: str,
        path: Union[str, Path],
        depth: int = settings.SEARCH_DEPTH,
    ) -> 'NeuralPlayer':
        """Create a player from a saved evaluator file."""
        from ..training.checkpoints import load_evaluator

        network = load_evaluator(path)
        return cls(player_id=player_id, network=network, depth=depth, name=Path(path).name)

    def get_player_type(self) -> str:
        return 'neural'

    def get_config(self) -> Dict[str, Any]:
        config = super().get_config()
        config['architecture'] = self.network.architecture
        return config
