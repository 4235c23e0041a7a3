"""
Human-versus-computer turn handling.

A front end (terminal, GUI, web view) feeds each human click to
respond_to_move and renders whatever comes back. The board is the only
shared state.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from gomoku import settings
from gomoku.game.board import Piece
from ..search import place_ai_move

if TYPE_CHECKING:
    from gomoku.game.board import BoardState
    from ..evaluation import EvaluateFunction

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Outcome of one human move and the computer's reply."""
    accepted: bool
    winner: Optional[Piece] = None
    reply: Optional[Tuple[int, int]] = None

    @property
    def game_over(self) -> bool:
        return self.winner is not None


def respond_to_move(
    state: 'BoardState',
    x: int,
    y: int,
    evaluate: 'EvaluateFunction',
    depth: int = settings.SEARCH_DEPTH,
) -> TurnResult:
    """
    Apply a human move at (x, y), then let the computer answer.

    Args:
        state: Live game board; modified in place.
        x: Row of the human move.
        y: Column of the human move.
        evaluate: Evaluation function the computer searches with.
        depth: Search depth for the reply.

    Returns:
        TurnResult. ``accepted`` is False when the cell is off the board
        or occupied, in which case nothing changes. ``winner`` is set as
        soon as either move completes a line.
    """
    if not (0 <= x < state.size and 0 <= y < state.size):
        return TurnResult(accepted=False)

    if state.winner() is not None:
        return TurnResult(accepted=False, winner=state.winner())

    if not state.place(x, y, state.turn):
        return TurnResult(accepted=False)

    winner = state.winner()
    if winner is not None:
        logger.info(f"{winner.name} wins with ({x}, {y})")
        return TurnResult(accepted=True, winner=winner)

    reply = place_ai_move(state, evaluate, depth)
    if reply is None:
        logger.info("No reply available, board is full")
        return TurnResult(accepted=True)

    winner = state.winner()
    if winner is not None:
        logger.info(f"{winner.name} wins with {reply}")
    return TurnResult(accepted=True, winner=winner, reply=reply)
