"""
Depth-limited minimax with alpha-beta pruning.

The search walks child states produced by the board model and prunes
twice:
- alpha-beta cutoffs against the current window
- a locality filter that skips any move without an occupied cell in
  its 8-neighbourhood

At the cutoff depth the caller-supplied evaluation function scores the
position; decided positions score WIN_SCORE / LOSE_SCORE instead.

The locality filter assumes at least one stone is already on the board.
Games seed the first move on the centre cell for that reason.
"""
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, TYPE_CHECKING

from gomoku import settings
from gomoku.game.board import other

if TYPE_CHECKING:
    from gomoku.game.board import BoardState, Piece

logger = logging.getLogger(__name__)

EvaluateFunction = Callable[['BoardState'], float]

# Sentinels dominate any heuristic value
WIN_SCORE = sys.float_info.max
LOSE_SCORE = -sys.float_info.max


@dataclass
class SearchStats:
    """Counters collected during one search."""
    nodes: int = 0
    evaluations: int = 0
    cutoffs: int = 0


def has_neighbor(state: 'BoardState', x: int, y: int) -> bool:
    """True if any of the 8 cells around (x, y) holds a stone."""
    size = state.size
    for i in range(max(x - 1, 0), min(x + 2, size)):
        for j in range(max(y - 1, 0), min(y + 2, size)):
            if (i, j) != (x, y) and state.cells[i, j]:
                return True
    return False


def candidate_states(state: 'BoardState') -> Iterator['BoardState']:
    """Child states that pass the locality filter, in scan order."""
    for child in state.legal_move_states():
        x, y = child.last_move
        if has_neighbor(child, x, y):
            yield child


def minimax(
    state: 'BoardState',
    depth: int,
    alpha: float,
    beta: float,
    side: 'Piece',
    evaluate: EvaluateFunction,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Score a state for ``side`` with alpha-beta minimax.

    Args:
        state: Position to score.
        depth: Remaining plies; the evaluation function runs at 0.
        alpha: Lower bound of the search window.
        beta: Upper bound of the search window.
        side: The maximising side.
        evaluate: Evaluation function used at the cutoff depth.
        stats: Optional counters updated in place.

    Returns:
        A value in [LOSE_SCORE, WIN_SCORE]. When no candidate move
        survives the locality filter the node returns its starting
        bound (alpha for max nodes, beta for min nodes).
    """
    if stats is not None:
        stats.nodes += 1

    winner = state.winner()
    if winner == side:
        return WIN_SCORE
    if winner == other(side):
        return LOSE_SCORE

    if depth == 0:
        if stats is not None:
            stats.evaluations += 1
        return evaluate(state)

    if state.turn == side:
        value = alpha
        for child in candidate_states(state):
            value = max(value, minimax(child, depth - 1, value, beta, side, evaluate, stats))
            if value >= beta:
                if stats is not None:
                    stats.cutoffs += 1
                return value
        return value

    value = beta
    for child in candidate_states(state):
        value = min(value, minimax(child, depth - 1, alpha, value, side, evaluate, stats))
        if value <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            return value
    return value


def choose_move(
    state: 'BoardState',
    evaluate: EvaluateFunction,
    depth: int = settings.SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
) -> Optional[Tuple[int, int]]:
    """
    Pick the best move for the side to move without playing it.

    Every candidate child is searched with ``depth - 1`` remaining
    plies. The child with the strictly highest value wins; ties keep
    the first one in scan order.

    Returns:
        ``(x, y)`` of the chosen move, or None if no candidate exists.

    Raises:
        ValueError: If depth is below 1.
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    side = state.turn
    best_move = None
    best_value = None

    for child in candidate_states(state):
        value = minimax(child, depth - 1, LOSE_SCORE, WIN_SCORE, side, evaluate, stats)
        if best_value is None or value > best_value:
            best_value = value
            best_move = child.last_move

    logger.debug(f"{side.name} chooses {best_move} (value={best_value})")
    return best_move


def place_ai_move(
    state: 'BoardState',
    evaluate: EvaluateFunction,
    depth: int = settings.SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
) -> Optional[Tuple[int, int]]:
    """
    Search for a move and commit it onto ``state``.

    Args:
        state: Position to play in; modified in place.
        evaluate: Evaluation function for the cutoff depth.
        depth: Search depth including the root move.
        stats: Optional counters updated in place.

    Returns:
        The move played, or None when no move is available (nothing is
        committed; a full or blocked board is the caller's concern).
    """
    move = choose_move(state, evaluate, depth, stats)
    if move is None:
        return None

    state.place(move[0], move[1], state.turn)
    return move
