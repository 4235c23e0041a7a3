"""
Match runner for playing games between players.

Orchestrates games between any two players (search, neural, heuristic
or random), supporting single games, matches and the self-play games
the evolutionary trainer uses for fitness.

Features:
- Play any player type against any other
- Seed the centre cell for the first player, as in every trainer game
- Record move history and statistics
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from gomoku import settings
from gomoku.game.board import BoardState, Piece

if TYPE_CHECKING:
    from ..evaluation import EvaluateFunction
    from ..players.base import BasePlayer

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a single game."""
    winner: Optional[str] = None  # Player ID or None for draw
    loser: Optional[str] = None
    winning_piece: Optional[Piece] = None
    is_draw: bool = False
    num_moves: int = 0
    final_state: Optional[BoardState] = None
    player_colors: Dict[str, Piece] = field(default_factory=dict)
    move_history: List[Tuple[Piece, int, int]] = field(default_factory=list)


@dataclass
class MatchResult:
    """Result of a match (multiple games)."""
    player_a_id: str
    player_b_id: str
    player_a_wins: int = 0
    player_b_wins: int = 0
    draws: int = 0
    games: List[GameResult] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return self.player_a_wins + self.player_b_wins + self.draws

    @property
    def player_a_score(self) -> float:
        """Score for player A (1 per win, 0.5 per draw)."""
        return self.player_a_wins + 0.5 * self.draws

    @property
    def player_b_score(self) -> float:
        """Score for player B."""
        return self.player_b_wins + 0.5 * self.draws


class MatchRunner:
    """
    Run matches between players.

    Handles the complete game flow:
    1. Start from an empty board, optionally seeding the centre for CROSS
    2. Alternate turns between players
    3. Place each chosen stone and check for a winner
    4. Declare a draw at the move ceiling or when no move is offered

    Example:
        runner = MatchRunner(max_moves_per_game=150)

        player_a = NeuralPlayer.from_file('evolved', 'data.json.gz')
        player_b = HeuristicPlayer('heuristic')

        result = runner.run_match(player_a, player_b, num_games=10)
        print(f"Player A wins: {result.player_a_wins}")
    """

    def __init__(
        self,
        max_moves_per_game: int = settings.DRAW_STEPS,
        seed_center: bool = True,
        record_history: bool = False,
        board_size: int = settings.BOARD_SIZE,
    ):
        """
        Initialize the match runner.

        Args:
            max_moves_per_game: Stones placed (seed included) before the
                                game is declared a draw.
            seed_center: Whether CROSS opens on the centre cell.
            record_history: Whether to record the move list.
            board_size: Side length of the board.
        """
        self.max_moves_per_game = max_moves_per_game
        self.seed_center = seed_center
        self.record_history = record_history
        self.board_size = board_size

    def run_game(
        self,
        player_a: 'BasePlayer',
        player_b: 'BasePlayer',
        swap_colors: bool = False,
    ) -> GameResult:
        """
        Run a single game between two players.

        Args:
            player_a: First player, plays CROSS unless colours are swapped.
            player_b: Second player.
            swap_colors: If True, player_b plays CROSS.

        Returns:
            GameResult with winner, moves, etc.

        Raises:
            ValueError: If a player picks an occupied or off-board cell.
        """
        result = GameResult()

        if swap_colors:
            cross_player, nought_player = player_b, player_a
        else:
            cross_player, nought_player = player_a, player_b

        players = {
            Piece.CROSS: cross_player,
            Piece.NOUGHT: nought_player,
        }
        result.player_colors = {
            cross_player.player_id: Piece.CROSS,
            nought_player.player_id: Piece.NOUGHT,
        }

        state = BoardState(size=self.board_size)
        for piece, player in players.items():
            player.on_game_start(state.copy(), piece)

        move_count = 0
        history = []

        if self.seed_center and self.max_moves_per_game > 0:
            state.place_center()
            move_count += 1
            history.append((Piece.CROSS, state.x, state.y))

        winner = state.winner()
        while winner is None and move_count < self.max_moves_per_game:
            side = state.turn
            move = players[side].select_move(state.copy())
            if move is None:
                break

            x, y = move
            if not state.place(x, y, side):
                raise ValueError(f"{players[side]} chose an illegal cell ({x}, {y})")
            move_count += 1
            history.append((side, x, y))
            winner = state.winner()

        for player in players.values():
            player.on_game_end(state.copy(), winner)

        result.num_moves = move_count
        result.final_state = state
        if self.record_history:
            result.move_history = history

        if winner is None:
            result.is_draw = True
        else:
            result.winning_piece = winner
            result.winner = players[winner].player_id
            result.loser = players[winner.opponent].player_id

        logger.debug(
            f"Game {cross_player.player_id} vs {nought_player.player_id}: "
            f"{'draw' if result.is_draw else result.winner} after {move_count} moves"
        )
        return result

    def run_match(
        self,
        player_a: 'BasePlayer',
        player_b: 'BasePlayer',
        num_games: int = 1,
        alternate_colors: bool = True,
    ) -> MatchResult:
        """
        Run a match of multiple games.

        Args:
            player_a: First player.
            player_b: Second player.
            num_games: Number of games in the match.
            alternate_colors: If True, alternate who plays CROSS.

        Returns:
            MatchResult with scores.
        """
        result = MatchResult(
            player_a_id=player_a.player_id,
            player_b_id=player_b.player_id,
        )

        for i in range(num_games):
            swap = alternate_colors and (i % 2 == 1)
            game_result = self.run_game(player_a, player_b, swap_colors=swap)
            result.games.append(game_result)

            if game_result.is_draw:
                result.draws += 1
            elif game_result.winner == player_a.player_id:
                result.player_a_wins += 1
            else:
                result.player_b_wins += 1

        return result

    def evaluate_player(
        self,
        player: 'BasePlayer',
        opponent: 'BasePlayer',
        num_games: int = 10,
    ) -> Dict[str, Any]:
        """
        Evaluate a player's performance against an opponent.

        Plays games as both colours and reports statistics.
        """
        result = self.run_match(
            player_a=player,
            player_b=opponent,
            num_games=num_games,
            alternate_colors=True,
        )

        total = result.total_games
        wins = result.player_a_wins
        losses = result.player_b_wins
        draws = result.draws

        return {
            'total_games': total,
            'wins': wins,
            'losses': losses,
            'draws': draws,
            'win_rate': wins / total if total > 0 else 0.0,
            'loss_rate': losses / total if total > 0 else 0.0,
            'draw_rate': draws / total if total > 0 else 0.0,
            'score': (wins + 0.5 * draws) / total if total > 0 else 0.0,
        }


def play_game(
    evaluate_cross: 'EvaluateFunction',
    evaluate_nought: 'EvaluateFunction',
    depth: int = settings.SEARCH_DEPTH,
    draw_steps: int = settings.DRAW_STEPS,
    board_size: int = settings.BOARD_SIZE,
) -> int:
    """
    Play one computer-vs-computer game between two evaluation functions.

    CROSS opens on the centre cell; afterwards both sides move with the
    alpha-beta search.

    Returns:
        ``WIN_FITNESS`` if CROSS wins, ``LOSE_FITNESS`` if NOUGHT wins,
        ``DRAW_FITNESS`` otherwise.
    """
    from ..players.search import SearchPlayer

    cross = SearchPlayer('cross', evaluate_cross, depth=depth)
    nought = SearchPlayer('nought', evaluate_nought, depth=depth)
    runner = MatchRunner(max_moves_per_game=draw_steps, board_size=board_size)
    result = runner.run_game(cross, nought)

    if result.winning_piece == Piece.CROSS:
        return settings.WIN_FITNESS
    if result.winning_piece == Piece.NOUGHT:
        return settings.LOSE_FITNESS
    return settings.DRAW_FITNESS


def run_benchmark(
    player: 'BasePlayer',
    num_games: int = 10,
    opponent: Optional['BasePlayer'] = None,
    max_moves_per_game: int = settings.DRAW_STEPS,
) -> Dict[str, Any]:
    """
    Quick benchmark against the heuristic search player.

    Args:
        player: Player to benchmark.
        num_games: Number of games.
        opponent: Override the default heuristic opponent.
        max_moves_per_game: Stones placed before a game is a draw.

    Returns:
        Benchmark statistics.
    """
    from ..players.search import HeuristicPlayer

    opponent = opponent or HeuristicPlayer(player_id='heuristic_benchmark')
    runner = MatchRunner(max_moves_per_game=max_moves_per_game)
    return runner.evaluate_player(player, opponent, num_games)
