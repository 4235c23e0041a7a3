"""
Match orchestration.

- MatchRunner: games and matches between any two players
- play_game: one computer-vs-computer game between evaluation functions
- respond_to_move: human move followed by the computer's reply
"""
from .runner import MatchRunner, GameResult, MatchResult, play_game, run_benchmark
from .interactive import TurnResult, respond_to_move

__all__ = [
    'MatchRunner',
    'GameResult',
    'MatchResult',
    'play_game',
    'run_benchmark',
    'TurnResult',
    'respond_to_move',
]
