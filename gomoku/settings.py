"""
Game and training settings for the Gomoku engine.

Constants describing the fixed board geometry plus the defaults used by
the search and the evolutionary trainer. A few training values can be
overridden through environment variables so that the CLI and tests can
run with smaller budgets without code changes.
"""
import os


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    return float(value) if value else default


# Board geometry
BOARD_SIZE = 15
MAX_CHESSES = BOARD_SIZE * BOARD_SIZE
WIN_LENGTH = 5
CENTER = (BOARD_SIZE // 2, BOARD_SIZE // 2)

# Minimax search depth
SEARCH_DEPTH = _env_int('GOMOKU_SEARCH_DEPTH', 2)

# Computer-vs-computer games are drawn after this many steps
DRAW_STEPS = _env_int('GOMOKU_DRAW_STEPS', 150)

# Neural evaluator topology (neurons per layer, input is the board)
NETWORK_STRUCT = [64, 1]
ACTIVATION = os.environ.get('GOMOKU_ACTIVATION', 'linear')

# Fitness awarded per self-play game
WIN_FITNESS = 1
DRAW_FITNESS = 0
LOSE_FITNESS = -1

# Evolution
GAME_MATCHES = _env_int('GOMOKU_GAME_MATCHES', 5)
POPULATION = _env_int('GOMOKU_POPULATION', 15)
EPOCH = _env_int('GOMOKU_EPOCH', 10)
CROSSOVER_RATE = _env_float('GOMOKU_CROSSOVER_RATE', 0.75)
MUTATION_RATE = _env_float('GOMOKU_MUTATION_RATE', 0.10)

# Persistence
DATA_FILENAME = os.environ.get('GOMOKU_DATA_FILE', 'data.json.gz')
CHECKPOINT_DIR = os.environ.get('GOMOKU_CHECKPOINT_DIR', './evolution_checkpoints')
