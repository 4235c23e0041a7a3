"""
Tests for player implementations.
"""
import pytest

from gomoku.ai.players import (
    BasePlayer,
    HeuristicPlayer,
    NeuralPlayer,
    RandomPlayer,
    SearchPlayer,
)
from gomoku.ai.search import has_neighbor
from gomoku.ai.training import save_evaluator
from gomoku.game.board import BoardState, Piece


class TestRandomPlayer:
    """Tests for RandomPlayer."""

    @pytest.fixture
    def player(self):
        return RandomPlayer(player_id='random_1', seed=42)

    def test_init(self, player):
        assert player.player_id == 'random_1'
        assert player.name == 'Random Player'
        assert player.get_player_type() == 'random'

    def test_move_is_near_a_stone(self, player, opened_state):
        x, y = player.select_move(opened_state)

        assert opened_state.piece_at(x, y) == Piece.EMPTY
        assert has_neighbor(opened_state, x, y)

    def test_empty_board_any_cell(self, player):
        x, y = player.select_move(BoardState())

        assert 0 <= x < 15 and 0 <= y < 15

    def test_full_board_returns_none(self, player):
        state = BoardState(size=2)
        for x, y in [(0, 0), (0, 1), (1, 1), (1, 0)]:
            state.place(x, y, state.turn)

        assert player.select_move(state) is None

    def test_seeded_reproducibility(self, opened_state):
        a = RandomPlayer('a', seed=9)
        b = RandomPlayer('b', seed=9)

        assert [a.select_move(opened_state) for _ in range(5)] == \
            [b.select_move(opened_state) for _ in range(5)]

    def test_get_config(self, player):
        config = player.get_config()

        assert config['type'] == 'random'
        assert config['seed'] == 42

    def test_repr_and_str(self, player):
        assert repr(player) == 'RandomPlayer(id=random_1)'
        assert str(player) == 'Random Player (random)'


class TestSearchPlayers:
    """Tests for search-driven players."""

    def test_search_player_records_stats(self, opened_state):
        player = SearchPlayer('s', evaluate=lambda s: 0.0, depth=1)

        move = player.select_move(opened_state)

        assert move == (6, 6)
        assert player.stats.nodes == 8
        assert player.get_config()['depth'] == 1

    def test_heuristic_player_takes_win(self, cross_to_win_state):
        player = HeuristicPlayer('h', depth=1)

        assert player.select_move(cross_to_win_state) in [(7, 4), (7, 9)]
        assert player.get_player_type() == 'heuristic'

    def test_neural_player_moves_adjacent(self, tiny_network, opened_state):
        player = NeuralPlayer('n', tiny_network, depth=1)

        x, y = player.select_move(opened_state)

        assert max(abs(x - 7), abs(y - 7)) == 1
        assert player.get_player_type() == 'neural'
        assert player.get_config()['architecture'] == tiny_network.architecture

    def test_neural_player_from_file(self, tiny_network, tmp_path, builder):
        path = save_evaluator(tiny_network, tmp_path / 'data.json.gz')

        player = NeuralPlayer.from_file('n', path, depth=1)

        assert player.name == 'data.json.gz'
        assert (builder.flatten_weights(player.network) == builder.flatten_weights(tiny_network)).all()

    def test_select_move_leaves_state_alone(self, tiny_network, opened_state):
        before = opened_state.copy()

        NeuralPlayer('n', tiny_network, depth=2).select_move(opened_state)

        assert opened_state == before

    def test_base_player_is_abstract(self):
        with pytest.raises(TypeError):
            BasePlayer('x')
