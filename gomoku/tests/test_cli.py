"""
Tests for the command line interface.
"""
import pytest

from gomoku import settings
from gomoku.ai.networks import NetworkBuilder, create_evaluator_architecture
from gomoku.ai.rng import RandomSource
from gomoku.ai.training import load_evaluator, save_evaluator
from gomoku.cli import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_train_defaults(self):
        options = build_parser().parse_args(['train'])

        assert options.population == settings.POPULATION
        assert options.generations == settings.EPOCH
        assert options.hidden == settings.NETWORK_STRUCT
        assert options.activation == settings.ACTIVATION
        assert not options.verbose

    def test_verbose_after_subcommand(self):
        options = build_parser().parse_args(['match', 'data.json.gz', '-v'])

        assert options.verbose
        assert options.opponent == 'heuristic'

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_activation_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['train', '--activation', 'relu'])


class TestCommands:
    """Tests for running commands through main()."""

    def test_train_writes_evaluator(self, tmp_path, capsys):
        output = tmp_path / 'data.json.gz'

        code = main([
            'train',
            '--population', '2',
            '--generations', '1',
            '--matches', '1',
            '--depth', '1',
            '--draw-steps', '4',
            '--hidden', '2', '1',
            '--seed', '5',
            '--output', str(output),
        ])

        assert code == 0
        assert load_evaluator(output).neurons_count == [2, 1]
        assert 'Training completed!' in capsys.readouterr().out

    def test_train_rejects_tiny_population(self, tmp_path, capsys):
        code = main(['train', '--population', '1', '--output', str(tmp_path / 'x.json.gz')])

        assert code == 1
        assert 'Population size' in capsys.readouterr().err

    def test_train_rejects_wide_output_layer(self, tmp_path, capsys):
        code = main([
            'train', '--hidden', '2', '3', '--output', str(tmp_path / 'x.json.gz'),
        ])

        assert code == 1
        assert 'exactly one neuron' in capsys.readouterr().err

    def test_match_damaged_evaluator(self, tmp_path, capsys):
        path = tmp_path / 'data.json.gz'
        path.write_bytes(b'\x1f\x8b\x08\x00garbage')

        code = main(['match', str(path)])

        assert code == 1
        assert 'Error:' in capsys.readouterr().err

    def test_match_missing_evaluator(self, tmp_path, capsys):
        code = main(['match', str(tmp_path / 'missing.json.gz')])

        assert code == 1
        assert 'not found' in capsys.readouterr().err

    def test_match_against_random(self, tmp_path, capsys):
        network = NetworkBuilder().from_json(
            create_evaluator_architecture(neurons_count=[2, 1]),
            rng=RandomSource(seed=8),
        )
        path = save_evaluator(network, tmp_path / 'data.json.gz')

        code = main([
            'match', str(path),
            '--opponent', 'random',
            '--games', '2',
            '--depth', '1',
            '--draw-steps', '6',
        ])

        assert code == 0
        assert 'Draws:' in capsys.readouterr().out
