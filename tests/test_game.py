# -*-  coding: utf-8 -*-
"""
Set of test for the game session.
"""
import logging

import numpy as np
import pytest

from tilemerge.core.gamemove import Direction
from tilemerge.envs import GameConfig, TileMergeGame


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_defaults(self):
        config = GameConfig()
        assert (config.rows, config.cols, config.threshold, config.start_tiles) == (4, 4, 128, 2)

    @pytest.mark.parametrize(
        'kwargs',
        [{'rows': 0}, {'cols': -1}, {'threshold': 0}, {'start_tiles': -1}, {'rows': 1, 'cols': 1, 'start_tiles': 2}],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestTileMergeGame:
    """Tests for the TileMergeGame session."""

    @pytest.fixture
    def game(self):
        return TileMergeGame(rng=np.random.default_rng(42))

    def test_reset(self, game):
        """A new game holds exactly two tiles of value 2 or 4."""
        grid = game.reset(seed=42)
        assert grid.shape == (4, 4)
        assert np.count_nonzero(grid) == 2
        assert np.all(np.isin(grid[grid != 0], [2, 4]))
        assert not game.won and not game.finished

    def test_reset_rectangular(self):
        game = TileMergeGame(config=GameConfig(rows=3, cols=5, start_tiles=4), rng=np.random.default_rng(0))
        assert game.grid.shape == (3, 5)
        assert np.count_nonzero(game.grid) == 4

    def test_reset_seed_is_reproducible(self, game):
        first = game.reset(seed=11)
        second = game.reset(seed=11)
        assert np.array_equal(first, second)

    def test_step_valid_move(self, game):
        game.restore([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        previous = game.grid
        grid, moved, finished = game.step(Direction.LEFT)
        assert moved and not finished
        assert grid[0, 0] == 4
        assert np.count_nonzero(grid) == 2
        assert grid is not previous
        assert previous[0, 1] == 2

    def test_step_invalid_move(self, game):
        game.restore([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        previous = game.grid
        grid, moved, finished = game.step('left')
        assert grid is previous
        assert not moved and not finished

    def test_step_unknown_direction(self, game):
        with pytest.raises(ValueError):
            game.step('sideways')

    def test_step_unknown_direction_when_finished(self, game):
        game.restore([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]], finished=True)
        assert game.finished
        with pytest.raises(ValueError):
            game.step('sideways')
        with pytest.raises(ValueError):
            game.step(7)

    def test_win_is_terminal(self, game, caplog):
        game.restore([[64, 64, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        with caplog.at_level(logging.INFO, logger='tilemerge.envs.game'):
            grid, moved, finished = game.step(Direction.LEFT)
        assert moved and finished and game.won
        assert grid[0, 0] == 128
        assert 'Threshold 128 reached' in caplog.text

        after, moved, finished = game.step(Direction.RIGHT)
        assert after is grid
        assert not moved and finished

    def test_custom_threshold(self):
        game = TileMergeGame(config=GameConfig(threshold=2048), rng=np.random.default_rng(0))
        game.restore([[64, 64, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        _, moved, finished = game.step(Direction.LEFT)
        assert moved and not finished and not game.won

    def test_full_grid_with_pair_is_not_over(self):
        """The spawn fills the last empty cell, but a merge is still possible."""
        game = TileMergeGame(config=GameConfig(rows=2, cols=2), rng=np.random.default_rng(0))
        game.restore([[0, 8], [8, 16]])
        grid, moved, finished = game.step(Direction.UP)
        # ##: Up moves 8 from (1, 0) to (0, 0), leaving (1, 0) empty for the spawn.
        assert moved
        assert grid[0, 0] == 8 and grid[0, 1] == 8
        assert not finished

    def test_game_over(self, caplog):
        game = TileMergeGame(config=GameConfig(rows=1, cols=3), rng=np.random.default_rng(0))
        game.restore([[0, 16, 8]])
        with caplog.at_level(logging.INFO, logger='tilemerge.envs.game'):
            grid, moved, finished = game.step(Direction.LEFT)
        assert moved
        assert list(grid[0, :2]) == [16, 8]
        assert grid[0, 2] in (2, 4)
        assert finished and not game.won
        assert 'No legal move left' in caplog.text

    def test_restore_invalid_starts_fresh(self, game, caplog):
        with caplog.at_level(logging.WARNING, logger='tilemerge.envs.game'):
            restored = game.restore([[2, 3, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], won=True)
        assert not restored
        assert np.count_nonzero(game.grid) == 2
        assert not game.won and not game.finished
        assert 'Discarding saved state' in caplog.text

    def test_restore_oversized_tile_starts_fresh(self, game):
        restored = game.restore([[2**64, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2]])
        assert not restored
        assert np.count_nonzero(game.grid) == 2
        assert game.grid.max() <= 4

    def test_restore_wrong_shape(self, game):
        assert not game.restore([[2, 0], [0, 0]])
        assert game.grid.shape == (4, 4)

    def test_snapshot_and_restore(self, game):
        game.restore([[2, None, 0, 4], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 128]], won=True)
        snapshot = game.snapshot()
        assert snapshot == {
            'grid': [[2, None, None, 4], [None, None, None, None], [None, None, None, None], [None, None, None, 128]],
            'won': True,
            'finished': True,
        }

        other = TileMergeGame(rng=np.random.default_rng(1))
        assert other.restore(snapshot['grid'], won=snapshot['won'], finished=snapshot['finished'])
        assert np.array_equal(other.grid, game.grid)
        assert other.finished

    def test_legal_actions(self, game):
        game.restore([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        assert game.legal_actions == [Direction.UP, Direction.RIGHT, Direction.DOWN]

    def test_actions_mapping(self):
        assert TileMergeGame.ACTIONS == {
            'left': Direction.LEFT,
            'up': Direction.UP,
            'right': Direction.RIGHT,
            'down': Direction.DOWN,
        }

    def test_render(self, game, capsys):
        game.restore([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 4]])
        game.render()
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 4
        assert lines[0].split() == ['2', '0', '0', '0']
