"""Tests for the BatchGrid and BatchGameOfLife classes."""

import numpy as np
import pytest
import torch
from lifegrid.core.batch_game import BatchGameOfLife
from lifegrid.core.batch_grid import BatchGrid
from lifegrid.core.cell import Cell, from_array, seed
from lifegrid.core.game import GameOfLife
from lifegrid.core.grid import Grid


class TestBatchGrid:
    """Test cases for the BatchGrid class."""

    def test_initialization(self):
        """Test stacking grids into a tensor."""
        grid1 = Grid(4, 5, Cell.default)
        grid2 = Grid(4, 5, Cell.default)
        grid2.set(Cell.ALIVE, 3, 4)

        batch = BatchGrid([grid1, grid2])

        assert batch.shape == (2, 4, 5)
        assert batch.cells.dtype == torch.uint8
        assert batch.cells[1, 3, 4] == 1
        assert batch.populations.tolist() == [0, 1]

    def test_size_mismatch(self):
        """Test that differently sized grids are rejected."""
        with pytest.raises(ValueError):
            BatchGrid([Grid(3, 3, Cell.default), Grid(3, 4, Cell.default)])

    def test_empty_batch(self):
        """Test that an empty batch is rejected."""
        with pytest.raises(ValueError):
            BatchGrid([])

        with pytest.raises(ValueError):
            BatchGrid([Grid(0, 3, Cell.default)])

    def test_count_all_neighbors_clamped(self):
        """Test that neighbour counts don't wrap around the edges."""
        grid = Grid(3, 3, Cell.default)
        grid.set(Cell.ALIVE, 0, 0)
        grid.set(Cell.ALIVE, 2, 2)

        counts = BatchGrid([grid]).count_all_neighbors()[0]

        assert counts[1, 1] == 2
        assert counts[0, 0] == 0
        assert counts[0, 2] == 0
        assert counts[2, 0] == 0

    def test_extract_single(self):
        """Test getting a grid back out of the batch."""
        grid = Grid(3, 4, Cell.default)
        grid.set(Cell.ALIVE, 1, 3)

        batch = BatchGrid([Grid(3, 4, Cell.default), grid])

        assert batch.extract_single(1) == grid
        assert batch.to_grids()[0] == Grid(3, 4, Cell.default)

    def test_replace_shape_mismatch(self):
        """Test that replacing with a wrongly shaped tensor fails."""
        batch = BatchGrid([Grid(3, 3, Cell.default)])

        with pytest.raises(ValueError):
            batch.replace(torch.zeros(1, 3, 4, dtype=torch.uint8))


class TestBatchGameOfLife:
    """Test cases for the BatchGameOfLife class."""

    def test_matches_single_game(self):
        """Test that batched steps agree with stepping each grid alone."""
        rng = np.random.default_rng(1234)
        grids = [from_array(rng.random((9, 11)) < 0.35) for _ in range(4)]
        grids.append(seed(9, 11, [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]))

        batch_game = BatchGameOfLife.from_grids(grids)
        games = [GameOfLife(grid.copy()) for grid in grids]

        for _ in range(6):
            batch_game.step()
            for game in games:
                game.step()

            assert batch_game.grids() == [game.get_grid() for game in games]

        assert batch_game.generations.tolist() == [6] * 5

    def test_blinker(self):
        """Test blinker oscillation in a batch."""
        horizontal = Grid(5, 5, Cell.default)
        for col in range(1, 4):
            horizontal.set(Cell.ALIVE, 1, col)

        batch_game = BatchGameOfLife.from_grids([horizontal])

        batch_game.step()
        vertical = batch_game.grids()[0]
        assert {(r, c) for r, c in vertical.coordinates() if vertical.get(r, c) is Cell.ALIVE} == {
            (0, 2), (1, 2), (2, 2)
        }

        batch_game.step()
        assert batch_game.grids()[0] == horizontal

    def test_grids_are_snapshots(self):
        """Test that returned grids are not changed by later steps."""
        grid = Grid(3, 3, Cell.default)
        grid.set(Cell.ALIVE, 1, 1)
        batch_game = BatchGameOfLife.from_grids([grid])

        snapshot = batch_game.grids()[0]
        batch_game.step()

        assert snapshot == grid
        assert batch_game.grids()[0] == Grid(3, 3, Cell.default)

    def test_extinction_tracking(self):
        """Test the extinct mask."""
        lone = Grid(4, 4, Cell.default)
        lone.set(Cell.ALIVE, 2, 2)
        block = seed(4, 4, [(1, 1), (1, 2), (2, 1), (2, 2)])

        batch_game = BatchGameOfLife.from_grids([lone, block])
        assert batch_game.extinct.tolist() == [False, False]

        batch_game.step()

        assert batch_game.extinct.tolist() == [True, False]
        assert batch_game.populations.tolist() == [0, 4]
