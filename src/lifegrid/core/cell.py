"""Cell state for Conway's Game of Life and helpers for grids of cells."""

from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np

from .grid import Grid


class Cell(IntEnum):
    """State of a single cell. Dead is the default."""

    DEAD = 0
    ALIVE = 1

    @classmethod
    def default(cls) -> "Cell":
        """Default cell state, used to fill new grids."""
        return cls.DEAD

    def __str__(self) -> str:
        return "*" if self is Cell.ALIVE else "."


def to_array(grid: Grid[Cell]) -> np.ndarray:
    """Convert a cell grid to a numpy array.

    Args:
        grid: Source grid

    Returns:
        Array of shape (rows, cols) with 1 for alive and 0 for dead cells
    """
    rows, cols = grid.size()
    flat = np.fromiter((int(cell) for cell in grid.values()), dtype=np.uint8, count=rows * cols)
    # Storage order is column-major
    return flat.reshape((rows, cols), order="F")


def from_array(array: np.ndarray) -> Grid[Cell]:
    """Build a cell grid from a 2D array.

    Args:
        array: Array of shape (rows, cols); non-zero entries are alive

    Returns:
        New grid

    Raises:
        ValueError: If the array is not two-dimensional
    """
    arr = np.asarray(array)
    if arr.ndim != 2:
        raise ValueError(f"Expected a 2D array, got shape {arr.shape}")

    rows, cols = arr.shape
    values = [Cell.ALIVE if value else Cell.DEAD for value in arr.flatten(order="F")]
    return Grid.from_sequence(values, rows, cols)


def seed(rows: int, cols: int, alive: Iterable[Tuple[int, int]]) -> Grid[Cell]:
    """Build a dead grid with the given (row, col) cells brought to life.

    Raises:
        IndexError: If any live cell falls outside the grid
    """
    grid: Grid[Cell] = Grid(rows, cols, Cell.default)
    for row, col in alive:
        grid.set(Cell.ALIVE, row, col)
    return grid


def population(grid: Grid[Cell]) -> int:
    """Get the number of living cells."""
    # Plain 0/1 values compare equal to the enum members
    return sum(1 for cell in grid.values() if cell == Cell.ALIVE)


def state_key(grid: Grid[Cell]) -> bytes:
    """Byte fingerprint of a cell grid, for exact state comparison."""
    return to_array(grid).tobytes()
