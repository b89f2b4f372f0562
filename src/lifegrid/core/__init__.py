"""Core cellular automata logic."""

from .grid import Grid
from .cell import Cell, seed
from .game import GameOfLife
from .batch_grid import BatchGrid
from .batch_game import BatchGameOfLife

__all__ = ["Grid", "Cell", "seed", "GameOfLife", "BatchGrid", "BatchGameOfLife"]
