"""Generic 2D grid and Conway's Game of Life on clamped boundaries."""

__version__ = "0.1.0"

from .core.grid import Grid
from .core.cell import Cell, seed
from .core.game import GameOfLife

__all__ = ["Grid", "Cell", "seed", "GameOfLife"]
