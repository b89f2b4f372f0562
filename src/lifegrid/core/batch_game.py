"""Batch Game of Life implementation using 3D tensors for parallel simulation."""

import logging
from typing import List

import torch

from .batch_grid import BatchGrid
from .cell import Cell
from .grid import Grid

logger = logging.getLogger(__name__)


class BatchGameOfLife:
    """Conway's Game of Life simulation engine for multiple games in parallel.

    This class runs multiple independent Game of Life simulations simultaneously
    using vectorized tensor operations. Results match stepping each grid
    with :class:`GameOfLife` on its own.
    """

    def __init__(self, batch_grid: BatchGrid) -> None:
        """Initialize batch game with a batch grid.

        Args:
            batch_grid: The BatchGrid containing all game states
        """
        self.batch_grid = batch_grid
        self.batch_size = batch_grid.batch_size
        self.device = batch_grid.device

        self._generations = torch.zeros(self.batch_size, dtype=torch.int32, device=self.device)
        self._extinct = self.populations == 0

    @classmethod
    def from_grids(cls, grids: List[Grid[Cell]], device: str = "cpu") -> "BatchGameOfLife":
        """Create a batch game from individual grids.

        Args:
            grids: Initial generations, all of the same size
            device: Device to place tensors on ('cpu' or 'cuda')
        """
        return cls(BatchGrid(grids, device=device))

    @property
    def generations(self) -> torch.Tensor:
        """Current generation numbers for all games."""
        return self._generations

    @property
    def populations(self) -> torch.Tensor:
        """Current population counts for all games."""
        return self.batch_grid.populations

    @property
    def extinct(self) -> torch.Tensor:
        """Boolean mask of games with no living cells."""
        return self._extinct

    def grids(self) -> List[Grid[Cell]]:
        """Get the current generation of every game as new grids."""
        return self.batch_grid.to_grids()

    def step(self) -> None:
        """Advance all simulations by one generation."""
        self.batch_grid.replace(self._next_cells())
        self._generations += 1
        self._extinct = self.populations == 0

        logger.debug(
            f"Batch step to generation {int(self._generations.max())}, "
            f"{int(self._extinct.sum())}/{self.batch_size} extinct"
        )

    def _next_cells(self) -> torch.Tensor:
        """Apply Conway's Game of Life rules to all grids.

        Returns:
            New cell tensor; the current one is left untouched
        """
        neighbor_counts = self.batch_grid.count_all_neighbors()
        cells = self.batch_grid.cells

        # Birth: dead cell with exactly 3 neighbors
        birth_mask = (cells == 0) & (neighbor_counts == 3)

        # Survival: live cell with 2 or 3 neighbors
        survive_mask = (cells > 0) & ((neighbor_counts == 2) | (neighbor_counts == 3))

        return (birth_mask | survive_mask).to(torch.uint8)
