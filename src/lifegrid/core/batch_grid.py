"""Batch grid data structure for parallel cellular automata using 3D tensors."""

import logging
from typing import List, Sequence, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell, from_array, to_array
from .grid import Grid

logger = logging.getLogger(__name__)


class BatchGrid:
    """Represents multiple equally sized cell grids as one 3D tensor.

    This class enables parallel simulation of multiple Game of Life instances
    by storing all grids in a single tensor and applying operations across
    all grids simultaneously. Edges are clamped: cells beyond the border
    count as dead.
    """

    def __init__(self, grids: Sequence[Grid[Cell]], device: str = "cpu") -> None:
        """Initialize a batch from existing grids.

        Args:
            grids: Non-empty sequence of grids that all share one size
            device: Device to place tensors on ('cpu' or 'cuda')

        Raises:
            ValueError: If no grids are given, they are empty or their sizes differ
        """
        if not grids:
            raise ValueError("BatchGrid needs at least one grid")

        rows, cols = grids[0].size()
        if rows == 0 or cols == 0:
            raise ValueError(f"BatchGrid needs non-empty grids, got {rows}x{cols}")
        for grid in grids:
            if grid.size() != (rows, cols):
                raise ValueError(f"Grid dimensions don't match: {grid.size()} vs {(rows, cols)}")

        self.batch_size = len(grids)
        self.rows = rows
        self.cols = cols
        self.device = torch.device(device)

        # (batch_size, rows, cols); conv2d reads rows as height
        stacked = np.stack([to_array(grid) for grid in grids])
        self._cells = torch.from_numpy(stacked).to(self.device)

        # Neighbor counting kernel (same for all batches)
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32, device=self.device)
            .unsqueeze(0)
            .unsqueeze(0)
        )  # Shape: (1, 1, 3, 3)

        logger.debug(f"Created batch of {self.batch_size} {rows}x{cols} grids on {self.device}")

    @property
    def cells(self) -> torch.Tensor:
        """Get the current cell tensor."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Get grid dimensions as (batch_size, rows, cols)."""
        return (self.batch_size, self.rows, self.cols)

    @property
    def populations(self) -> torch.Tensor:
        """Get the number of living cells in each grid.

        Returns:
            Tensor of shape (batch_size,) with population counts
        """
        return self._cells.sum(dim=(1, 2))

    def count_all_neighbors(self) -> torch.Tensor:
        """Count neighbors for all cells in all grids using convolution.

        Zero padding makes cells outside the border count as dead.

        Returns:
            3D tensor with neighbor counts for each cell in each grid
        """
        # (batch, rows, cols) -> (batch, 1, rows, cols)
        cells_float = self._cells.float().unsqueeze(1)
        neighbors = F.conv2d(cells_float, self._kernel, padding=1)

        # Shape: (batch, 1, rows, cols) -> (batch, rows, cols)
        return neighbors.squeeze(1).to(torch.uint8)

    def replace(self, cells: torch.Tensor) -> None:
        """Install a new cell tensor for the whole batch.

        Args:
            cells: Tensor of shape (batch_size, rows, cols)

        Raises:
            ValueError: If the tensor shape doesn't match the batch
        """
        if tuple(cells.shape) != self.shape:
            raise ValueError(f"Tensor shape {tuple(cells.shape)} doesn't match batch {self.shape}")
        self._cells = cells.to(device=self.device, dtype=torch.uint8)

    def extract_single(self, grid_idx: int) -> Grid[Cell]:
        """Extract a single grid from the batch.

        Args:
            grid_idx: Index of grid to extract

        Returns:
            New grid holding a copy of that batch member
        """
        return from_array(self._cells[grid_idx].cpu().numpy())

    def to_grids(self) -> List[Grid[Cell]]:
        """Extract every grid from the batch as new grid objects."""
        return [self.extract_single(i) for i in range(self.batch_size)]
