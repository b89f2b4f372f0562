"""Conway's Game of Life implementation."""

import logging
from collections import deque
from typing import Deque, Dict, List, Tuple

from .cell import Cell, population, state_key
from .grid import Grid

logger = logging.getLogger(__name__)


class CycleTracker:
    """Remembers recent generations to spot a repeated state.

    Only the newest ``window`` states are kept, so cycles longer than the
    window go unnoticed.
    """

    def __init__(self, window: int) -> None:
        self._order: Deque[Tuple[bytes, int]] = deque()
        self._first_seen: Dict[bytes, int] = {}
        self.window = window
        self.length = 0
        self.start = 0

    @property
    def found(self) -> bool:
        return self.length > 0

    def __len__(self) -> int:
        return len(self._first_seen)

    def observe(self, key: bytes, generation: int) -> bool:
        """Record the state of ``generation``; return True on a repeat."""
        if self.found:
            return True

        start = self._first_seen.get(key)
        if start is not None:
            self.start, self.length = start, generation - start
            return True

        if self.window <= 0:
            return False

        if len(self._order) == self.window:
            expired, _ = self._order.popleft()
            del self._first_seen[expired]
        self._order.append((key, generation))
        self._first_seen[key] = generation
        return False

    def forget(self) -> None:
        self._order.clear()
        self._first_seen.clear()
        self.length = 0
        self.start = 0


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic rules on a clamped (non-wrapping) grid:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Each step builds the next generation in a new grid and then replaces
    the current one, so a generation is never observed half updated.
    """

    def __init__(
        self,
        grid: Grid[Cell],
        history_size: int = 100,
        state_history_size: int = 1000,
    ) -> None:
        """Initialize the game with a grid.

        Args:
            grid: Initial generation
            history_size: Number of population counts to keep
            state_history_size: Number of past states kept for cycle detection
        """
        self._grid = grid
        self._generation = 0
        self._populations: Deque[int] = deque([population(grid)], maxlen=history_size)
        self._cycles = CycleTracker(state_history_size)

    @classmethod
    def from_grid(cls, grid: Grid[Cell], **kwargs) -> "GameOfLife":
        """Create a game whose first generation is ``grid``."""
        return cls(grid, **kwargs)

    @property
    def grid(self) -> Grid[Cell]:
        return self._grid

    def get_grid(self) -> Grid[Cell]:
        """Get the current generation."""
        return self._grid

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> int:
        """Living cells in the current generation."""
        return population(self._grid)

    @property
    def population_history(self) -> List[int]:
        """Population of the most recent generations, oldest first."""
        return list(self._populations)

    @property
    def cycle_detected(self) -> bool:
        return self._cycles.found

    @property
    def cycle_length(self) -> int:
        """Period of the detected cycle, 0 while none is known."""
        return self._cycles.length

    @property
    def cycle_start_generation(self) -> int:
        """First generation of the detected cycle, 0 while none is known."""
        return self._cycles.start

    def step(self) -> None:
        """Advance the simulation by one generation."""
        if not self._cycles.found and self._cycles.observe(state_key(self._grid), self._generation):
            logger.debug(
                f"Generation {self._generation} repeats generation "
                f"{self._cycles.start} (period {self._cycles.length})"
            )

        self._grid = self.next_generation(self._grid)

        self._generation += 1
        self._populations.append(self.population)

    @classmethod
    def next_generation(cls, current: Grid[Cell]) -> Grid[Cell]:
        """Compute the successor of a generation without modifying it.

        Args:
            current: Generation to read from

        Returns:
            New grid holding the next generation
        """
        rows, cols = current.size()
        successor: Grid[Cell] = Grid(rows, cols, Cell.default)

        for row, col in current.coordinates():
            live_neighbours = cls._count_live_neighbours(current, row, col)
            if cls._next_state(current.get(row, col), live_neighbours) == Cell.ALIVE:
                successor.set(Cell.ALIVE, row, col)

        return successor

    @staticmethod
    def _count_live_neighbours(grid: Grid[Cell], row: int, col: int) -> int:
        """Count living neighbours, stopping early past 3.

        Counts above 3 all lead to the same outcome, so the result is only
        exact up to 4.
        """
        count = 0
        for neighbour_row, neighbour_col in grid.neighbours(row, col):
            if grid.get(neighbour_row, neighbour_col) == Cell.ALIVE:
                count += 1
                if count > 3:
                    break
        return count

    @staticmethod
    def _next_state(cell: Cell, live_neighbours: int) -> Cell:
        if live_neighbours == 3 or (cell == Cell.ALIVE and live_neighbours == 2):
            return Cell.ALIVE
        return Cell.DEAD

    def reset(self, clear_grid: bool = True) -> None:
        """Start counting generations from zero again.

        Args:
            clear_grid: Also swap in an all-dead grid of the same size
        """
        if clear_grid:
            self._grid = Grid(*self._grid.size(), Cell.default)

        self._generation = 0
        self._populations.clear()
        self._populations.append(self.population)
        self._cycles.forget()

    def clear_cycle_detection(self) -> None:
        """Forget every remembered state.

        Call this after editing the current grid by hand; states recorded
        before the edit no longer describe the same run.
        """
        self._cycles.forget()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Step until the run repeats itself, dies out or hits the limit.

        Returns:
            (generation, reason) with reason 'cycle', 'extinction' or
            'max_generations'
        """
        reason = "max_generations"
        for _ in range(max_generations):
            self.step()
            if self.cycle_detected:
                reason = "cycle"
                break
            if self.population == 0:
                reason = "extinction"
                break
        return self._generation, reason
