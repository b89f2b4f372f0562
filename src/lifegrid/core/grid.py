"""Grid data structure for cellular automata."""

import copy
import itertools
import logging
from typing import Any, Callable, Generic, Iterator, List, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Coordinate = Tuple[int, int]


class Grid(Generic[T]):
    """A fixed-size dense 2D grid of values.

    Elements live in a single flat list in column-major order, so the
    element at ``(row, col)`` is stored at index ``col * rows + row``.
    Coordinates outside ``[0, rows) x [0, cols)`` are rejected, never
    clamped or wrapped.
    """

    def __init__(self, rows: int, cols: int, default_factory: Callable[[], T]) -> None:
        """Initialize a grid filled with default values.

        Args:
            rows: Number of rows
            cols: Number of columns
            default_factory: Zero-argument callable producing the default
                element, called once per slot

        Raises:
            ValueError: If either dimension is negative
        """
        self._check_dimensions(rows, cols)
        self._rows = rows
        self._cols = cols
        self._cells: List[T] = [default_factory() for _ in range(rows * cols)]
        logger.debug(f"Created {rows}x{cols} grid")

    @classmethod
    def from_sequence(cls, values: Sequence[T], rows: int, cols: int) -> "Grid[T]":
        """Create a grid from a flat sequence in column-major order.

        Args:
            values: Exactly ``rows * cols`` elements
            rows: Number of rows
            cols: Number of columns

        Returns:
            New grid holding its own copy of the values

        Raises:
            ValueError: If the number of values doesn't match the dimensions
        """
        cls._check_dimensions(rows, cols)
        if len(values) != rows * cols:
            raise ValueError(
                f"Expected {rows * cols} values for a {rows}x{cols} grid, got {len(values)}"
            )

        grid = cls.__new__(cls)
        grid._rows = rows
        grid._cols = cols
        grid._cells = list(values)
        return grid

    @staticmethod
    def _check_dimensions(rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {rows}x{cols}")

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    def size(self) -> Tuple[int, int]:
        """Get grid dimensions as (rows, cols)."""
        return (self._rows, self._cols)

    def contains(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies inside the grid."""
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.contains(row, col):
            raise IndexError(
                f"Coordinates ({row}, {col}) out of bounds for {self._rows}x{self._cols} grid"
            )

    def _index(self, row: int, col: int) -> int:
        self._check_bounds(row, col)
        return col * self._rows + row

    def get(self, row: int, col: int) -> T:
        """Get the element at a coordinate.

        Raises:
            IndexError: If the coordinate is outside the grid
        """
        return self._cells[self._index(row, col)]

    def set(self, value: T, row: int, col: int) -> None:
        """Overwrite the element at a coordinate.

        Raises:
            IndexError: If the coordinate is outside the grid
        """
        self._cells[self._index(row, col)] = value

    def neighbours(self, row: int, col: int) -> Iterator[Coordinate]:
        """Enumerate the in-bounds Moore neighbours of a cell.

        Candidates cover rows ``max(row - 1, 0)`` to ``row + 1`` and the same
        for columns; anything outside the grid and the cell itself are
        dropped. Corner cells get 3 neighbours, edge cells 5, interior
        cells 8. Each call returns a new lazy iterator. The grid must not
        be modified while the iterator is being consumed.

        Args:
            row: Row of the centre cell
            col: Column of the centre cell

        Returns:
            Iterator over (row, col) pairs in row-major order

        Raises:
            IndexError: If the centre coordinate is outside the grid
        """
        self._check_bounds(row, col)

        candidates = itertools.product(
            range(max(row - 1, 0), row + 2),
            range(max(col - 1, 0), col + 2),
        )
        return (
            (r, c)
            for r, c in candidates
            if r < self._rows and c < self._cols and (r, c) != (row, col)
        )

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every coordinate in row-major order."""
        return itertools.product(range(self._rows), range(self._cols))

    def values(self) -> Iterator[T]:
        """Iterate over elements in storage (column-major) order.

        This is the order accepted by :meth:`from_sequence`.
        """
        return iter(self._cells)

    def copy(self) -> "Grid[T]":
        """Return an independent copy of this grid."""
        return self.from_sequence(copy.deepcopy(self._cells), self._rows, self._cols)

    def __copy__(self) -> "Grid[T]":
        return self.copy()

    def __deepcopy__(self, memo: Any) -> "Grid[T]":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same size and elements."""
        if not isinstance(other, Grid):
            return False
        return self.size() == other.size() and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols})"

    def __str__(self) -> str:
        """String representation with one line per row."""
        return "\n".join(
            "".join(str(self.get(row, col)) for col in range(self._cols))
            for row in range(self._rows)
        )
