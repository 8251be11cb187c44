"""Fixed-size two-dimensional container used for every board layer."""
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Position = Tuple[int, int]


@dataclass(frozen=True)
class Grid(Generic[T]):
    """Immutable row-major grid addressed by (row, col).

    Reads outside the grid return None and writes outside it return the
    grid unchanged, so callers never have to bounds-check first.
    """
    cells: Tuple[Tuple[T, ...], ...]

    def __post_init__(self) -> None:
        if self.cells:
            width = len(self.cells[0])
            for row in self.cells:
                if len(row) != width:
                    raise ValueError("Every grid row must have the same width")

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]]) -> "Grid[T]":
        """Build a grid from an iterable of equally wide rows."""
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_flat(cls, values: Sequence[T], width: int) -> "Grid[T]":
        """Reshape a flat sequence into rows of `width` values."""
        if width < 1 or len(values) % width != 0:
            raise ValueError(f"Cannot reshape {len(values)} values into rows of {width}")
        return cls(tuple(
            tuple(values[start:start + width])
            for start in range(0, len(values), width)
        ))

    @classmethod
    def filled(cls, height: int, width: int, value: T) -> "Grid[T]":
        """Build a height x width grid holding the same value in every cell."""
        return cls(tuple(tuple(value for _ in range(width)) for _ in range(height)))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def columns(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def size(self) -> int:
        return self.rows * self.columns

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def get(self, row: int, col: int) -> Optional[T]:
        if not self.contains(row, col):
            return None
        return self.cells[row][col]

    def set(self, row: int, col: int, value: T) -> "Grid[T]":
        return self.update({(row, col): value})

    def update(self, changes: Mapping[Position, T]) -> "Grid[T]":
        """Return a copy with every in-range position in `changes` replaced."""
        changed = [(pos, value) for pos, value in changes.items() if self.contains(*pos)]
        if not changed:
            return self
        rows: List[List[T]] = [list(row) for row in self.cells]
        for (row, col), value in changed:
            rows[row][col] = value
        return Grid.from_rows(rows)

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.columns):
                yield row, col

    def values(self) -> Iterator[T]:
        for row in self.cells:
            yield from row

    def neighbors(self, row: int, col: int) -> List[Position]:
        """In-range positions of the (up to 8) cells around (row, col)."""
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.contains(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def map(self, fn: Callable[[T], U]) -> "Grid[U]":
        return Grid(tuple(tuple(fn(value) for value in row) for row in self.cells))

    def indexed_map(self, fn: Callable[[int, int, T], U]) -> "Grid[U]":
        return Grid(tuple(
            tuple(fn(row_index, col_index, value) for col_index, value in enumerate(row))
            for row_index, row in enumerate(self.cells)
        ))
