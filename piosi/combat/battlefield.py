"""
Battlefield grid module for the combat core.

The battlefield is a rows x cols grid of cell markers. It mirrors the
positions of the living units and holds the static obstacles: the
destructible wall row and indestructible solid blocks.
"""

from typing import Any

from piosi.core.constants import BLOCKING_CELLS, EMPTY_CELL, SOLID_CELL, WALL_CELL


class Battlefield:
    """
    2D occupancy grid indexed as cells[y][x].

    Attributes:
        rows (int):
            Number of rows of the grid.
        cols (int):
            Number of columns of the grid.
        cells (list[list[str]]):
            The cell markers.

    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Battlefield needs at least one cell, got {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.cells: list[list[str]] = [[EMPTY_CELL] * cols for _ in range(rows)]

    # === Queries ===

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def get(self, x: int, y: int) -> str:
        return self.cells[y][x]

    def is_empty(self, x: int, y: int) -> bool:
        """True if the cell exists and holds nothing."""
        return self.in_bounds(x, y) and self.cells[y][x] == EMPTY_CELL

    def is_wall(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] == WALL_CELL

    def is_blocking(self, x: int, y: int) -> bool:
        """True if the cell holds a wall segment or a solid block."""
        return self.in_bounds(x, y) and self.cells[y][x] in BLOCKING_CELLS

    # === Mutation ===

    def set(self, x: int, y: int, marker: str) -> None:
        self.cells[y][x] = marker

    def clear(self, x: int, y: int) -> None:
        if self.in_bounds(x, y):
            self.cells[y][x] = EMPTY_CELL

    def build_wall_row(self) -> None:
        """Fill the bottom row with destructible wall segments."""
        for x in range(self.cols):
            self.cells[self.rows - 1][x] = WALL_CELL

    def place_solid(self, x: int, y: int) -> None:
        self.cells[y][x] = SOLID_CELL

    def place(self, unit: Any) -> None:
        """Write a unit's symbol at its current position."""
        self.cells[unit.y][unit.x] = unit.symbol

    def remove(self, unit: Any) -> None:
        """Clear the cell of a unit leaving the grid."""
        if self.in_bounds(unit.x, unit.y) and self.cells[unit.y][unit.x] == unit.symbol:
            self.cells[unit.y][unit.x] = EMPTY_CELL

    def move(self, unit: Any, x: int, y: int) -> None:
        """Move a unit to a new cell, clearing the one it leaves."""
        self.cells[unit.y][unit.x] = EMPTY_CELL
        unit.x = x
        unit.y = y
        self.cells[y][x] = unit.symbol

    # === Views ===

    def snapshot(self) -> tuple[tuple[str, ...], ...]:
        """Immutable copy of the grid for renderers."""
        return tuple(tuple(row) for row in self.cells)

    def __str__(self) -> str:
        return "\n".join("".join(row) for row in self.cells)
