# maze.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple
import random
import re

Pos = Tuple[int, int]  # (x, y) with x = col, y = row

WALL = "#"
OPEN = " "
LINE_END = "\r\n"

_LINE_SPLIT = re.compile(r"[\r\n]")


class MalformedInput(ValueError):
    """Raised when maze text cannot be turned into a rectangular grid."""


@dataclass(frozen=True)
class MazeGrid:
    """
    Rectangular grid of cells stored row-major:

        index = row * cols + col

    tiles[i] is True for a wall ('#') and False for an open cell.
    Instances are immutable; build them with load() / load_file() / generate().
    """
    cols: int
    rows: int
    tiles: Tuple[bool, ...]

    # ------------------------------------------------------------------ #
    # Parsing / serialization                                            #
    # ------------------------------------------------------------------ #
    @classmethod
    def load(cls, source: str) -> "MazeGrid":
        """
        Parse maze text. '\\r' and '\\n' both delimit rows and lines that are
        empty or whitespace-only are dropped; every remaining line must be as
        wide as the first.

        A fully open row must therefore use a non-blank open character
        (e.g. '.'); written back by to_text() it becomes spaces and is
        dropped on the next load.
        """
        lines = [line for line in _LINE_SPLIT.split(source) if line.strip()]
        if not lines:
            raise MalformedInput("Maze source is empty")

        cols = len(lines[0])
        rows = len(lines)
        for i, line in enumerate(lines):
            if len(line) != cols:
                raise MalformedInput(
                    f"Number of columns ({len(line)}) at line {i} "
                    f"is different than expected: {cols}"
                )

        tiles = tuple(c == WALL for line in lines for c in line)
        if len(tiles) != cols * rows:
            raise MalformedInput(f"Expected {cols * rows} tiles, got {len(tiles)}")

        return cls(cols=cols, rows=rows, tiles=tiles)

    @classmethod
    def load_file(cls, path: str | Path) -> "MazeGrid":
        path = Path(path)
        try:
            # newline="" keeps '\r\n' intact; load() handles both delimiters
            with path.open("r", encoding="utf-8", newline="") as f:
                contents = f.read()
        except FileNotFoundError:
            raise MalformedInput(f"Maze file not found: {path}")
        except (PermissionError, IsADirectoryError, UnicodeDecodeError) as e:
            raise MalformedInput(f"Cannot read maze file {path}: {e}")
        return cls.load(contents)

    def to_text(self) -> str:
        """Serialize with '#' for walls, ' ' for open cells and '\\r\\n' after every row."""
        out: List[str] = []
        for row in range(self.rows):
            start = row * self.cols
            out.append(
                "".join(WALL if t else OPEN for t in self.tiles[start : start + self.cols])
            )
            out.append(LINE_END)
        return "".join(out)

    def __str__(self) -> str:
        return self.to_text()

    # ------------------------------------------------------------------ #
    # Random generation                                                  #
    # ------------------------------------------------------------------ #
    @classmethod
    def generate(
        cls,
        cols: int,
        rows: int,
        wall_density: float = 0.25,
        rng: Optional[random.Random] = None,
    ) -> "MazeGrid":
        """Each cell independently becomes a wall with probability wall_density."""
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid must be at least 1x1, got {cols}x{rows}")
        if not 0.0 <= wall_density <= 1.0:
            raise ValueError(f"wall_density must be in [0, 1], got {wall_density}")
        rng = rng or random.Random()
        tiles = tuple(rng.random() < wall_density for _ in range(cols * rows))
        return cls(cols=cols, rows=rows, tiles=tiles)

    # ------------------------------------------------------------------ #
    # Basic queries                                                      #
    # ------------------------------------------------------------------ #
    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def get_index(self, col: int, row: int) -> Optional[int]:
        if not self.in_bounds(col, row):
            return None
        return row * self.cols + col

    def get_cell(self, col: int, row: int) -> Optional[Tuple[int, bool]]:
        """(index, is_wall) for an in-bounds cell, None otherwise."""
        index = self.get_index(col, row)
        if index is None:
            return None
        return index, self.tiles[index]

    def index_to_pos(self, index: int) -> Pos:
        row, col = divmod(index, self.cols)
        return col, row

    def is_wall(self, col: int, row: int) -> bool:
        cell = self.get_cell(col, row)
        return cell is not None and cell[1]

    def open_cells(self) -> Iterator[Pos]:
        for i, wall in enumerate(self.tiles):
            if not wall:
                yield self.index_to_pos(i)

    @property
    def wall_count(self) -> int:
        return sum(self.tiles)
