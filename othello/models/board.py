from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import Cell, Coord

SIZE = 8
CELLS = SIZE * SIZE

# 64-char wire alphabet used by move providers
WIRE_SYMBOLS = {Cell.EMPTY: "0", Cell.BLACK: "1", Cell.WHITE: "2"}
_FROM_WIRE = {v: k for k, v in WIRE_SYMBOLS.items()}
_RENDER = {Cell.EMPTY: ".", Cell.BLACK: "B", Cell.WHITE: "W"}


def index_of(row: int, col: int) -> int:
    return row * SIZE + col


def coords_of(index: int) -> Coord:
    return divmod(index, SIZE)


class Board(BaseModel):
    """Immutable 8x8 grid stored row-major; index = row * 8 + col."""

    model_config = ConfigDict(frozen=True)

    cells: tuple[Cell, ...] = Field(min_length=CELLS, max_length=CELLS)

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < SIZE and 0 <= col < SIZE

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def cell_at(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is off the board")
        return self.cells[index_of(row, col)]

    def count(self, cell: Cell) -> int:
        return sum(1 for c in self.cells if c is cell)

    def score(self) -> tuple[int, int]:
        """(black, white) disc counts."""
        return self.count(Cell.BLACK), self.count(Cell.WHITE)

    def to_wire(self) -> str:
        return "".join(WIRE_SYMBOLS[c] for c in self.cells)

    @classmethod
    def from_wire(cls, text: str) -> Board:
        if len(text) != CELLS:
            raise ValueError(f"board must have {CELLS} cells, got {len(text)}")
        try:
            return cls(cells=tuple(_FROM_WIRE[ch] for ch in text))
        except KeyError as e:
            raise ValueError(f"unknown board symbol: {e.args[0]!r}") from None

    def render(self) -> str:
        rows = []
        for r in range(SIZE):
            rows.append(" ".join(_RENDER[c] for c in self.cells[r * SIZE:(r + 1) * SIZE]))
        return "\n".join(rows)
