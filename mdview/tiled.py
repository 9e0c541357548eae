"""A two-dimensional tiled layout: column-major across tiles, row-major inside."""

from __future__ import annotations

import argparse
import operator
from typing import Optional, Sequence

from .layout import Extents, dextents
from .mdspan import MdSpan


class SimpleTileMapping:
    """Maps a 2-D index to an offset in a buffer made of fixed-size tiles.

    Tiles are laid out column-major (the row-tile index varies fastest);
    the elements inside each tile are row-major.  Tiles at the bottom and
    right edges are padded to full size.
    """

    __slots__ = ("_extents", "_row_tile", "_col_tile")

    def __init__(self, extents: Extents, row_tile: int, col_tile: int) -> None:
        if not isinstance(extents, Extents):
            raise TypeError("SimpleTileMapping requires an Extents instance")
        if extents.rank() != 2:
            raise ValueError(f"tiled layout needs rank 2 extents, got rank {extents.rank()}")
        row_tile = operator.index(row_tile)
        col_tile = operator.index(col_tile)
        if row_tile <= 0 or col_tile <= 0:
            raise ValueError("tile sizes must be positive")
        if extents.extent(0) <= 0 or extents.extent(1) <= 0:
            raise ValueError("extents must be positive")
        self._extents = extents
        self._row_tile = row_tile
        self._col_tile = col_tile

    @property
    def extents(self) -> Extents:
        return self._extents

    @property
    def layout_type(self) -> type:
        return SimpleTileLayout2D

    @property
    def row_tile_size(self) -> int:
        return self._row_tile

    @property
    def col_tile_size(self) -> int:
        return self._col_tile

    def n_row_tiles(self) -> int:
        return -(-self._extents.extent(0) // self._row_tile)

    def n_column_tiles(self) -> int:
        return -(-self._extents.extent(1) // self._col_tile)

    def tile_size(self) -> int:
        return self._row_tile * self._col_tile

    def tile_offset(self, row: int, col: int) -> int:
        """Offset of the first element of the tile holding ``(row, col)``."""
        col_tile = col // self._col_tile
        row_tile = row // self._row_tile
        return (col_tile * self.n_row_tiles() + row_tile) * self.tile_size()

    def offset_in_tile(self, row: int, col: int) -> int:
        """Position of ``(row, col)`` within its tile."""
        return (row % self._row_tile) * self._col_tile + col % self._col_tile

    def required_span_size(self) -> int:
        return self.n_row_tiles() * self.n_column_tiles() * self.tile_size()

    def __call__(self, *indices: int) -> int:
        if len(indices) != 2:
            raise TypeError(f"expected 2 indices, got {len(indices)}")
        row, col = (operator.index(i) for i in indices)
        for r, (index, extent) in enumerate(zip((row, col), self._extents)):
            if not 0 <= index < extent:
                raise IndexError(f"index {index} out of range for extent {r} of size {extent}")
        return self.tile_offset(row, col) + self.offset_in_tile(row, col)

    def is_always_unique(self) -> bool:
        return True

    def is_always_exhaustive(self) -> bool:
        return False

    def is_always_strided(self) -> bool:
        return False

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return (
            self._extents.extent(0) % self._row_tile == 0
            and self._extents.extent(1) % self._col_tile == 0
        )

    def is_strided(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleTileMapping):
            return NotImplemented
        return (self._extents, self._row_tile, self._col_tile) == (
            other._extents,
            other._row_tile,
            other._col_tile,
        )

    def __hash__(self) -> int:
        return hash((SimpleTileLayout2D, self._extents, self._row_tile, self._col_tile))

    def __repr__(self) -> str:
        return f"SimpleTileMapping({self._extents!r}, {self._row_tile}, {self._col_tile})"


class SimpleTileLayout2D:
    """Layout policy producing ``SimpleTileMapping`` instances."""

    @staticmethod
    def mapping(extents: Extents, row_tile: int, col_tile: int) -> SimpleTileMapping:
        return SimpleTileMapping(extents, row_tile, col_tile)


_FILLER = -1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check a hand-tiled 2x5 array against its row-major counterpart."""
    parser = argparse.ArgumentParser(
        description="Compare a 3x3-tiled 2x5 array with the same array stored row-major."
    )
    parser.parse_args(argv)

    n_rows, n_cols = 2, 5
    data_row_major = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    x = _FILLER
    data_tiled = [
        1, 2, 3, 6, 7, 8, x, x, x,
        4, 5, x, 9, 10, x, x, x, x,
    ]

    extents = dextents(n_rows, n_cols)
    tiled = MdSpan(data_tiled, SimpleTileLayout2D.mapping(extents, 3, 3))
    row_major = MdSpan(data_row_major, extents)

    failures = 0
    for irow in range(n_rows):
        for icol in range(n_cols):
            if tiled[irow, icol] != row_major[irow, icol]:
                print(f"Mismatch for entry {irow}, {icol}:")
                print(f"  tiled({irow}, {icol}) = {tiled[irow, icol]}")
                print(f"  row_major({irow}, {icol}) = {row_major[irow, icol]}")
                failures += 1
    if failures == 0:
        print("Success! SimpleTiledLayout2D works as expected.")
    return 0 if failures == 0 else 1