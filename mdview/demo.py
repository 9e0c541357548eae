"""Small demonstrations: a 2-D dot product and printing a view's elements."""

from __future__ import annotations

import argparse
import itertools
import math
import operator
from typing import Any, Iterator, Optional, Sequence

from .layout import Extents, dextents
from .mdspan import MdSpan

_ROWS = 3
_COLS = 3


def _require_rank_2(span: Any, name: str) -> None:
    if span.rank() != 2:
        raise ValueError(f"{name} must have rank 2, got rank {span.rank()}")


def dot_product(a: Any, b: Any) -> Any:
    """Sum of elementwise products of two rank-2 views of equal shape."""
    _require_rank_2(a, "a")
    _require_rank_2(b, "b")
    shape = (a.extent(0), a.extent(1))
    if (b.extent(0), b.extent(1)) != shape:
        raise ValueError(
            f"shape mismatch: {shape} vs {(b.extent(0), b.extent(1))}"
        )
    return sum(
        a[i, j] * b[i, j] for i, j in itertools.product(range(shape[0]), range(shape[1]))
    )


def fill_in_order(a: Any) -> None:
    """Write 0, 1, 2, ... into a rank-2 view in logical row-major order."""
    _require_rank_2(a, "a")
    positions = itertools.product(range(a.extent(0)), range(a.extent(1)))
    for count, (i, j) in enumerate(positions):
        a[i, j] = count


def describe(span: Any) -> Iterator[str]:
    """Yield ``m(i, j) == value`` for every index of ``span`` in row-major order."""
    ranges = (range(span.extent(r)) for r in range(span.rank()))
    for index in itertools.product(*ranges):
        yield f"m({', '.join(str(i) for i in index)}) == {span[index]}"


class _LayoutLeftMapping:
    """Column-major mapping: the first index varies fastest."""

    __slots__ = ("_extents",)

    def __init__(self, extents: Extents) -> None:
        self._extents = extents

    @property
    def extents(self) -> Extents:
        return self._extents

    def required_span_size(self) -> int:
        return math.prod(self._extents)

    def __call__(self, *indices: int) -> int:
        if len(indices) != self._extents.rank():
            raise TypeError(f"expected {self._extents.rank()} indices, got {len(indices)}")
        offset = 0
        for r, (index, extent) in reversed(list(enumerate(zip(indices, self._extents)))):
            index = operator.index(index)
            if not 0 <= index < extent:
                raise IndexError(f"index {index} out of range for extent {r} of size {extent}")
            offset = offset * extent + index
        return offset

    def stride(self, r: int) -> int:
        return math.prod(self._extents.extent(k) for k in range(r))

    def is_always_unique(self) -> bool:
        return True

    def is_always_exhaustive(self) -> bool:
        return True

    def is_always_strided(self) -> bool:
        return True

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return True

    def is_strided(self) -> bool:
        return True


class _LayoutLeft:
    @staticmethod
    def mapping(extents: Extents) -> _LayoutLeftMapping:
        return _LayoutLeftMapping(extents)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print two dot products and the elements of a small 3x3 view."""
    parser = argparse.ArgumentParser(
        description="Dot products of filled 3x3 views, then a listing of a 3x3 view."
    )
    parser.parse_args(argv)

    data_a = [0] * (_ROWS * _COLS)
    data_b = [0] * (_ROWS * _COLS)
    a = MdSpan(data_a, _ROWS, _COLS)
    b = MdSpan(data_b, _ROWS, _COLS, layout=_LayoutLeft)
    fill_in_order(a)
    fill_in_order(b)
    print(dot_product(a, b))

    static_shape = Extents((_ROWS, _COLS))
    a = MdSpan([0] * 100, static_shape)
    b = MdSpan([0] * 100, static_shape)
    fill_in_order(a)
    fill_in_order(b)
    print(dot_product(a, b))

    d = [
        0, 5, 1,
        3, 8, 4,
        2, 7, 6,
    ]
    for line in describe(MdSpan(d, dextents(3, 3))):
        print(line)
    return 0