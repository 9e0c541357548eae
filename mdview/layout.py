"""Extents, the full-extent tag and the row-major (layout-right) mapping."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

DYNAMIC_EXTENT = None
"""Marker for an extent whose size is only known at run time."""

StaticExtent = Optional[int]


@dataclass(frozen=True)
class FullExtent:
    """Tag meaning 'the whole range of a dimension' when slicing."""

    def __repr__(self) -> str:
        return "FULL_EXTENT"


FULL_EXTENT = FullExtent()


def _check_static(extent: StaticExtent) -> StaticExtent:
    if extent is DYNAMIC_EXTENT:
        return DYNAMIC_EXTENT
    value = operator.index(extent)
    if value < 0:
        raise ValueError(f"static extent must be non-negative, got {value}")
    return value


def _check_value(extent: int) -> int:
    value = operator.index(extent)
    if value < 0:
        raise ValueError(f"extent must be non-negative, got {value}")
    return value


class Extents:
    """A multidimensional index space with static and dynamic extents.

    ``static_extents`` gives one entry per dimension: an int for a size fixed
    up front, or ``DYNAMIC_EXTENT`` for one supplied at construction.  The
    ``values`` may be omitted (dynamic extents become 0), give only the
    dynamic extents, or give every extent.
    """

    __slots__ = ("_static", "_values")

    def __init__(self, static_extents: Iterable[StaticExtent] = (), *values: int) -> None:
        static = tuple(_check_static(e) for e in static_extents)
        given = tuple(_check_value(v) for v in values)
        n_dynamic = sum(1 for e in static if e is DYNAMIC_EXTENT)

        if not given:
            full = tuple(0 if e is DYNAMIC_EXTENT else e for e in static)
        elif len(given) == n_dynamic:
            supplied = iter(given)
            full = tuple(next(supplied) if e is DYNAMIC_EXTENT else e for e in static)
        elif len(given) == len(static):
            for r, (expected, actual) in enumerate(zip(static, given)):
                if expected is not DYNAMIC_EXTENT and expected != actual:
                    raise ValueError(
                        f"extent {r} is static {expected}, cannot be set to {actual}"
                    )
            full = given
        else:
            raise ValueError(
                f"expected {n_dynamic} dynamic or {len(static)} total extents, "
                f"got {len(given)}"
            )
        self._static = static
        self._values = full

    def _check_index(self, r: int) -> int:
        r = operator.index(r)
        if not 0 <= r < len(self._static):
            raise IndexError(f"rank index {r} out of range for rank {len(self._static)}")
        return r

    def rank(self) -> int:
        return len(self._static)

    def rank_dynamic(self) -> int:
        return sum(1 for e in self._static if e is DYNAMIC_EXTENT)

    def static_extent(self, r: int) -> StaticExtent:
        return self._static[self._check_index(r)]

    def extent(self, r: int) -> int:
        return self._values[self._check_index(r)]

    @property
    def static_extents(self) -> tuple:
        """The static pattern: ints and ``DYNAMIC_EXTENT`` markers."""
        return self._static

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extents):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        dynamic = ", ".join(
            str(v) for e, v in zip(self._static, self._values) if e is DYNAMIC_EXTENT
        )
        return f"Extents({self._static!r}{', ' if dynamic else ''}{dynamic})"


def dextents(*args: int) -> Extents:
    """Extents whose every dimension is dynamic, with the given sizes."""
    return Extents((DYNAMIC_EXTENT,) * len(args), *args)


def _target_pattern(extents: Union[Extents, Sequence[StaticExtent]]) -> tuple:
    if isinstance(extents, Extents):
        return extents.static_extents
    return tuple(extents)


class LayoutRightMapping:
    """Row-major mapping: the last index varies fastest."""

    __slots__ = ("_extents",)

    def __init__(self, extents: Extents) -> None:
        if not isinstance(extents, Extents):
            raise TypeError("LayoutRightMapping requires an Extents instance")
        self._extents = extents

    @property
    def extents(self) -> Extents:
        return self._extents

    @property
    def layout_type(self) -> type:
        return LayoutRight

    def required_span_size(self) -> int:
        return math.prod(self._extents)

    def __call__(self, *indices: int) -> int:
        rank = self._extents.rank()
        if len(indices) != rank:
            raise TypeError(f"expected {rank} indices, got {len(indices)}")
        offset = 0
        for r, (index, extent) in enumerate(zip(indices, self._extents)):
            index = operator.index(index)
            if not 0 <= index < extent:
                raise IndexError(f"index {index} out of range for extent {r} of size {extent}")
            offset = offset * extent + index
        return offset

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

    def stride(self, r: int) -> int:
        r = self._extents._check_index(r)
        return math.prod(self._extents.extent(k) for k in range(r + 1, self._extents.rank()))

    def converted(self, extents: Union[Extents, Sequence[StaticExtent]]) -> "LayoutRightMapping":
        """This mapping re-expressed with another static extents pattern.

        Raises ValueError when the ranks differ or a static extent of the
        target disagrees with this mapping's extents.
        """
        pattern = _target_pattern(extents)
        if len(pattern) != self._extents.rank():
            raise ValueError(
                f"cannot convert rank {self._extents.rank()} mapping to rank {len(pattern)}"
            )
        return LayoutRightMapping(Extents(pattern, *self._extents))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutRightMapping):
            return NotImplemented
        return self._extents == other._extents

    def __hash__(self) -> int:
        return hash((LayoutRight, self._extents))

    def __repr__(self) -> str:
        return f"LayoutRightMapping({self._extents!r})"


class LayoutRight:
    """Row-major layout policy."""

    @staticmethod
    def mapping(extents: Extents) -> LayoutRightMapping:
        return LayoutRightMapping(extents)