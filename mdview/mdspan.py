"""A non-owning multidimensional view over a flat, indexable buffer."""

from __future__ import annotations

import math
import operator
from collections.abc import Sequence
from typing import Any, Optional

from .layout import Extents, LayoutRight, dextents


class _ShiftedHandle:
    """A data handle that refers to ``data`` starting at ``start``."""

    __slots__ = ("_data", "_start")

    def __init__(self, data: Any, start: int) -> None:
        if isinstance(data, _ShiftedHandle):
            start += data._start
            data = data._data
        self._data = data
        self._start = start

    def __getitem__(self, i: int) -> Any:
        return self._data[self._start + operator.index(i)]

    def __setitem__(self, i: int, value: Any) -> None:
        self._data[self._start + operator.index(i)] = value

    def __len__(self) -> int:
        return max(len(self._data) - self._start, 0)

    def __repr__(self) -> str:
        return f"_ShiftedHandle(start={self._start})"


class DefaultAccessor:
    """Plain element access: reads and writes ``data[i]``."""

    __slots__ = ()

    def access(self, data: Any, i: int) -> Any:
        return data[i]

    def store(self, data: Any, i: int, value: Any) -> None:
        data[i] = value

    def offset(self, data: Any, i: int) -> Any:
        """A data handle whose element 0 is element ``i`` of ``data``."""
        return _ShiftedHandle(data, operator.index(i))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DefaultAccessor)

    def __hash__(self) -> int:
        return hash(DefaultAccessor)

    def __repr__(self) -> str:
        return "DefaultAccessor()"


def _is_mapping(obj: Any) -> bool:
    return callable(obj) and isinstance(getattr(obj, "extents", None), Extents)


class MdSpan:
    """A view of ``data`` through a layout mapping and an accessor.

    The shape may be given as an ``Extents``, as a ready mapping, as a
    sequence of sizes, or as sizes passed directly (all dynamic).  With no
    shape the view has rank 0.
    """

    __slots__ = ("_data", "_mapping", "_accessor")

    def __init__(
        self,
        data: Any,
        *shape: Any,
        layout: Any = LayoutRight,
        accessor: Optional[Any] = None,
    ) -> None:
        if len(shape) == 1 and isinstance(shape[0], Extents):
            mapping = layout.mapping(shape[0])
        elif len(shape) == 1 and _is_mapping(shape[0]):
            mapping = shape[0]
        elif len(shape) == 1 and isinstance(shape[0], Sequence):
            mapping = layout.mapping(dextents(*shape[0]))
        else:
            mapping = layout.mapping(dextents(*shape))
        self._data = data
        self._mapping = mapping
        self._accessor = DefaultAccessor() if accessor is None else accessor

    # observers ---------------------------------------------------------

    @property
    def extents(self) -> Extents:
        return self._mapping.extents

    @property
    def data_handle(self) -> Any:
        return self._data

    @property
    def mapping(self) -> Any:
        return self._mapping

    @property
    def accessor(self) -> Any:
        return self._accessor

    def rank(self) -> int:
        return self.extents.rank()

    def rank_dynamic(self) -> int:
        return self.extents.rank_dynamic()

    def static_extent(self, r: int) -> Optional[int]:
        return self.extents.static_extent(r)

    def extent(self, r: int) -> int:
        return self.extents.extent(r)

    def size(self) -> int:
        return math.prod(self.extents)

    def empty(self) -> bool:
        return self.rank() > 0 and any(e == 0 for e in self.extents)

    def swap(self, other: "MdSpan") -> None:
        """Exchange data handle, mapping and accessor with ``other``."""
        if not isinstance(other, MdSpan):
            raise TypeError("can only swap with another MdSpan")
        self._data, other._data = other._data, self._data
        self._mapping, other._mapping = other._mapping, self._mapping
        self._accessor, other._accessor = other._accessor, self._accessor

    def is_always_unique(self) -> bool:
        return self._mapping.is_always_unique()

    def is_always_exhaustive(self) -> bool:
        return self._mapping.is_always_exhaustive()

    def is_always_strided(self) -> bool:
        return self._mapping.is_always_strided()

    def is_unique(self) -> bool:
        return self._mapping.is_unique()

    def is_exhaustive(self) -> bool:
        return self._mapping.is_exhaustive()

    def is_strided(self) -> bool:
        return self._mapping.is_strided()

    def stride(self, r: int) -> int:
        return self._mapping.stride(r)

    # element access ----------------------------------------------------

    @staticmethod
    def _indices(key: Any) -> tuple:
        if isinstance(key, tuple):
            return key
        if isinstance(key, Sequence) and not isinstance(key, (str, bytes)):
            return tuple(key)
        return (key,)

    def _offset(self, indices: tuple) -> int:
        rank = self.rank()
        if len(indices) != rank:
            raise TypeError(f"expected {rank} indices, got {len(indices)}")
        return self._mapping(*(operator.index(i) for i in indices))

    def __getitem__(self, key: Any) -> Any:
        return self._accessor.access(self._data, self._offset(self._indices(key)))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._accessor.store(self._data, self._offset(self._indices(key)), value)

    def __call__(self, *indices: Any) -> Any:
        if len(indices) == 1 and not isinstance(indices[0], int):
            indices = self._indices(indices[0])
        return self._accessor.access(self._data, self._offset(indices))

    def __repr__(self) -> str:
        return f"MdSpan(mapping={self._mapping!r}, accessor={self._accessor!r})"