"""An owning multidimensional array: a layout mapping plus its own container."""

from __future__ import annotations

import copy as _copy
import math
from collections.abc import Sequence
from typing import Any, Callable, Optional

from .layout import Extents, LayoutRight, StaticExtent, dextents
from .mdspan import MdSpan


def _looks_like_mapping(obj: Any) -> bool:
    return callable(obj) and isinstance(getattr(obj, "extents", None), Extents)


def _zeros(size: int) -> list:
    return [0] * size


class MdArray:
    """A multidimensional array that owns its element container.

    The shape is given like ``MdSpan``'s: an ``Extents``, a ready mapping,
    a sequence of sizes, or sizes passed directly.  ``static_extents`` gives
    the static pattern that sizes are matched against.  Passing another
    ``MdArray`` copies its mapping and container.

    Without ``container`` a new one of ``required_span_size()`` elements is
    made by ``factory`` (zero-filled list by default).  A given container is
    copied unless ``copy`` is false, in which case it is adopted as is.
    """

    __slots__ = ("_mapping", "_container")

    def __init__(
        self,
        *shape: Any,
        container: Optional[Any] = None,
        layout: Any = LayoutRight,
        static_extents: Optional[Sequence[StaticExtent]] = None,
        factory: Optional[Callable[[int], Any]] = None,
        copy: bool = True,
    ) -> None:
        if len(shape) == 1 and isinstance(shape[0], MdArray):
            other = shape[0]
            mapping = other._mapping
            if static_extents is not None:
                mapping = mapping.converted(static_extents)
            if container is None:
                container = other._container
                copy = True
        else:
            mapping = self._build_mapping(shape, layout, static_extents)

        required = mapping.required_span_size()
        if container is None:
            container = (factory or _zeros)(required)
        elif copy:
            container = _copy.copy(container)

        if len(container) < required:
            raise ValueError(
                f"container holds {len(container)} elements, "
                f"mapping requires {required}"
            )
        self._mapping = mapping
        self._container = container

    @staticmethod
    def _build_mapping(
        shape: tuple, layout: Any, static_extents: Optional[Sequence[StaticExtent]]
    ) -> Any:
        if len(shape) == 1 and _looks_like_mapping(shape[0]):
            if static_extents is not None:
                raise TypeError("static_extents cannot be combined with a mapping")
            return shape[0]
        if len(shape) == 1 and isinstance(shape[0], Extents):
            extents = shape[0]
            if static_extents is not None:
                extents = Extents(static_extents, *extents)
            return layout.mapping(extents)
        if len(shape) == 1 and isinstance(shape[0], Sequence):
            sizes = tuple(shape[0])
        else:
            sizes = shape
        if static_extents is None:
            return layout.mapping(dextents(*sizes))
        return layout.mapping(Extents(static_extents, *sizes))

    # observers ---------------------------------------------------------

    @property
    def extents(self) -> Extents:
        return self._mapping.extents

    @property
    def mapping(self) -> Any:
        return self._mapping

    @property
    def container(self) -> Any:
        return self._container

    @property
    def data(self) -> Any:
        """The container that holds the elements."""
        return self._container

    def rank(self) -> int:
        return self.extents.rank()

    def rank_dynamic(self) -> int:
        return self.extents.rank_dynamic()

    def static_extent(self, r: int) -> Optional[int]:
        return self.extents.static_extent(r)

    def extent(self, r: int) -> int:
        return self.extents.extent(r)

    def size(self) -> int:
        """Number of elements held by the container."""
        return len(self._container)

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

    def to_mdspan(self, accessor: Optional[Any] = None) -> MdSpan:
        """A view sharing this array's container and mapping."""
        return MdSpan(self._container, self._mapping, accessor=accessor)

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
        return self._mapping(*indices)

    def __getitem__(self, key: Any) -> Any:
        return self._container[self._offset(self._indices(key))]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._container[self._offset(self._indices(key))] = value

    def __call__(self, *indices: Any) -> Any:
        if len(indices) == 1 and not isinstance(indices[0], int):
            indices = self._indices(indices[0])
        return self._container[self._offset(indices)]

    def __repr__(self) -> str:
        return f"MdArray(mapping={self._mapping!r}, size={len(self._container)})"