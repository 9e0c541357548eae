# mdview

`mdview` puts a multidimensional index space over a flat Python sequence
such as a list. It keeps three things apart:

- **Extents** (`mdview.layout.Extents`) describe the shape: the number of
  dimensions and the length of each. A dimension is either static (fixed
  in the pattern) or dynamic (marked `DYNAMIC_EXTENT`, which is `None`, and
  given a size when the extents are built). `dextents(*sizes)` builds
  extents whose dimensions are all dynamic.
- **Layout mappings** turn a multidimensional index into an offset in the
  flat sequence. `LayoutRight.mapping(extents)` gives the row-major
  mapping (the last index varies fastest).
  `SimpleTileLayout2D.mapping(extents, row_tile, col_tile)` in
  `mdview.tiled` lays a 2-D shape out in tiles: tiles are stored
  column-major, elements inside a tile row-major, and edge tiles are
  padded to full size.
- **Views and arrays.** `MdSpan` (`mdview.mdspan`) is a non-owning view
  made of a data handle, a mapping and an accessor (`DefaultAccessor` by
  default). `MdArray` (`mdview.mdarray`) owns its container and can hand
  out an `MdSpan` over it with `to_mdspan()`.

It has no runtime dependencies.

## Installation

```
pip install mdview
```

To run the test suite, install the `test` extra and run pytest:

```
pip install "mdview[test]"
pytest
```

## Extents and mappings

```python
from mdview.layout import Extents, LayoutRight, dextents, DYNAMIC_EXTENT

ext = dextents(16, 32)
print(ext.rank(), ext.rank_dynamic())        # 2 2
print(ext.extent(0), ext.extent(1))          # 16 32

mixed = Extents((2, DYNAMIC_EXTENT), 3)      # first static, second dynamic
print(mixed.rank_dynamic(), list(mixed))     # 1 [2, 3]

m = LayoutRight.mapping(ext)
print(m.stride(0), m.stride(1))              # 32 1
print(m.required_span_size())                # 512
print(m(1, 2))                               # 34
```

`Extents` accepts either only the dynamic sizes or every size; a size that
disagrees with a static extent raises `ValueError`. Two extents compare
equal when their sizes are equal, whatever their static pattern.
`LayoutRightMapping.converted(pattern)` re-expresses a mapping with
another static pattern of the same rank.

Every mapping answers the same questions: `required_span_size()`,
`stride(r)` (row-major mapping only), and `is_unique()`,
`is_exhaustive()`, `is_strided()` with their `is_always_*` forms. Calling
a mapping with an index out of range raises `IndexError`; the wrong number
of indices raises `TypeError`.

`FullExtent` (and its instance `FULL_EXTENT`) is a tag for "the whole
range of a dimension".

## Views

```python
from mdview.mdspan import MdSpan

data = [0] * 6
s = MdSpan(data, 2, 3)          # sizes, a sequence of sizes, Extents, or a mapping
s[1, 2] = 5
print(data[5], s(1, 2))         # 5 5
print(s.size(), s.empty())      # 6 False
```

The `layout=` keyword picks the layout policy and `accessor=` the
accessor. `MdSpan` passes the mapping questions through and adds
`rank()`, `rank_dynamic()`, `static_extent(r)`, `extent(r)`, `size()`,
`empty()` and `swap(other)`.

## Owning arrays

```python
from mdview.mdarray import MdArray

a = MdArray(2, 3)                          # zero-filled list of 6 elements
a[1, 0] = 7
print(a.container)                         # [0, 0, 0, 7, 0, 0]

b = MdArray(3, static_extents=(2, None))   # shape 2 x 3, one dynamic extent
print(b.rank_dynamic())                    # 1

c = MdArray(2, 2, container=[42, 17, 71, 24])
view = c.to_mdspan()
print(view[1, 0])                          # 71
```

A given container is copied unless `copy=False`; without one, `factory`
(a zero-filled list by default) makes one of `required_span_size()`
elements. A container shorter than the mapping needs raises `ValueError`.
`size()` is the container's length.

## Tiled layout

```python
from mdview.layout import dextents
from mdview.tiled import SimpleTileLayout2D

tiles = SimpleTileLayout2D.mapping(dextents(2, 5), 3, 3)
print(tiles.n_row_tiles(), tiles.n_column_tiles())   # 1 2
print(tiles.required_span_size())                    # 18
print(tiles.is_exhaustive())                         # False
```

The mapping is exhaustive only when both tile sizes divide the extents.
It needs rank-2 extents and positive sizes, otherwise `ValueError`.

## Command-line demos

```
mdview-demo
```

Fills two 3×3 views with 0, 1, 2, … in index order (one row-major, one
column-major), prints their dot product, does the same for two views with
static extents, and then prints each element of a small 3×3 view as
`m(i, j) == value`. The helpers are `dot_product(a, b)`,
`fill_in_order(a)` and `describe(span)` in `mdview.demo`.

```
mdview-tiled
```

Reads a 2×5 matrix through a row-major view and through a 3×3 tiled view,
reports every entry where they disagree, and prints a success message when
they all match. It exits with status 0 on success, 1 otherwise.

## What it does not do

- Only the row-major and the tiled layouts are public. There is no public
  column-major or arbitrary-stride layout.
- There is no slicing into sub-views; `FullExtent` is only a tag.
- Views work on any indexable Python sequence; there is no interoperation
  with array libraries and no attention to memory alignment or speed.