import pytest

from mdview.demo import describe, dot_product, fill_in_order, main
from mdview.layout import Extents, dextents
from mdview.mdarray import MdArray
from mdview.mdspan import MdSpan
from mdview.tiled import SimpleTileLayout2D

GODBOLT_DATA = [0, 5, 1, 3, 8, 4, 2, 7, 6]


def test_fill_in_order_row_major_is_sequential():
    data = [0] * 9
    fill_in_order(MdSpan(data, 3, 3))
    assert data == list(range(9))


def test_dot_product_pinned_value():
    a = MdSpan([0] * 9, 3, 3)
    fill_in_order(a)
    assert dot_product(a, a) == 204


def test_dot_product_independent_of_layout():
    a = MdSpan([0] * 9, 3, 3)
    fill_in_order(a)
    tiled = MdSpan([0] * 16, SimpleTileLayout2D.mapping(dextents(3, 3), 2, 2))
    fill_in_order(tiled)
    assert dot_product(a, tiled) == dot_product(a, a)


def test_dot_product_symmetric():
    a = MdSpan(list(GODBOLT_DATA), 3, 3)
    b = MdSpan([0] * 9, 3, 3)
    fill_in_order(b)
    assert dot_product(a, b) == dot_product(b, a)


def test_dot_product_with_mdarray():
    arr = MdArray(3, 3)
    fill_in_order(arr)
    span = MdSpan([0] * 9, 3, 3)
    fill_in_order(span)
    assert dot_product(arr, span) == dot_product(span, span)


def test_dot_product_rejects_wrong_rank():
    with pytest.raises(ValueError):
        dot_product(MdSpan([0] * 3, 3), MdSpan([0] * 3, 3))


def test_dot_product_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        dot_product(MdSpan([0] * 6, 2, 3), MdSpan([0] * 6, 3, 2))


def test_fill_in_order_rejects_wrong_rank():
    with pytest.raises(ValueError):
        fill_in_order(MdSpan([0] * 8, 2, 2, 2))


def test_describe_lists_every_element():
    lines = list(describe(MdSpan(GODBOLT_DATA, Extents((None, None), 3, 3))))
    assert len(lines) == len(GODBOLT_DATA)
    assert lines[0] == "m(0, 0) == 0"
    assert lines[1] == "m(0, 1) == 5"
    assert lines[-1] == "m(2, 2) == 6"


def test_main_output(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == out[1]
    assert out[2:] == list(describe(MdSpan(GODBOLT_DATA, 3, 3)))