import pytest

from mdview.layout import DYNAMIC_EXTENT, Extents, LayoutRight, LayoutRightMapping
from mdview.mdspan import DefaultAccessor, MdSpan


def test_godbolt_example_values():
    d = [0, 5, 1, 3, 8, 4, 2, 7, 6]
    m = MdSpan(d, Extents((DYNAMIC_EXTENT, DYNAMIC_EXTENT), 3, 3))
    assert m(1, 1) == 8
    assert m[2, 1] == 7
    assert m[0, 1] == 5


def test_row_major_fill_round_trip():
    data = [None] * 6
    m = MdSpan(data, 2, 3)
    count = 0
    for i in range(m.extent(0)):
        for j in range(m.extent(1)):
            m[i, j] = count
            count += 1
    assert data == list(range(6))


def test_sizes_as_sequence_are_dynamic():
    m = MdSpan(list(range(6)), [2, 3])
    assert m.rank() == 2
    assert m.rank_dynamic() == 2
    assert m.extent(0) == 2
    assert m.extent(1) == 3
    assert m.static_extent(0) is DYNAMIC_EXTENT


def test_static_extents():
    m = MdSpan(list(range(6)), Extents((2, 3)))
    assert m.rank_dynamic() == 0
    assert m.static_extent(1) == 3
    assert m.size() == 6


def test_from_mapping():
    mapping = LayoutRight.mapping(Extents((DYNAMIC_EXTENT, 4), 2))
    m = MdSpan(list(range(8)), mapping)
    assert m.mapping is mapping
    assert m.extents == mapping.extents
    assert m.stride(0) == mapping.stride(0)
    assert m.stride(1) == 1


def test_rank_zero():
    data = [42]
    m = MdSpan(data)
    assert m.rank() == 0
    assert m() == 42
    assert m[()] == 42
    assert m.size() == 1
    assert not m.empty()


def test_empty():
    assert MdSpan([], 0, 3).empty()
    assert not MdSpan([1, 2], 1, 2).empty()
    assert MdSpan([], 3, 0).size() == 0


def test_index_sequence_access():
    m = MdSpan(list(range(6)), 2, 3)
    assert m[[1, 2]] == m[1, 2]
    assert m((1, 0)) == m(1, 0)


def test_wrong_number_of_indices():
    m = MdSpan(list(range(6)), 2, 3)
    with pytest.raises(TypeError):
        m[1]
    with pytest.raises(TypeError):
        m(0, 0, 0)


def test_index_out_of_range():
    m = MdSpan(list(range(6)), 2, 3)
    assert m[1, 2] == 5
    assert m[0, 0] == 0
    with pytest.raises(IndexError):
        m[2, 0]
    with pytest.raises(IndexError):
        m[0, -1]


def test_mapping_properties_delegate():
    m = MdSpan(list(range(6)), 2, 3)
    assert m.is_always_unique() and m.is_unique()
    assert m.is_always_exhaustive() and m.is_exhaustive()
    assert m.is_always_strided() and m.is_strided()
    assert isinstance(m.mapping, LayoutRightMapping)


def test_swap():
    a_data = [1, 2, 3, 4]
    b_data = [9, 8, 7]
    a = MdSpan(a_data, 2, 2)
    b = MdSpan(b_data, 3)
    a.swap(b)
    assert a.data_handle is b_data
    assert b.data_handle is a_data
    assert a.rank() == 1
    assert b.rank() == 2
    assert a[2] == 7
    with pytest.raises(TypeError):
        a.swap(b_data)


def test_default_accessor():
    acc = DefaultAccessor()
    data = [10, 20, 30, 40]
    assert acc.access(data, 2) == 30
    acc.store(data, 1, 99)
    assert data[1] == 99
    shifted = acc.offset(data, 2)
    assert shifted[0] == data[2]
    shifted[1] = 5
    assert data[3] == 5
    assert acc.offset(shifted, 1)[0] == data[3]
    assert len(shifted) == 2


def test_accessor_is_used():
    class Scaled(DefaultAccessor):
        def access(self, data, i):
            return data[i] * 10

    m = MdSpan([1, 2, 3], 3, accessor=Scaled())
    assert [m[i] for i in range(3)] == [10, 20, 30]
    assert isinstance(m.accessor, Scaled)


def test_view_shares_data():
    data = [0] * 4
    m = MdSpan(data, 2, 2)
    data[3] = 7
    assert m[1, 1] == 7
    assert m.data_handle is data


def test_static_extent_mismatch_rejected():
    with pytest.raises(ValueError):
        MdSpan([0] * 6, Extents((2, 3), 2, 4))