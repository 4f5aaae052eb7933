import pytest

from ofmesh.data_arrays import ComponentDataArray, OffsetDataArray


def _filled(values, csize=1):
    arr = ComponentDataArray("a", csize, 0)
    arr.resize(len(values))
    for i, v in enumerate(values):
        arr[i] = v
    return arr


def test_resize_pads_with_default_and_truncates():
    arr = ComponentDataArray("a", 1, 7)
    arr.resize(3)
    assert list(arr) == [7, 7, 7]
    arr.resize(1)
    assert list(arr) == [7]
    assert len(arr) == 1


def test_resize_negative_raises():
    with pytest.raises(ValueError):
        ComponentDataArray("a").resize(-1)


def test_push_back_and_reset():
    arr = ComponentDataArray("a", 1, 5)
    arr.push_back()
    arr.push_back()
    arr[1] = 9
    assert list(arr) == [5, 9]
    arr.reset(1)
    assert list(arr) == [5, 5]


def test_swap():
    arr = _filled([1, 2, 3])
    arr.swap(0, 2)
    assert list(arr) == [3, 2, 1]


def test_transfer_whole_overwrites_tail():
    target = _filled([1, 2, 3, 4])
    source = _filled([8, 9])
    assert target.transfer(source) is True
    assert list(target) == [1, 2, 8, 9]


def test_transfer_whole_too_long_raises():
    with pytest.raises(ValueError):
        _filled([1]).transfer(_filled([1, 2]))


def test_transfer_single_entry():
    target = _filled([1, 2, 3])
    source = _filled([7, 8])
    assert target.transfer(source, 1, 0) is True
    assert list(target) == [8, 2, 3]


def test_transfer_needs_both_indices():
    with pytest.raises(ValueError):
        _filled([1, 2]).transfer(_filled([1]), 0)


def test_transfer_from_other_kind_fails():
    target = _filled([1, 2])
    other = OffsetDataArray("b", 0)
    other.resize(2)
    assert target.transfer(other) is False
    float_array = ComponentDataArray("c", 1, 0.0)
    float_array.resize(1)
    assert target.transfer(float_array) is False
    assert list(target) == [1, 2]


def test_clone_is_independent():
    arr = _filled([1, 2, 3, 4], csize=2)
    twin = arr.clone()
    assert list(twin) == list(arr)
    assert twin.name == arr.name and twin.csize == arr.csize
    twin[0] = 100
    assert arr[0] == 1


def test_empty_clone():
    arr = ComponentDataArray("a", 3, 2)
    arr.resize(6)
    empty = arr.empty_clone()
    assert len(empty) == 0
    assert (empty.name, empty.csize, empty.default) == ("a", 3, 2)


def test_components():
    arr = _filled([1, 2, 3, 4, 5, 6], csize=2)
    assert arr.number_of_components() == 3
    assert arr.component(1) == [3, 4]
    assert list(arr.components()) == [[1, 2], [3, 4], [5, 6]]


def test_component_out_of_range():
    arr = _filled([1, 2], csize=2)
    with pytest.raises(IndexError):
        arr.component(1)


def test_invalid_component_size():
    with pytest.raises(ValueError):
        ComponentDataArray("a", 0)


def _offset_array():
    arr = OffsetDataArray("o", 0)
    arr.resize(5)
    for i, v in enumerate([10, 11, 12, 13, 14]):
        arr[i] = v
    arr.offset = [0, 2, 2, 5]
    return arr


def test_offset_components():
    arr = _offset_array()
    assert arr.number_of_components() == 3
    assert arr.component(0) == [10, 11]
    assert arr.component(1) == []
    assert list(arr.components()) == [[10, 11], [], [12, 13, 14]]
    assert sum(len(c) for c in arr.components()) == len(arr)


def test_offset_without_offsets_has_no_components():
    arr = OffsetDataArray("o")
    assert arr.number_of_components() == 0
    assert list(arr.components()) == []
    with pytest.raises(IndexError):
        arr.component(0)


def test_offset_clone_copies_offsets():
    arr = _offset_array()
    twin = arr.clone()
    assert twin.offset == arr.offset
    assert list(twin) == list(arr)
    twin.offset.append(5)
    assert arr.offset == [0, 2, 2, 5]


def test_offset_empty_clone():
    empty = _offset_array().empty_clone()
    assert len(empty) == 0
    assert empty.offset == []
    assert empty.name == "o"


def test_offset_transfer_and_swap():
    arr = _offset_array()
    other = OffsetDataArray("p", 0)
    other.resize(2)
    other[0], other[1] = 1, 2
    assert arr.transfer(other) is True
    assert list(arr) == [10, 11, 12, 1, 2]
    arr.swap(0, 4)
    assert list(arr) == [2, 11, 12, 1, 10]
    assert arr.transfer(_filled([3])) is False


def test_offset_push_back_and_reset():
    arr = OffsetDataArray("o", 4)
    arr.push_back()
    arr[0] = 1
    arr.reset(0)
    assert list(arr) == [4]