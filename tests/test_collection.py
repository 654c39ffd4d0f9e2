"""Tests for the Collection helper."""

from common.collection import Collection


def test_filter_and_map_preserve_order():
    result = Collection.create([3, 1, 2]).filter(lambda x: x != 1).map(lambda x: x * 10)
    assert result.to_list() == [30, 20]


def test_callbacks_called_once_in_order():
    seen = []

    def keep(item):
        seen.append(item)
        return True

    Collection.create(["a", "b", "c"]).filter(keep)
    assert seen == ["a", "b", "c"]


def test_reduce_and_each():
    items = Collection.create([1, 2, 3])
    assert items.reduce(lambda acc, x: acc + x, 10) == 16
    collected = []
    items.each(collected.append)
    assert collected == [1, 2, 3]


def test_source_not_modified():
    source = Collection.create([1, 2])
    source.filter(lambda x: False)
    assert source.to_list() == [1, 2]
    assert len(source) == 2


def test_is_empty():
    assert Collection.create([]).is_empty()
    assert Collection().is_empty()
    assert not Collection.create(iter([0])).is_empty()
