import pytest

from romlayout.errors import CapacityExceeded, DuplicateName
from romlayout.region import MAX_ROMLAYOUT, Region, RegionTable, in_range, mk_range


def test_region_geometry():
    r = Region(0x1000, 0x1FFF, "BIOS")
    assert r.size == 0x1000
    assert r.span() == (0x1000, 0x2000)
    assert r.contains(0x1000)
    assert r.contains(0x1FFF)
    assert not r.contains(0x2000)
    assert not r.contains(0xFFF)
    assert not r.included
    assert r.override_file is None
    assert str(r) == '0x00001000 - 0x00001fff "BIOS"'


def test_ranges():
    assert mk_range(0x10, 0x10) == (0x10, 0x20)
    assert in_range((0, 0x10), 0xF)
    assert not in_range((0, 0x10), 0x10)
    assert in_range((0, 0x10), (0x4, 0x10))
    assert not in_range((0, 0x10), (0x4, 0x11))


def test_add_and_find():
    table = RegionTable()
    table.add(Region(0, 0xFFF, "a"))
    table.add(Region(0x1000, 0x1FFF, "b"))
    assert len(table) == 2
    assert table.find_by_name("a") == 0
    assert table.find_by_name("b") == 1
    assert table.find_by_name("B") is None
    assert [r.name for r in table] == ["a", "b"]


def test_duplicate_name():
    table = RegionTable()
    table.add(Region(0, 0xFFF, "a"))
    with pytest.raises(DuplicateName):
        table.add(Region(0x1000, 0x1FFF, "a"))
    assert len(table) == 1


def test_overlap_is_allowed():
    table = RegionTable()
    table.add(Region(0, 0xFFF, "a"))
    table.add(Region(0x800, 0x17FF, "b"))
    assert len(table) == 2


def test_capacity():
    assert RegionTable().capacity == MAX_ROMLAYOUT

    table = RegionTable(capacity=2)
    table.add(Region(0, 1, "a"))
    table.add(Region(2, 3, "b"))
    with pytest.raises(CapacityExceeded):
        table.add(Region(4, 5, "c"))
    assert len(table) == 2


def test_included():
    table = RegionTable()
    for i, name in enumerate("abc"):
        table.add(Region(i * 0x10, i * 0x10 + 0xF, name))
    table[2].included = True
    table[0].included = True
    assert [r.name for r in table.included()] == ["a", "c"]


def test_clear():
    RegionTable().clear()

    table = RegionTable()
    r = Region(0, 0xFFF, "a", included=True, override_file="a.bin")
    table.add(r)
    table.clear()
    assert len(table) == 0
    assert table.find_by_name("a") is None
    assert not r.included
    assert r.override_file is None
    table.add(Region(0, 0xFFF, "a"))
