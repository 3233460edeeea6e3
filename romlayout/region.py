from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from romlayout.errors import CapacityExceeded, DuplicateName

__all__ = [
    "ADDRESS_MAX",
    "MAX_ROMLAYOUT",
    "Region",
    "RegionTable",
    "in_range",
    "mk_range",
]

MAX_ROMLAYOUT = 32
ADDRESS_MAX = 0xFFFFFFFF  # chip addresses are 32 bit wide


def mk_range(lo: int, sz: int):
    assert 0 <= sz
    return (lo, lo + sz)


def in_range(range: Tuple[int, int], addr: Union[int, Tuple[int, int]]) -> bool:
    assert range[0] <= range[1]

    if isinstance(addr, int):
        return range[0] <= addr < range[1]

    assert len(addr) == 2
    assert addr[0] <= addr[1]
    return range[0] <= addr[0] and addr[1] <= range[1]


@dataclass
class Region:
    start: int  # inclusive
    end: int  # inclusive
    name: str
    included: bool = False
    override_file: Optional[str] = None

    def __post_init__(self):
        assert 0 <= self.start < self.end <= ADDRESS_MAX, "region must be non-empty"

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def span(self):
        return mk_range(self.start, self.size)

    def contains(self, offset: int) -> bool:
        return in_range(self.span(), offset)

    def __str__(self):
        return f'0x{self.start:08x} - 0x{self.end:08x} "{self.name}"'


class RegionTable:
    """Named address ranges in insertion order.

    Indices are stable for the lifetime of the table; lookups always return the
    first match. Overlapping ranges are accepted, the reconstructor decides who
    wins.
    """

    def __init__(self, capacity: int = MAX_ROMLAYOUT):
        assert 0 < capacity
        self.capacity = capacity
        self._regions: List[Region] = []

    def __len__(self):
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __getitem__(self, idx: int) -> Region:
        return self._regions[idx]

    def add(self, region: Region):
        if self.find_by_name(region.name) is not None:
            raise DuplicateName(region.name)

        if len(self._regions) >= self.capacity:
            raise CapacityExceeded(
                f"found more than the {self.capacity} allowed layout entries "
                f"(while adding {region.name!r})"
            )

        self._regions.append(region)

    def find_by_name(self, name: str) -> Optional[int]:
        for idx, region in enumerate(self._regions):
            if region.name == name:
                return idx

        return None

    def included(self) -> List[Region]:
        return [r for r in self._regions if r.included]

    def clear(self):
        for region in self._regions:
            region.included = False
            region.override_file = None
        self._regions = []
