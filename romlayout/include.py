import logging
from typing import List, Optional, Tuple

from romlayout.errors import (
    CapacityExceeded,
    DuplicateIncludeSpec,
    InvalidIncludeSpec,
    NoLayoutLoaded,
    UnknownRegion,
)
from romlayout.region import MAX_ROMLAYOUT, RegionTable

__all__ = [
    "IncludeSelector",
    "split_spec",
]


def split_spec(spec: str) -> Tuple[str, Optional[str]]:
    """`region[:file]` -> `(region, file)`, an empty file part means no file."""
    name, _, file = spec.partition(":")
    return name, (file or None)


class IncludeSelector:
    """Region selection requests (`-i region[:file]`) in arrival order.

    Registration only records the raw strings; they are checked against a
    layout by `resolve`, once one has been loaded.
    """

    def __init__(self, capacity: int = MAX_ROMLAYOUT):
        self.capacity = capacity
        self.specs: List[str] = []

    def __len__(self):
        return len(self.specs)

    def __bool__(self):
        return bool(self.specs)

    def register(self, spec: Optional[str]):
        if not spec:
            raise InvalidIncludeSpec(f"{spec!r} is a bad region name")

        if spec in self.specs:
            raise DuplicateIncludeSpec(f"duplicate region name: {spec!r}")

        if len(self.specs) >= self.capacity:
            raise CapacityExceeded(f"too many regions included ({len(self.specs)})")

        self.specs.append(spec)

    def resolve(self, table: RegionTable):
        if not self.specs:
            return

        if not len(table):
            raise NoLayoutLoaded(
                f"region requested ({self.specs[0]!r}), but no layout data is available"
            )

        seen = set()
        for spec in self.specs:
            name, file = split_spec(spec)
            idx = table.find_by_name(name)
            if idx is None:
                raise UnknownRegion(f"invalid region specified: {spec!r}")

            if idx in seen:
                raise DuplicateIncludeSpec(f"region {name!r} is included more than once")
            seen.add(idx)

            region = table[idx]
            region.included = True
            region.override_file = file

        logging.info(
            f"using region{'s' if len(self.specs) > 1 else ''}: "
            + ", ".join(f'"{s}"' for s in self.specs)
            + "."
        )

    def clear(self):
        self.specs = []
