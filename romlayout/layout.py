from typing import Iterator, Optional

from romlayout.include import IncludeSelector
from romlayout.parse import MAX_LINE_LEN, parse
from romlayout.reconstruct import ReadRange, reconstruct
from romlayout.region import MAX_ROMLAYOUT, Region, RegionTable

__all__ = [
    "Layout",
]


class Layout:
    """One layout session: the region table plus the include requests.

    Build it by parsing one or more layout files and registering includes,
    resolve, then reconstruct. Not thread-safe, callers serialize access.
    `clear_all_state` must be called before the session is reused.
    """

    def __init__(self, *, capacity: int = MAX_ROMLAYOUT, max_line_len: int = MAX_LINE_LEN):
        self.table = RegionTable(capacity)
        self.selector = IncludeSelector(capacity)
        self.max_line_len = max_line_len

    def __iter__(self) -> Iterator[Region]:
        return iter(self.table)

    def __len__(self):
        return len(self.table)

    def parse_layout(self, filename: str):
        parse(filename, self.table, max_line_len=self.max_line_len)

    def register_include(self, spec: Optional[str]):
        self.selector.register(spec)

    def resolve_includes(self):
        self.selector.resolve(self.table)

    def find_region(self, name: str) -> Optional[Region]:
        idx = self.table.find_by_name(name)
        return None if idx is None else self.table[idx]

    def reconstruct_image(
        self,
        chip_size: int,
        old_content: bytearray,
        new_content: bytearray,
        old_content_is_valid: bool,
        read_range: Optional[ReadRange] = None,
    ):
        reconstruct(
            chip_size,
            self.table,
            self.selector,
            old_content,
            new_content,
            old_content_is_valid,
            read_range,
        )

    def clear_all_state(self):
        self.selector.clear()
        self.table.clear()
