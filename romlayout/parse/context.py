import logging
import os
from dataclasses import dataclass, field
from typing import List

from romlayout.errors import MalformedEntry, SourceCycle
from romlayout.region import ADDRESS_MAX, Region, RegionTable

__all__ = [
    "ParseContext",
]


@dataclass
class ParseContext:
    """State threaded through one parse, including every `source`d file."""

    table: RegionTable
    max_line_len: int
    version: int = 0
    filename: str = ""
    line: int = 0
    stack: List[str] = field(default_factory=list)  # real paths being parsed

    def error(self, msg: str) -> MalformedEntry:
        return MalformedEntry(
            f"error parsing version {self.version} layout entry: {msg}",
            self.filename,
            self.line,
        )

    def warn(self, msg: str):
        logging.warning(f"{self.filename}:{self.line}: {msg}")

    def check_address(self, value: int, what: str) -> int:
        if not 0 <= value <= ADDRESS_MAX:
            raise self.error(f"{what} address {value:#x} is out of range")
        return value

    def add_entry(self, start: int, end: int, name: str, trailing: str):
        if start >= end:
            raise self.error(f"length of region {name!r} is not positive")

        self.table.add(Region(start, end, name))
        logging.debug(f"parsed entry: 0x{start:08x} - 0x{end:08x} named {name!r}")

        if trailing.strip(" \t"):
            self.warn(f"region name {name!r} is not followed by white space only")

    def source(self, path: str):
        from romlayout.parse import parse_file

        if not os.path.isabs(path):
            path = os.path.join(os.path.dirname(self.filename) or ".", path)

        real = os.path.realpath(path)
        if real in self.stack:
            raise SourceCycle(
                f"{self.filename}:{self.line}: layout file {path!r} sources itself"
            )

        outer = (self.version, self.filename, self.line)
        self.stack.append(real)
        try:
            parse_file(self, path)
        finally:
            self.stack.pop()
            self.version, self.filename, self.line = outer
