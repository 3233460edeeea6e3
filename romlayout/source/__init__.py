from abc import abstractmethod
from typing import Any

from typing_extensions import Buffer, override

from romlayout.errors import SourceError

__all__ = [
    "BufferSource",
    "Source",
]


# Current chip content, fetched on demand.
# Throws on errors. No recovery expected.
class Source:
    def __init__(self):
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, *_args: Any):
        if not self._closed:
            self.close()

    @property
    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def read_range(self, start: int, size: int) -> bytes:  # POST-CONDITION: `len(result) == size`
        pass

    def close(self) -> None:
        self._closed = True

    def check_range(self, start: int, size: int):
        assert 0 <= start
        assert 0 <= size
        if start + size > self.size:
            raise SourceError(
                f"read of [0x{start:08x}, 0x{start + size:08x}) is past the end "
                f"of the source (0x{self.size:x} bytes)"
            )


class BufferSource(Source):
    """Chip content already in memory, e.g. from an earlier full read."""

    def __init__(self, data: Buffer):
        super().__init__()
        self._data = bytes(data)
        self.reads = 0

    @property
    @override
    def size(self) -> int:
        return len(self._data)

    @override
    def read_range(self, start: int, size: int) -> bytes:
        self.check_range(start, size)
        self.reads += 1
        return self._data[start : start + size]
