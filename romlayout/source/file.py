import os
from typing import List

from tqdm import tqdm
from typing_extensions import override

from romlayout.errors import SourceError
from romlayout.source import Source

__all__ = [
    "FileSource",
]


class FileSource(Source):
    """Chip content backed by a dump file, read in chunks like a programmer would."""

    def __init__(self, filename: str, *, chunk_size: int = 64 * 1024, progress: bool = False):
        super().__init__()
        assert 0 < chunk_size
        self.filename = filename
        self.chunk_size = chunk_size
        self.progress = progress
        self.bytes_read = 0
        try:
            self._file = open(filename, "rb")
            self._size = os.fstat(self._file.fileno()).st_size
        except OSError as e:
            raise SourceError(f"could not open chip dump {filename!r}: {e}") from e

    @property
    @override
    def size(self) -> int:
        return self._size

    @override
    def read_range(self, start: int, size: int) -> bytes:
        self.check_range(start, size)
        chunks: List[bytes] = []
        try:
            self._file.seek(start)
            with tqdm(
                desc=f"reading 0x{start:08x}",
                total=size,
                unit="b",
                unit_scale=True,
                unit_divisor=1024,
                disable=not self.progress,
            ) as t:
                for offset in range(0, size, self.chunk_size):
                    n = min(self.chunk_size, size - offset)
                    chunk = self._file.read(n)
                    if len(chunk) != n:
                        raise SourceError(f"{self.filename!r}: short read at 0x{start + offset:08x}")
                    chunks.append(chunk)
                    t.update(n)
        except OSError as e:
            raise SourceError(f"reading {self.filename!r} failed: {e}") from e

        self.bytes_read += size
        return b"".join(chunks)

    @override
    def close(self) -> None:
        self._file.close()
        super().close()
