import logging
import os
from typing import Callable, Optional

from romlayout.errors import (
    OverrideFileError,
    RegionOutOfBounds,
    SizeMismatch,
    SourceError,
)
from romlayout.include import IncludeSelector
from romlayout.region import ADDRESS_MAX, Region, RegionTable

__all__ = [
    "ReadRange",
    "next_included",
    "reconstruct",
]

# (start, size) -> exactly `size` bytes of current chip content at `start`
ReadRange = Callable[[int, int], bytes]


def next_included(table: RegionTable, offset: int) -> Optional[Region]:
    """Included region to handle at `offset`.

    A region containing `offset` wins, first come first serve for overlapping
    regions. Otherwise the closest region starting after `offset`.
    """
    best: Optional[Region] = None
    for region in table:
        if not region.included:
            continue
        if region.contains(offset):
            return region
        # already past it
        if offset > region.end:
            continue
        if best is None or region.start < best.start:
            best = region
    return best


def _copy_old_content(
    old_content: bytearray,
    new_content: bytearray,
    start: int,
    size: int,
    old_content_is_valid: bool,
    read_range: Optional[ReadRange],
):
    if not old_content_is_valid:
        # only the preserved range, included regions are never read
        assert read_range is not None, "old content is not valid and there is no way to read it"
        logging.debug(f"reading a chunk starting from 0x{start:06x} (len=0x{size:06x})")
        data = read_range(start, size)
        if len(data) != size:
            raise SourceError(
                f"short read at 0x{start:06x}: got {len(data)} bytes, wanted {size}"
            )
        old_content[start : start + size] = data

    new_content[start : start + size] = old_content[start : start + size]


def _read_override(region: Region, new_content: bytearray):
    file = region.override_file
    if file is None:
        return

    try:
        with open(file, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size != region.size:
                raise SizeMismatch(file, size, region.size)
            data = f.read(region.size)
    except OSError as e:
        raise OverrideFileError(f"reading layout image file {file!r} failed: {e}") from e

    if len(data) != region.size:
        raise OverrideFileError(
            f"failed to read layout image file {file!r} completely. "
            f"got {len(data)} bytes, wanted {region.size}"
        )

    new_content[region.start : region.end + 1] = data


def reconstruct(
    chip_size: int,
    table: RegionTable,
    selector: IncludeSelector,
    old_content: bytearray,
    new_content: bytearray,
    old_content_is_valid: bool,
    read_range: Optional[ReadRange] = None,
):
    """Turn `new_content` into the image that should end up on the chip.

    Included regions keep what the caller staged in `new_content` (or take
    their override file), everything else is copied from `old_content`. When
    `old_content` is not valid the preserved ranges are fetched through
    `read_range` first, each byte at most once.

    On error `new_content` is partially built and must not be written.
    """
    assert len(new_content) == chip_size
    assert len(old_content) == chip_size

    # no regions requested -> write the whole new image
    if not selector:
        return

    for region in table.included():
        if region.end >= chip_size:
            raise RegionOutOfBounds(
                f"region {str(region)} exceeds the chip size (0x{chip_size:x} bytes)"
            )

    start = 0
    while start < chip_size:
        region = next_included(table, start)
        if region is None:
            _copy_old_content(
                old_content,
                new_content,
                start,
                chip_size - start,
                old_content_is_valid,
                read_range,
            )
            break

        if region.start > start:
            _copy_old_content(
                old_content,
                new_content,
                start,
                region.start - start,
                old_content_is_valid,
                read_range,
            )

        _read_override(region, new_content)

        if region.end >= ADDRESS_MAX:
            break
        start = region.end + 1
