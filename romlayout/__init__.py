from dataclasses import dataclass, field
from typing import List, Optional

from romlayout.errors import LayoutError, SizeMismatch, SourceError
from romlayout.layout import Layout
from romlayout.region import Region
from romlayout.source.file import FileSource

__all__ = [
    "BuildArgs",
    "Layout",
    "LayoutError",
    "Region",
    "load_layout",
    "run",
]

ERASED = 0xFF


@dataclass
class BuildArgs:
    layouts: List[str]
    new: str
    out: str
    includes: List[str] = field(default_factory=list)
    old: Optional[str] = None  # chip dump, erased chip if absent
    chip_size: Optional[int] = None  # defaults to the size of `new`
    chunk_size: int = 64 * 1024
    progress: bool = True


def load_layout(layouts: List[str], includes: List[str]) -> Layout:
    layout = Layout()
    for filename in layouts:
        print(f"parsing layout {filename}...")
        layout.parse_layout(filename)
    for spec in includes:
        layout.register_include(spec)
    layout.resolve_includes()
    return layout


def run(args: BuildArgs):
    layout = load_layout(args.layouts, args.includes)

    with open(args.new, "rb") as f:
        new_content = bytearray(f.read())
    chip_size = len(new_content) if args.chip_size is None else args.chip_size
    if len(new_content) != chip_size:
        raise SizeMismatch(args.new, len(new_content), chip_size)
    print(f"chip size: 0x{chip_size:x}")

    if args.old is None:
        print("no chip dump given, assuming an erased chip.")
        old_content = bytearray([ERASED]) * chip_size
        layout.reconstruct_image(chip_size, old_content, new_content, True)
    else:
        old_content = bytearray(chip_size)
        with FileSource(args.old, chunk_size=args.chunk_size, progress=args.progress) as src:
            if src.size != chip_size:
                raise SourceError(
                    f"chip dump {args.old!r} is 0x{src.size:x} bytes, chip is 0x{chip_size:x}"
                )
            layout.reconstruct_image(chip_size, old_content, new_content, False, src.read_range)
            print(f"read {src.bytes_read} of {chip_size} bytes from {args.old}")

    with open(args.out, "wb") as f:
        f.write(new_content)
    print(f"wrote {args.out}")

    layout.clear_all_state()
