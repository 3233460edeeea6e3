"""Layout file parsing.

A layout file lists the regions of a flash chip, one per line. Files that
start with `# flashrom layout <N>` are parsed according to version `N`,
anything else is a legacy version 1 file.
"""
import logging
import os
import re
from typing import Callable, Dict

from romlayout.errors import (
    LayoutFileError,
    LineTooLong,
    MalformedLayout,
    UnsupportedVersion,
)
from romlayout.parse.context import ParseContext
from romlayout.region import RegionTable

__all__ = [
    "INCLUDE_KEYWORD",
    "LAYOUT_MARKER",
    "MAX_LINE_LEN",
    "ParseContext",
    "detect_version",
    "parse",
    "parse_file",
]

MAX_LINE_LEN = 1024
LAYOUT_MARKER = "# flashrom layout "
INCLUDE_KEYWORD = "source"

_VERSION_RE = re.compile(r"[ \t\r\n\v\f]*([+-]?[0-9]+)")


def detect_version(text: str, filename: str) -> int:
    head = text.lstrip(" \t")
    if not head:
        raise MalformedLayout(f"could not determine version of layout file {filename!r}")

    if not head.startswith(LAYOUT_MARKER):
        return 1

    m = _VERSION_RE.match(head, len(LAYOUT_MARKER))
    if m is None:
        raise MalformedLayout(f"could not determine version of layout file {filename!r}")

    version = int(m.group(1))
    if version < 2:
        logging.warning(
            f"layout file {filename!r} declares itself to be version {version}, but "
            "self declaration has only been possible since version 2. continuing anyway."
        )
    return version


def _line_parsers() -> Dict[int, Callable[[ParseContext, str], None]]:
    from romlayout.parse import legacy, v2

    return {1: legacy.parse_line, 2: v2.parse_line}


def _strip_comment(ctx: ParseContext, line: str) -> str:
    if "#" not in line:
        return line

    if ctx.version == 1:
        raise MalformedLayout(
            f"line {ctx.line} of version 1 layout file {ctx.filename!r} contains a forbidden #"
        )
    return line[: line.index("#")]


def parse_file(ctx: ParseContext, filename: str):
    try:
        with open(filename, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LayoutFileError(f"could not open layout file {filename!r}: {e}") from e

    version = detect_version(text, filename)
    parsers = _line_parsers()
    if version not in parsers:
        raise UnsupportedVersion(version, filename)

    ctx.version = version
    ctx.filename = filename
    ctx.line = 0
    logging.debug(f"parsing layout file {filename!r} according to version {version}")

    parse_line = parsers[version]
    for lineno, raw in enumerate(text.split("\n"), start=1):
        ctx.line = lineno
        line = _strip_comment(ctx, raw)
        if len(line.encode("utf-8")) > ctx.max_line_len:
            raise LineTooLong(
                f"line {lineno} of layout file {filename!r} is longer than the "
                f"allowed {ctx.max_line_len} bytes"
            )

        if not line.strip(" \t"):
            continue

        parse_line(ctx, line)


def parse(filename: str, table: RegionTable, *, max_line_len: int = MAX_LINE_LEN):
    """Append the regions described by `filename` to `table`.

    Raises on the first fatal error. The table may then hold a prefix of the
    layout and must be discarded.
    """
    ctx = ParseContext(table, max_line_len, stack=[os.path.realpath(filename)])
    parse_file(ctx, filename)
