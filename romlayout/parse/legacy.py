import logging

from romlayout.errors import MalformedEntry
from romlayout.parse.context import ParseContext
from romlayout.parse.lexer import Lexer

__all__ = [
    "parse_line",
]


def _parse_entry(ctx: ParseContext, line: str):
    lex = Lexer(line)
    lex.skip_ws()

    start = lex.number(16)
    if start is None:
        raise ctx.error(f"could not convert start address in {line!r}")
    start = ctx.check_address(start.value, "start")
    lex.skip_ws()
    if not lex.char(":"):
        raise ctx.error(f"address separator does not follow start address in {line!r}")

    end = lex.number(16)
    if end is None:
        raise ctx.error(f"could not convert end address in {line!r}")
    end = ctx.check_address(end.value, "end")
    if lex.skip_ws() == 0:
        raise ctx.error(f"end address is not followed by white space in {line!r}")

    name = lex.string(quoting=False)
    if name is None:
        raise ctx.error(f"could not find region name in {line!r}")

    ctx.add_entry(start, end, name.value, lex.rest())


def parse_line(ctx: ParseContext, line: str):
    # Legacy files never aborted on a bad entry, they just lost it.
    try:
        _parse_entry(ctx, line)
    except MalformedEntry as e:
        logging.warning(f"skipping malformed line: {e}")
