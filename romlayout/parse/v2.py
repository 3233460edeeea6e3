import logging

from romlayout.parse import INCLUDE_KEYWORD
from romlayout.parse.context import ParseContext
from romlayout.parse.lexer import Lexer

__all__ = [
    "parse_line",
]


def _source(ctx: ParseContext, lex: Lexer, line: str):
    lex.skip_ws()
    path = lex.string()
    if path is None:
        raise ctx.error(f"could not find file name in {line!r}")

    if lex.rest().strip(" \t"):
        ctx.warn(f"file name {path.value!r} is not followed by white space only")

    logging.debug(f"source command found with file name {path.value!r}")
    ctx.source(path.value)


def parse_line(ctx: ParseContext, line: str):
    lex = Lexer(line)
    lex.skip_ws()
    if lex.keyword(INCLUDE_KEYWORD) is not None:
        return _source(ctx, lex, line)

    start = lex.number()
    if start is None:
        raise ctx.error(f"could not convert start address in {line!r}")
    start = ctx.check_address(start.value, "start")
    lex.skip_ws()
    if not lex.char(":"):
        raise ctx.error(f"address separator does not follow start address in {line!r}")

    end = lex.number()
    if end is None:
        raise ctx.error(f"could not convert end address in {line!r}")
    end = ctx.check_address(end.value, "end")
    if lex.skip_ws() == 0:
        raise ctx.error(f"end address is not followed by white space in {line!r}")

    name = lex.string()
    if name is None:
        raise ctx.error(f"could not find region name in {line!r}")

    ctx.add_entry(start, end, name.value, lex.rest())
