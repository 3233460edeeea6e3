import enum
from typing import NamedTuple, Optional

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "WHITESPACE",
]

WHITESPACE = " \t"

_DIGITS = {
    8: "01234567",
    10: "0123456789",
    16: "0123456789abcdefABCDEF",
}


class TokenKind(enum.Enum):
    NUMBER = "number"
    STRING = "quoted string"
    WORD = "word"
    KEYWORD = "keyword"


class Token(NamedTuple):
    kind: TokenKind
    value: object
    pos: int  # offset of the first char of the token in the line


class Lexer:
    """Cursor over one layout line.

    The line itself is never modified, every method either consumes a token and
    returns it or returns `None` and leaves the cursor where it was.
    """

    def __init__(self, line: str):
        self.line = line
        self.pos = 0

    def rest(self) -> str:
        return self.line[self.pos :]

    def skip_ws(self) -> int:
        start = self.pos
        while self.pos < len(self.line) and self.line[self.pos] in WHITESPACE:
            self.pos += 1
        return self.pos - start

    def char(self, c: str) -> bool:
        if self.line.startswith(c, self.pos):
            self.pos += len(c)
            return True
        return False

    def keyword(self, word: str) -> Optional[Token]:
        if not self.line.startswith(word, self.pos):
            return None

        end = self.pos + len(word)
        if end < len(self.line) and self.line[end] not in WHITESPACE + '"':
            return None

        tok = Token(TokenKind.KEYWORD, word, self.pos)
        self.pos = end
        return tok

    def number(self, base: int = 0) -> Optional[Token]:
        """Integer the way `strtol` reads one.

        Leading whitespace and a sign are accepted. With `base == 0` the base
        follows the prefix: `0x` is hex, a leading `0` is octal, anything else
        decimal. Base 16 also tolerates a `0x` prefix.
        """
        assert base in (0, 8, 10, 16)
        line = self.line
        pos = self.pos
        while pos < len(line) and line[pos] in WHITESPACE:
            pos += 1
        start = pos

        negative = False
        if pos < len(line) and line[pos] in "+-":
            negative = line[pos] == "-"
            pos += 1

        if (
            base in (0, 16)
            and line[pos : pos + 2] in ("0x", "0X")
            and line[pos + 2 : pos + 3] != ""
            and line[pos + 2] in _DIGITS[16]
        ):
            base = 16
            pos += 2
        elif base == 0:
            base = 8 if line[pos : pos + 1] == "0" else 10

        digits_start = pos
        while pos < len(line) and line[pos] in _DIGITS[base]:
            pos += 1
        if pos == digits_start:
            return None

        value = int(line[digits_start:pos], base)
        self.pos = pos
        return Token(TokenKind.NUMBER, -value if negative else value, start)

    def string(self, quoting: bool = True) -> Optional[Token]:
        """Possibly quoted value.

        A value opened by `"` runs to the next `"`, otherwise it runs to the next
        whitespace. Empty values and unterminated quotes yield `None`.
        """
        line = self.line
        start = self.pos
        if quoting and line.startswith('"', start):
            close = line.find('"', start + 1)
            if close < 0:
                return None
            value = line[start + 1 : close]
            end = close + 1
            kind = TokenKind.STRING
        else:
            end = start
            while end < len(line) and line[end] not in WHITESPACE:
                end += 1
            value = line[start:end]
            kind = TokenKind.WORD

        if not value:
            return None

        self.pos = end
        return Token(kind, value, start)
