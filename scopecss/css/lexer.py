""" NESTED CSS LEXING

Turns nested css text into a flat stream of statement lines (see `scopecss.css.tokens`).

Comments are dropped, whitespace is collapsed, and the source is split at every
top level `{`, `}` and `;`. Quoted strings and anything inside `()` or `[]` are
copied verbatim so `url(data:...;...)` or `content: "}"` never split a line.
A bare `{` or `}` always splits, closing any `(` or `[` left open.

References:
    - [syntax](https://www.w3.org/TR/css-syntax-3/#tokenizing-and-parsing)
    - [nesting](https://developer.chrome.com/articles/css-nesting/)
"""

from __future__ import annotations
import re
from scopecss.css.tokens import *

__all__ = ["Lexer", "ParseError", "Check"]

class ParseError(Exception):
    """Recoverable problem found while reading nested css."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(message if line is None else f"{message} (line {line})")

class Check:
    # Whitespace is dropped on either side of these
    TIGHT = ":{;>+~,"
    # Inside parentheses only these are tightened, `calc(1px + 2px)` must keep its spaces
    TIGHT_NESTED = ":,"

    @staticmethod
    def whitespace(current: str | None) -> bool:
        return current is not None and current in '\t\n '

    @staticmethod
    def quote(current: str | None) -> bool:
        return current is not None and current in '"\''

    @staticmethod
    def opening(current: str | None) -> bool:
        return current is not None and current in '(['

    @staticmethod
    def closing(current: str | None) -> bool:
        return current is not None and current in ')]'

    @staticmethod
    def tight(current: str | None, nested: bool = False) -> bool:
        return current is not None and current in (Check.TIGHT_NESTED if nested else Check.TIGHT)

    @staticmethod
    def block_comment(current: str | None, next: str | None) -> bool:
        return current == "/" and next == "*"

    @staticmethod
    def line_comment(current: str | None, next: str | None) -> bool:
        return current == "/" and next == "/"


RETURNS = re.compile("\r\n|\f|\r")
class Lexer:
    def __init__(self, source: str) -> None:
        self.source: str = RETURNS.sub("\n", source)
        self.index = 0
        self.line = 1
        self.errors: list[ParseError] = []

        self._buffer_ = ''
        self._space_ = False
        self._depth_ = 0
        self._pending_: list[Token] = []

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        next = self.consume()
        if isinstance(next, EOF):
            raise StopIteration
        return next

    def process(self) -> list[Token]:
        """Scan the entire source at once."""
        return [token for token in self]

    def peek(self, amount: int = 1) -> str | None:
        """The code point `amount` positions ahead."""
        if self.index + amount - 1 < len(self.source):
            return self.source[self.index + amount - 1]
        return None

    def next(self) -> str | None:
        if self.index < len(self.source):
            current = self.source[self.index]
            self.index += 1
            if current == "\n":
                self.line += 1
            return current
        return None

    def error(self, error: ParseError):
        self.errors.append(error)

    def _append_(self, text: str):
        """Append text to the current statement, collapsing any pending whitespace."""
        nested = self._depth_ > 0
        if (
            self._space_
            and self._buffer_ != ''
            and not Check.tight(self._buffer_[-1], nested)
            and not Check.tight(text[0], nested)
        ):
            self._buffer_ += ' '
        self._space_ = False
        self._buffer_ += text

    def _take_(self) -> str:
        text = self._buffer_.strip()
        self._buffer_ = ''
        self._space_ = False
        return text

    def _consume_block_comment_(self):
        start = self.line
        self.next()
        while True:
            current = self.next()
            if current is None:
                self.error(ParseError("Comment not closed", start))
                return
            if current == "*" and self.peek() == "/":
                self.next()
                return

    def _consume_line_comment_(self):
        while (peek := self.peek()) is not None and peek != "\n":
            self.next()

    def _consume_string_(self, current: str) -> str:
        start = self.line
        string = current
        while True:
            next = self.next()
            if next is None:
                self.error(ParseError("String was not closed", start))
                return string
            elif next == "\\":
                string += next
                if (escaped := self.next()) is not None:
                    string += escaped
            elif next == "\n":
                self.error(ParseError("String literal not closed", start))
                return string
            else:
                string += next
                if next == current:
                    return string

    def _recover_depth_(self):
        """Braces never occur inside `()` or `[]`, so an open one was never closed."""
        if self._depth_ > 0:
            self.error(ParseError("Parenthesis or bracket not closed", self.line))
            self._depth_ = 0

    def _emit_declaration_(self) -> Declaration | None:
        text = self._take_()
        if text == '':
            return None
        return Declaration(f"{text};", self.line)

    def consume(self) -> Token:
        """Consume code points and return the next statement line."""
        if len(self._pending_) > 0:
            return self._pending_.pop(0)

        while True:
            next = self.next()
            if next is None:
                self._recover_depth_()
                if (decl := self._emit_declaration_()) is not None:
                    self.error(ParseError("Declaration not terminated", decl.line))
                    return decl
                return EOF()
            elif Check.block_comment(next, self.peek()):
                self._consume_block_comment_()
                self._space_ = True
            elif self._depth_ == 0 and Check.line_comment(next, self.peek()):
                self._consume_line_comment_()
                self._space_ = True
            elif Check.quote(next):
                self._append_(self._consume_string_(next))
            elif Check.whitespace(next):
                self._space_ = True
            elif Check.opening(next):
                self._append_(next)
                self._depth_ += 1
            elif Check.closing(next):
                self._depth_ = max(0, self._depth_ - 1)
                self._append_(next)
            elif self._depth_ > 0 and next not in "{}":
                self._append_(next)
            elif next == "{":
                self._recover_depth_()
                return Open(self._take_(), self.line)
            elif next == "}":
                self._recover_depth_()
                close = Close(line=self.line)
                if (decl := self._emit_declaration_()) is not None:
                    self._pending_.append(close)
                    return decl
                return close
            elif next == ";":
                if (decl := self._emit_declaration_()) is not None:
                    return decl
            else:
                self._append_(next)
