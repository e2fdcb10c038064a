"""
Statement lines produced by the lexer.

Every line of normalized nested css ends in exactly one of `{`, `}` or `;`:

<open>.card{</open>
    <declaration>color:red;</declaration>
    <open>&:hover{</open>
        <declaration>color:blue;</declaration>
    <close>}</close>
<close>}</close>

open        => selector, @media/@container condition, or @keyframes header,
close       => end of the innermost open block,
declaration => `property:value;` with the terminator included,
"""
__all__ = [
    "Token",
    "Open",
    "Close",
    "Declaration",
    "EOF",
]

class Token:
    raw: str
    line: int
    def __init__(self, raw: str = '', line: int = 0):
        self.raw = raw
        self.line = line

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.raw!r})'

    def __str__(self) -> str:
        return self.raw

    def __eq__(self, __value: object) -> bool:
        if isinstance(__value, Token):
            return type(self) is type(__value) and self.raw == __value.raw
        return False

class Open(Token):
    """Opens a nested block. `raw` holds the prelude without the brace."""
    def __str__(self) -> str:
        return f"{self.raw}{{"

class Close(Token):
    def __init__(self, raw: str = '', line: int = 0):
        super().__init__('', line)

    def __repr__(self) -> str:
        return 'Close()'

    def __str__(self) -> str:
        return '}'

class Declaration(Token):
    """A `property:value;` line, terminator included."""

    @property
    def name(self) -> str:
        return self.raw.split(":", 1)[0].strip().lower()

    @property
    def value(self) -> str:
        if ":" not in self.raw:
            return ""
        return self.raw.split(":", 1)[1].rstrip(";")

class EOF(Token): pass
