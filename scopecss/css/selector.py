""" Selector composition and group rule merging.

Selectors are composed pairwise from the outermost scope inward:

    concat(".card", "&:hover")   => ".card:hover"
    concat(".card", ".title")    => ".card .title"
    concat(".card", ">.title")   => ".card>.title"

Both sides may be comma separated lists, in which case every pairing is composed.
"""

from __future__ import annotations
import re
from itertools import product
from typing import Literal

__all__ = [
    "Narrower",
    "split_list",
    "concat",
    "concat_list",
    "combine",
    "merge_conditions",
    "keyframes_name",
]

CONDITIONS = re.compile(r"^@(?:media|container)\b", re.IGNORECASE)
KEYFRAMES = re.compile(r"^@(?:-[a-z]+-)?keyframes\s+(?P<name>[^\s{]+)", re.IGNORECASE)
AT_KEYWORD = re.compile(r"^@[\w-]+")
AND = re.compile(r"\band\b")

WORD_END = re.compile(r"\w$")
SELECTOR_START = re.compile(r"^[a-zA-Z.#*\[:]")

class Narrower:
    """One entry of the scope stack."""

    __slots__ = ("text", "kind")

    def __init__(self, text: str):
        self.text = text
        self.kind: Literal["selector", "condition", "keyframes"] = Narrower.classify(text)

    @staticmethod
    def classify(text: str) -> Literal["selector", "condition", "keyframes"]:
        if KEYFRAMES.match(text):
            return "keyframes"
        elif CONDITIONS.match(text):
            return "condition"
        return "selector"

    def __repr__(self) -> str:
        return f"Narrower({self.kind}, {self.text!r})"

def keyframes_name(spec: str) -> str | None:
    """Name declared by a `@keyframes <name>` header, None for anything else."""
    if (match := KEYFRAMES.match(spec)) is not None:
        return match.group("name")
    return None

def split_list(selector: str) -> list[str]:
    """Split a selector list on commas that are not inside `()` or `[]` or quotes."""
    parts = []
    current = ''
    depth = 0
    quote = None
    for char in selector:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in '"\'':
            quote = char
        elif char in '([':
            depth += 1
        elif char in ')]':
            depth = max(0, depth - 1)
        elif char == ',' and depth == 0:
            parts.append(current)
            current = ''
            continue
        current += char
    parts.append(current)
    return parts

def concat(path: str, seg: str) -> str:
    """Join one selector segment onto one parent path."""
    if "&" in seg:
        return seg.replace("&", path).strip()
    if WORD_END.search(path) and SELECTOR_START.match(seg):
        return f"{path} {seg}"
    return f"{path}{seg}"

def concat_list(path: str, seg: str) -> str:
    """Cartesian `concat` of two comma separated selector lists."""
    return ",".join(
        concat(left, right)
        for left, right in product(split_list(path), split_list(seg))
    )

def combine(paths: list[str]) -> str:
    """Left fold a stack of selector fragments into one selector list."""
    if len(paths) == 0:
        return ""

    result = paths[0]
    for path in paths[1:]:
        result = concat_list(result, path)
    return result

def merge_conditions(specs: list[str]) -> str:
    """Merge nested `@media`/`@container` preludes into one.

    The keyword of the first spec is kept, conditions are deduplicated in
    first seen order.

    Example:
        `["@media (min-width:600px)", "@media (color)"]` => `"@media (min-width:600px) and (color)"`
    """
    if len(specs) == 0:
        return ""

    keyword = match.group(0) if (match := AT_KEYWORD.match(specs[0])) is not None else "@media"

    conditions: list[str] = []
    for spec in specs:
        for condition in AND.split(AT_KEYWORD.sub("", spec, count=1)):
            condition = condition.strip()
            if condition != "" and condition not in conditions:
                conditions.append(condition)

    if len(conditions) == 0:
        return keyword
    return f"{keyword} {' and '.join(conditions)}"
