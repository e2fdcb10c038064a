from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from itertools import zip_longest
import logging
import re
from typing import Any, Mapping, Sequence
from typing_extensions import TypeAliasType

__all__ = [
    "Text",
    "Number",
    "Omitted",
    "PriorReference",
    "Value",
    "to_value",
    "render_value",
    "compact",
    "interpolate",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Text:
    """Literal text inserted as is."""

    value: str


@dataclass(frozen=True)
class Number:
    value: int | float

    def __str__(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        if isinstance(self.value, float):
            # Never exponent notation, `1e-07px` is not valid css
            return format(Decimal(repr(self.value)), "f")
        return str(self.value)


@dataclass(frozen=True)
class Omitted:
    """Renders as nothing, used for conditional fragments."""


@dataclass(frozen=True)
class PriorReference:
    """A scope name generated by an earlier call, rendered as the nested css that produced it."""

    name: str


Value = TypeAliasType("Value", Text | Number | Omitted | PriorReference)

WHITESPACE_NEWLINE = re.compile(r"\s*\n\s*")
WHITESPACE_TIGHT = re.compile(r"\s*([:{;~,])\s*")
TERMINATORS = re.compile(r";{2,}")


def to_value(raw: Any, prior: Mapping[str, str] | None = None) -> Value:
    """Tag a plain python value with the variant it will be rendered as."""
    if isinstance(raw, (Text, Number, Omitted, PriorReference)):
        return raw
    elif raw is None or raw is False or raw == "":
        return Omitted()
    elif raw is True:
        return Text("true")
    elif isinstance(raw, str):
        if prior is not None and raw in prior:
            return PriorReference(raw)
        return Text(raw)
    elif isinstance(raw, (int, float)):
        return Number(raw)
    return Text(str(raw))


def render_value(value: Value, prior: Mapping[str, str] | None = None) -> str:
    if isinstance(value, Omitted):
        return ""
    elif isinstance(value, PriorReference):
        if prior is not None and value.name in prior:
            return prior[value.name]
        logger.debug("unknown prior reference %r rendered by name", value.name)
        return value.name
    elif isinstance(value, Number):
        return str(value)
    return value.value


def compact(text: str) -> str:
    """Drop insignificant whitespace and doubled `;` terminators."""
    text = WHITESPACE_NEWLINE.sub("\n", text)
    text = WHITESPACE_TIGHT.sub(r"\1", text)
    return TERMINATORS.sub(";", text)


def interpolate(
    chunks: Sequence[str],
    values: Sequence[Any],
    prior: Mapping[str, str] | None = None,
) -> str:
    """Resolve a template into one nested css string.

    Args
        chunks (Sequence[str]): Literal text, one more entry than `values`.
        values (Sequence[Any]): Embedded values, either `Value` variants or plain python values.
        prior (Mapping[str, str] | None): Scope names from earlier calls mapped to their nested css source.

    Returns
        The compacted nested css text, ready for `scopecss.css.flatten`.
    """
    if len(chunks) != len(values) + 1:
        logger.warning(
            "template has %d chunks for %d values, expected %d",
            len(chunks),
            len(values),
            len(values) + 1,
        )

    parts = []
    for chunk, raw in zip_longest(chunks, values, fillvalue=None):
        parts.append(chunk or "")
        if raw is not None:
            parts.append(render_value(to_value(raw, prior), prior))
    return compact("".join(parts))
