from __future__ import annotations
from typing import Any, Mapping, Sequence

from scopecss.css import Flattener, Lexer, ParseError, flatten, flatten_global, strip_scope
from scopecss.options import DEFAULTS, OptionalOptions, Options, default_options
from scopecss.template import (
    Number,
    Omitted,
    PriorReference,
    Text,
    Value,
    compact,
    interpolate,
    to_value,
)

__version__ = "0.1.0"

__all__ = [
    "Flattener",
    "Lexer",
    "ParseError",
    "flatten",
    "flatten_global",
    "strip_scope",
    "interpolate",
    "compact",
    "to_value",
    "Text",
    "Number",
    "Omitted",
    "PriorReference",
    "Value",
    "Options",
    "OptionalOptions",
    "DEFAULTS",
    "default_options",
    "compile_template",
]

def compile_template(
    chunks: Sequence[str],
    values: Sequence[Any],
    scope_selector: str,
    prior: Mapping[str, str] | None = None,
    options: OptionalOptions | None = None,
) -> str:
    """Interpolate a template and flatten the result under `scope_selector`."""
    return flatten(interpolate(chunks, values, prior), scope_selector, options)
