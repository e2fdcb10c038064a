from __future__ import annotations
from typing import TypedDict

__all__ = ["Options", "OptionalOptions", "DEFAULTS", "default_options"]

class Options(TypedDict):
    indent: str
    keyframe_separator: str
    namespace_keyframes: bool

class OptionalOptions(TypedDict, total=False):
    indent: str
    keyframe_separator: str
    namespace_keyframes: bool

DEFAULTS: Options = {
    "indent": "  ",
    "keyframe_separator": "_",
    "namespace_keyframes": True,
}

def default_options(origin: OptionalOptions | dict | None = None) -> Options:
    """Fill in any missing option with its default. The passed mapping is not modified."""
    options = dict(origin or {})
    for key, value in DEFAULTS.items():
        options[key] = options.get(key, value)
    return options  # type: ignore[return-value]
