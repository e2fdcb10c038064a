""" Nested CSS flattening

Walks the statement lines of a nested css block with a stack of narrowers
(selectors, `@media`/`@container` conditions, `@keyframes` headers) and collects
declarations into rule slots keyed by `(group rule, selector path)`.

```
.card{
  color:red;
  &:hover{color:blue;}
  @media (min-width:600px){padding:0;}
}
```

flattened under `.cs_1a2b` becomes

```
.cs_1a2b .card{color:red;}
.cs_1a2b .card:hover{color:blue;}
@media (min-width:600px){
  .cs_1a2b .card{padding:0;}
}
```
"""

from __future__ import annotations
import logging
import re

from scopecss.css.lexer import Lexer, ParseError
from scopecss.css.selector import KEYFRAMES, Narrower, combine, keyframes_name, merge_conditions, split_list
from scopecss.css.tokens import *
from scopecss.options import OptionalOptions, default_options

__all__ = ["RuleSlot", "Flattener", "flatten", "flatten_global", "strip_scope"]

logger = logging.getLogger(__name__)

ANIMATION = re.compile(r"^(?:-[a-z]+-)?animation(?:-name)?$")

class RuleSlot:
    """Declarations sharing one group rule and one composed selector path."""

    __slots__ = ("group", "selector", "lines")

    def __init__(self, group: str, selector: str):
        self.group = group
        self.selector = selector
        self.lines: list[Declaration] = []

    def render(self) -> str:
        return f"{self.selector}{{{' '.join(str(line) for line in self.lines)}}}"

    def __repr__(self) -> str:
        return f"RuleSlot({self.group!r}, {self.selector!r}, lines={len(self.lines)})"

class Flattener:
    """Flattens one nested css block under a scope selector.

    Args
        source (str): The nested css text.
        scope (str): Class selector every rule is scoped under, e.g. `.cs_1a2b3c4d`.
        options (OptionalOptions | None): Rendering options, see `scopecss.options`.
    """

    def __init__(self, source: str, scope: str, options: OptionalOptions | None = None) -> None:
        self.source = source
        self.scope = scope
        self.options = default_options(options)
        self.errors: list[ParseError] = []
        self.narrowers: list[Narrower] = []
        self.slots: dict[tuple[str, str], RuleSlot] = {}
        self.slot: RuleSlot | None = None

    @property
    def scope_id(self) -> str:
        return self.scope[1:] if self.scope.startswith(".") else self.scope

    def _resolve_slot_(self) -> RuleSlot:
        keyframes = [
            i for i, narrower in enumerate(self.narrowers) if narrower.kind == "keyframes"
        ]
        if len(keyframes) > 0:
            # Only the keyframe selectors (`from`, `50%`, ...) apply inside a keyframes block
            group = self.narrowers[keyframes[-1]].text
            selector = combine([n.text for n in self.narrowers[keyframes[-1] + 1 :]])
        else:
            group = merge_conditions([n.text for n in self.narrowers if n.kind == "condition"])
            selector = combine([n.text for n in self.narrowers if n.kind == "selector"])

        key = (group, selector)
        if key not in self.slots:
            logger.debug("new rule slot %r %r", group, selector)
            self.slots[key] = RuleSlot(group, selector)
        return self.slots[key]

    def _anchor_(self, text: str) -> str:
        """Treat a leading scope selector in a top level selector as `&`, so flat input stays flat."""
        if any(narrower.kind == "selector" for narrower in self.narrowers[1:]):
            return text
        if Narrower.classify(text) != "selector":
            return text
        scope = re.compile(re.escape(self.scope) + r"(?![\w-])")
        return ",".join(
            scope.sub("&", part, count=1) if scope.match(part) else part
            for part in split_list(text)
        )

    def push(self, text: str):
        if len(self.narrowers) > 0:
            text = self._anchor_(text)
        self.narrowers.append(Narrower(text))
        self.slot = self._resolve_slot_()

    def pop(self, line: int | None = None):
        if len(self.narrowers) <= 1:
            # The scope selector is never popped
            self.errors.append(ParseError("Unmatched closing brace", line))
            return
        self.narrowers.pop()
        self.slot = self._resolve_slot_()

    def consume(self, token: Token):
        if isinstance(token, Open):
            self.push(token.raw)
        elif isinstance(token, Close):
            self.pop(token.line)
        elif isinstance(token, Declaration) and self.slot is not None:
            self.slot.lines.append(token)

    def process(self) -> str:
        """Flatten the entire source at once."""
        self.errors = []
        self.slots = {}
        self.narrowers = []
        self.push(self.scope)

        lexer = Lexer(self.source)
        for token in lexer:
            self.consume(token)
        self.errors = lexer.errors + self.errors

        if len(self.narrowers) > 1:
            self.errors.append(
                ParseError(f"{len(self.narrowers) - 1} block(s) not closed", lexer.line)
            )

        slots = [slot for slot in self.slots.values() if len(slot.lines) > 0]
        if self.options["namespace_keyframes"]:
            self._namespace_keyframes_(slots)
        return self._render_(slots)

    def _namespace_keyframes_(self, slots: list[RuleSlot]):
        """Prefix keyframe names with the scope id, in both the headers and the animation declarations."""
        renames: dict[str, str] = {}
        for slot in slots:
            if (name := keyframes_name(slot.group)) is not None:
                renames[name] = f"{self.scope_id}{self.options['keyframe_separator']}{name}"

        if len(renames) == 0:
            return

        names = re.compile(
            r"(?<![\w-])("
            + "|".join(re.escape(name) for name in sorted(renames, key=len, reverse=True))
            + r")(?![\w-])"
        )

        for slot in slots:
            if (match := KEYFRAMES.match(slot.group)) is not None:
                name = match.group("name")
                slot.group = f"{slot.group[:match.start('name')]}{renames[name]}{slot.group[match.end('name'):]}"

            for i, line in enumerate(slot.lines):
                if ANIMATION.match(line.name):
                    head = line.raw.split(":", 1)[0]
                    value = names.sub(lambda m: renames[m.group(1)], line.value)
                    slot.lines[i] = Declaration(f"{head}:{value};", line.line)

    def _render_(self, slots: list[RuleSlot]) -> str:
        groups: dict[str, list[RuleSlot]] = {}
        for slot in slots:
            groups.setdefault(slot.group, []).append(slot)

        indent = self.options["indent"]
        blocks = []
        for group, members in groups.items():
            lines = [slot.render() for slot in members]
            if group != "":
                body = "\n".join(f"{indent}{line}" for line in lines)
                blocks.append(f"{group}{{\n{body}\n}}")
            else:
                blocks.append("\n".join(lines))
        return "\n".join(blocks)

def flatten(css_body: str, scope_selector: str, options: OptionalOptions | None = None) -> str:
    """Flatten nested css text into plain css scoped under `scope_selector`.

    Malformed input never raises; recovered problems are logged as warnings.
    """
    flattener = Flattener(css_body, scope_selector, options)
    result = flattener.process()
    for error in flattener.errors:
        logger.warning("%s", error)
    return result

def strip_scope(css_text: str, scope_selector: str) -> str:
    """Remove the scope selector from flattened css so its rules apply globally.

    `.s .a` becomes `.a`, while a bare or attached scope (`.s`, `.s:hover`) becomes `:root`.
    """
    pattern = re.compile(re.escape(scope_selector) + r"(?![\w-])( ?)")
    return pattern.sub(lambda m: "" if m.group(1) else ":root", css_text)

def flatten_global(css_body: str, scope_selector: str, options: OptionalOptions | None = None) -> str:
    return strip_scope(flatten(css_body, scope_selector, options), scope_selector)
