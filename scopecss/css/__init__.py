"""
References:
    - [nesting](https://developer.chrome.com/articles/css-nesting/)
    - [@media](https://developer.mozilla.org/en-US/docs/Web/CSS/@media)
    - [@container](https://developer.mozilla.org/en-US/docs/Web/CSS/@container)
    - [@keyframes](https://developer.mozilla.org/en-US/docs/Web/CSS/@keyframes)

<ruleset>
    <selector/> <block>
        <property/>: <value/>;
        <ruleset/>
        <at-rule/> <block/>
    </block>
</ruleset>

selector => `&`, class, id, pseudo, children, sibling, comma lists, etc...,
at-rule  => @media, @container (merged when nested), @keyframes (namespaced),
"""
from scopecss.css.flatten import Flattener, RuleSlot, flatten, flatten_global, strip_scope
from scopecss.css.lexer import Lexer, ParseError

__all__ = [
    "Flattener",
    "RuleSlot",
    "Lexer",
    "ParseError",
    "flatten",
    "flatten_global",
    "strip_scope",
]
