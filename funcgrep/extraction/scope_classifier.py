from __future__ import annotations

import re

# "namespace {", "namespace a{", "namespace a{namespace b {", "class a : public b {"
SCOPE_KEYWORD_RE = re.compile(r"\b(?:namespace|class)\b")
# using-directives, namespace aliases, class forward declarations and template parameters
NON_OPENER_RE = re.compile(
    r"\busing\s+namespace\b"
    r"|\bnamespace\s*[^\d\W]\w*\s*="
    r"|\bclass\s*[^\d\W]\w*\s*[;,>]"
)


def is_scope_opener(text: str) -> bool:
    return bool(SCOPE_KEYWORD_RE.search(text)) and not NON_OPENER_RE.search(text)


def count_scope_openers(text: str) -> int:
    if not is_scope_opener(text):
        return 0
    return len(SCOPE_KEYWORD_RE.findall(text))
