from __future__ import annotations

import re

# Regex based stripping. Raw string literals and preprocessor continuation
# lines are not understood.
SPAN_COMMENT_RE = re.compile(r"/\*.*?\*/")
BEGIN_BLOCK_COMMENT_RE = re.compile(r"(.*?)/\*.*")
END_BLOCK_COMMENT_RE = re.compile(r".*?\*/(.*)")
LINE_COMMENT_RE = re.compile(r"//.*")
QUOTED_RE = re.compile(
    r'"(?:[^"\\]*(?:\\.[^"\\]*)*)"'
    r"|'(?:[^'\\]*(?:\\.[^'\\]*)*)'"
)


def normalize_line(raw: str, in_comment: bool) -> tuple[str | None, bool]:
    # Returns None as the text while inside a block comment.
    text = SPAN_COMMENT_RE.sub(" ", raw)
    if not in_comment:
        m = BEGIN_BLOCK_COMMENT_RE.search(text)
        if m:
            text = m.group(1)
            in_comment = True
    else:
        m = END_BLOCK_COMMENT_RE.search(text)
        if m:
            text = m.group(1)
            in_comment = False
    if in_comment:
        return None, True

    text = LINE_COMMENT_RE.sub("", text)
    text = QUOTED_RE.sub("", text)
    return text, False
