from __future__ import annotations

from collections import Counter

from funcgrep.findings.model import FunctionMatch


def build_summary(matches: list[FunctionMatch], files_scanned: int) -> dict:
    c = Counter(m.file for m in matches)
    return {
        "files_scanned": files_scanned,
        "files_with_matches": len(c),
        "functions_matched": sum(c.values()),
        "by_file": dict(c),
    }
