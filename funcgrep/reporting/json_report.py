from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import TextIO

from funcgrep.findings.model import FunctionMatch
from funcgrep.reporting.summary import build_summary


def _match_to_json_item(m: FunctionMatch) -> dict:
    item = {
        "file": m.file,
        "match_line": m.match_line,
        "start_line": m.start_line,
        "end_line": m.end_line,
    }
    if m.text is not None:
        item["text"] = m.text
    return item


def build_json_report(pattern: str, matches: list[FunctionMatch], files_scanned: int) -> dict:
    return {
        "tool": "funcgrep",
        "pattern": pattern,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "matches": [_match_to_json_item(m) for m in matches],
        "summary": build_summary(matches, files_scanned),
    }


def write_json_report(out: TextIO, pattern: str, matches: list[FunctionMatch], files_scanned: int) -> None:
    json.dump(build_json_report(pattern, matches, files_scanned), out, indent=2)
    out.write("\n")
