from __future__ import annotations

from typing import TextIO

from funcgrep.findings.model import FunctionMatch


def format_header(match: FunctionMatch) -> str:
    return f"== {match.file}({match.match_line}) range [{match.start_line},{match.end_line}] =="


def write_text_match(out: TextIO, match: FunctionMatch) -> None:
    out.write(format_header(match) + "\n")
    if match.text:
        out.write(match.text)
