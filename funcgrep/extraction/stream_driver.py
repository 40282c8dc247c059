from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from funcgrep.extraction.function_extractor import ScanResult, find_function
from funcgrep.findings.model import FunctionMatch

log = logging.getLogger("funcgrep")


def pattern_present(lines: Iterable[str], pattern: re.Pattern[str]) -> bool:
    return any(pattern.search(line) for line in lines)


def iter_functions(
    lines: Iterable[str],
    pattern: re.Pattern[str],
    *,
    keep_text: bool = True,
) -> Iterator[tuple[ScanResult, str | None]]:
    stream = iter(lines)
    total = 0
    while True:
        sink = io.StringIO() if keep_text else None
        result = find_function(stream, pattern, sink)
        if not result.found:
            return
        yield result.shifted(total), sink.getvalue() if sink is not None else None
        total += result.end_line


def scan_file(
    path: Path,
    pattern: re.Pattern[str],
    *,
    display_name: str | None = None,
    keep_text: bool = True,
    prescan: bool = True,
    encoding: str = "utf-8",
) -> list[FunctionMatch]:
    name = display_name if display_name is not None else str(path)
    with path.open("r", encoding=encoding, errors="ignore") as f:
        # Buffering every line is far more expensive than one plain search pass.
        if prescan:
            if not pattern_present(f, pattern):
                log.debug("No match for pattern in %s", name)
                return []
            f.seek(0)
        matches = [
            FunctionMatch(
                file=name,
                match_line=result.match_line,
                start_line=result.start_line,
                end_line=result.end_line,
                text=text,
            )
            for result, text in iter_functions(f, pattern, keep_text=keep_text)
        ]
    log.debug("Found %d function(s) in %s", len(matches), name)
    return matches
