from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, TextIO

from funcgrep.extraction.line_normalizer import normalize_line
from funcgrep.extraction.match_recorder import record_match
from funcgrep.extraction.nesting import track_braces
from funcgrep.extraction.scan_state import ScanState
from funcgrep.extraction.scope_classifier import count_scope_openers

INCLUDE_RE = re.compile(r"^\s*#include\b")


class LineOutcome(Enum):
    IN_COMMENT = "in_comment"
    INCLUDE_RESET = "include_reset"
    SCOPE_OPENED = "scope_opened"
    ACCUMULATED = "accumulated"
    DISCARDED = "discarded"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ScanResult:
    match_line: int | None
    start_line: int
    end_line: int

    @property
    def found(self) -> bool:
        return self.match_line is not None

    def shifted(self, offset: int) -> ScanResult:
        if self.match_line is None:
            return ScanResult(None, self.start_line + offset, self.end_line + offset)
        return ScanResult(self.match_line + offset, self.start_line + offset, self.end_line + offset)


def step(state: ScanState, raw_line: str, pattern: re.Pattern[str]) -> LineOutcome:
    state.line_no += 1
    if state.keep_lines:
        state.lines.append(raw_line)

    text, state.in_comment = normalize_line(raw_line, state.in_comment)
    if text is None:
        return LineOutcome.IN_COMMENT

    # Includes are assumed to sit at file scope, but only until the block has a match.
    if state.match_line is None and INCLUDE_RE.search(text):
        state.reset()
        return LineOutcome.INCLUDE_RESET

    record_match(state, text, pattern)

    outcome = LineOutcome.ACCUMULATED
    openers = count_scope_openers(text)
    if openers:
        state.reset()
        # The scope's own closing brace must not close a function nested in it.
        state.depth -= openers
        outcome = LineOutcome.SCOPE_OPENED

    if track_braces(state, text):
        if state.match_line is not None:
            return LineOutcome.COMPLETED
        state.reset()
        return LineOutcome.DISCARDED
    return outcome


def find_function(
    lines: Iterator[str],
    pattern: re.Pattern[str],
    sink: TextIO | None = None,
) -> ScanResult:
    # Pass an iterator: the next call resumes after the closing line. Without a
    # sink no lines are buffered.
    state = ScanState(keep_lines=sink is not None)
    for raw in lines:
        outcome = step(state, raw.rstrip("\n"), pattern)
        if outcome is LineOutcome.COMPLETED:
            if sink is not None:
                sink.write(state.text())
            return ScanResult(state.match_line, state.start_line, state.line_no)
    return ScanResult(None, state.start_line, state.line_no)
