from __future__ import annotations

import re

from funcgrep.extraction.scan_state import ScanState


def record_match(state: ScanState, text: str, pattern: re.Pattern[str]) -> bool:
    if pattern.search(text):
        state.match_line = state.line_no
        return True
    return False
