from __future__ import annotations

import logging
import re
import sys

from funcgrep.config import Config, UsageError, build_parser, resolve_config
from funcgrep.extraction.stream_driver import scan_file
from funcgrep.findings.model import FunctionMatch
from funcgrep.reporting.csv_report import write_csv_report
from funcgrep.reporting.json_report import write_json_report
from funcgrep.reporting.text_report import write_text_match
from funcgrep.scanner.file_scanner import expand_paths
from funcgrep.utils.logging import configure_logging

log = logging.getLogger("funcgrep")

USAGE = "Usage: funcgrep regex source_file ..."


def compile_pattern(cfg: Config) -> re.Pattern[str]:
    flags = re.IGNORECASE if cfg.scan.ignore_case else 0
    return re.compile(cfg.pattern or "", flags)


def run() -> int:
    parser = build_parser()
    args = parser.parse_args()

    try:
        cfg = resolve_config(args)
    except UsageError:
        print(USAGE, file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    configure_logging(cfg.logging.verbose, cfg.logging.quiet, cfg.logging.log_file)

    try:
        # One pattern serves every file, so a bad one stops the run before any file is read.
        try:
            pattern = compile_pattern(cfg)
        except re.error as e:
            print(f"Invalid pattern: {e}", file=sys.stderr)
            return 1

        files = expand_paths(cfg.paths, cfg.files)
        if not files:
            log.warning("No source files matched the given paths")

        fmt = cfg.output_cfg.format
        collected: list[FunctionMatch] = []
        matched = 0
        for path in files:
            try:
                found = scan_file(
                    path,
                    pattern,
                    keep_text=not cfg.scan.headers_only,
                    prescan=cfg.scan.prescan,
                    encoding=cfg.scan.encoding,
                )
            except OSError as e:
                print(f"Unable to open file: {path}", file=sys.stderr)
                log.debug("Skipping %s: %s", path, e)
                continue
            matched += len(found)
            if fmt == "text":
                for m in found:
                    write_text_match(sys.stdout, m)
            else:
                collected.extend(found)

        if fmt == "json":
            write_json_report(sys.stdout, cfg.pattern or "", collected, len(files))
        elif fmt == "csv":
            write_csv_report(sys.stdout, collected)

        log.debug("Scanned %d file(s), %d function(s) matched", len(files), matched)
        return 0

    except Exception as e:  # noqa: BLE001
        log.debug("Unexpected failure", exc_info=True)
        print(f"Runtime error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
