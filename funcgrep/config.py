from __future__ import annotations

import argparse
import codecs
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_EXCLUDES = [
    ".git/**",
    "build/**",
    "dist/**",
    "out/**",
    "node_modules/**",
    "third_party/**",
    "vendor/**",
]

OUTPUT_FORMATS = {"text", "json", "csv"}
LIST_FILE_KEYS = ("languages", "include", "exclude")


class UsageError(ValueError):
    pass


@dataclass
class ScanConfig:
    ignore_case: bool = False
    headers_only: bool = False
    prescan: bool = True
    encoding: str = "utf-8"


@dataclass
class FilesConfig:
    languages: list[str] = field(default_factory=lambda: ["c", "cpp"])
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    follow_symlinks: bool = False
    max_file_bytes: int = 10_000_000


@dataclass
class OutputConfig:
    format: str = "text"


@dataclass
class LoggingConfig:
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None


@dataclass
class Config:
    pattern: str | None = None
    paths: list[str] = field(default_factory=list)
    config_path: str | None = None

    scan: ScanConfig = field(default_factory=ScanConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    output_cfg: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="funcgrep",
        description="Print every C-family function whose body matches a regular expression",
    )
    p.add_argument("pattern", nargs="?", help="Regular expression to search for")
    p.add_argument("paths", nargs="*", help="Source files or directories")
    p.add_argument("--config", dest="config_path")

    p.add_argument("-i", "--ignore-case", action="store_true")
    p.add_argument("--headers-only", action="store_true", help="Print only the match headers")
    p.add_argument("--no-prescan", action="store_true", help="Skip the quick whole-file search")
    p.add_argument("--encoding")

    p.add_argument("--output", choices=sorted(OUTPUT_FORMATS))

    p.add_argument("--lang", help="Comma-separated languages for directory arguments: c,cpp")
    p.add_argument("--include", action="append")
    p.add_argument("--exclude", action="append")
    p.add_argument("--follow-symlinks", action="store_true")
    p.add_argument("--max-file-bytes", type=int)

    p.add_argument("--quiet", action="store_true")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-file")

    return p


def _deep_update(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def _discover_config_path() -> Path | None:
    candidates = [
        Path("./funcgrep.toml"),
        Path("./.funcgrep.toml"),
        Path.home() / ".config" / "funcgrep" / "config.toml",
    ]
    for c in candidates:
        if c.exists():
            return c
    return None


def _load_toml(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def _parse_env_value(raw: str) -> Any:
    low = raw.lower()
    if low in {"true", "false"}:
        return low == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        if "," in raw:
            return [x.strip() for x in raw.split(",") if x.strip()]
        return raw


def _load_env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith("FUNCGREP_"):
            continue
        key = k[len("FUNCGREP_") :].lower()
        parts = key.split("__")
        cur = out
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})
        cur[parts[-1]] = _parse_env_value(v)
    return out


def _apply_cli_overrides(data: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    cli: dict[str, Any] = {
        "pattern": args.pattern,
        "paths": list(args.paths),
        "config_path": args.config_path,
    }

    def sec(section: str) -> dict[str, Any]:
        return cli.setdefault(section, {})

    mapping = {
        ("scan", "encoding"): args.encoding,
        ("output", "format"): args.output,
        ("files", "include"): args.include,
        ("files", "exclude"): args.exclude,
        ("files", "max_file_bytes"): args.max_file_bytes,
        ("logging", "log_file"): args.log_file,
    }
    for (s, k), v in mapping.items():
        if v is not None:
            sec(s)[k] = v

    if args.lang is not None:
        sec("files")["languages"] = [x.strip() for x in args.lang.split(",") if x.strip()]
    if args.ignore_case:
        sec("scan")["ignore_case"] = True
    if args.headers_only:
        sec("scan")["headers_only"] = True
    if args.no_prescan:
        sec("scan")["prescan"] = False
    if args.follow_symlinks:
        sec("files")["follow_symlinks"] = True
    if args.quiet:
        sec("logging")["quiet"] = True
    if args.verbose:
        sec("logging")["verbose"] = True

    _deep_update(data, cli)
    return data


def _from_dict(d: dict[str, Any]) -> Config:
    files = dict(d.get("files", {}))
    # A single env or TOML value stands for a one-element list.
    for key in LIST_FILE_KEYS:
        if isinstance(files.get(key), str):
            files[key] = [files[key]]
    try:
        return Config(
            pattern=d.get("pattern"),
            paths=list(d.get("paths", [])),
            config_path=d.get("config_path"),
            scan=ScanConfig(**d.get("scan", {})),
            files=FilesConfig(**files),
            output_cfg=OutputConfig(**d.get("output", {})),
            logging=LoggingConfig(**d.get("logging", {})),
        )
    except TypeError as e:
        raise ValueError(f"Unknown config key: {e}") from e


def resolve_config(args: argparse.Namespace) -> Config:
    if args.pattern is None or not args.paths:
        raise UsageError("a pattern and at least one source file are required")

    data: dict[str, Any] = {}

    config_path = Path(args.config_path) if args.config_path else _discover_config_path()
    if config_path:
        _deep_update(data, _load_toml(config_path))
        data["config_path"] = str(config_path)

    _deep_update(data, _load_env_overrides())
    _apply_cli_overrides(data, args)

    cfg = _from_dict(data)

    if cfg.output_cfg.format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {cfg.output_cfg.format}")
    if cfg.files.max_file_bytes < 0:
        raise ValueError("files.max_file_bytes must be >= 0")
    unknown = [lang for lang in cfg.files.languages if lang not in {"c", "cpp"}]
    if unknown:
        raise ValueError(f"Unsupported language: {', '.join(unknown)}")
    try:
        codecs.lookup(cfg.scan.encoding)
    except LookupError as e:
        raise ValueError(f"Unknown encoding: {cfg.scan.encoding}") from e

    return cfg
