from __future__ import annotations

import csv
import io
import json
import sys
from pathlib import Path

import pytest

from funcgrep.cli import main, run

TWO_FUNCTIONS = (
    "int a() {\n"
    "  return foo();\n"
    "}\n"
    "\n"
    "int b() {\n"
    "  foo();\n"
    "}\n"
)


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def _argv(monkeypatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["funcgrep", *args])


def test_prints_each_function_with_absolute_range(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "two.c"
    src.write_text(TWO_FUNCTIONS, encoding="utf-8")
    _argv(monkeypatch, "foo", str(src))

    rc = run()
    out = capsys.readouterr().out

    assert rc == 0
    assert out == (
        f"== {src}(2) range [1,3] ==\n"
        "int a() {\n"
        "  return foo();\n"
        "}\n"
        f"== {src}(6) range [4,7] ==\n"
        "\n"
        "int b() {\n"
        "  foo();\n"
        "}\n"
    )


def test_no_matches_exits_zero_with_empty_output(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "a.c"
    src.write_text("int main(void) {\n  return 0;\n}\n", encoding="utf-8")
    _argv(monkeypatch, "printf", str(src))

    assert run() == 0
    assert capsys.readouterr().out == ""


def test_usage_error_without_files(monkeypatch, capsys):
    _argv(monkeypatch, "foo")
    assert run() == 1
    assert "Usage: funcgrep regex source_file ..." in capsys.readouterr().err


def test_main_exits_with_run_status(monkeypatch):
    _argv(monkeypatch)
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1


def test_invalid_pattern_is_fatal(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "a.c"
    src.write_text("int main(void) {\n  return 0;\n}\n", encoding="utf-8")
    _argv(monkeypatch, "foo(", str(src))

    assert run() == 1
    captured = capsys.readouterr()
    assert "Invalid pattern" in captured.err
    assert captured.out == ""


def test_unreadable_file_is_reported_and_skipped(monkeypatch, tmp_path: Path, capsys):
    missing = tmp_path / "missing.c"
    src = tmp_path / "two.c"
    src.write_text(TWO_FUNCTIONS, encoding="utf-8")
    _argv(monkeypatch, "foo", str(missing), str(src))

    rc = run()
    captured = capsys.readouterr()

    assert rc == 0
    assert f"Unable to open file: {missing}" in captured.err
    assert captured.out.count("== ") == 2


def test_headers_only(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "two.c"
    src.write_text(TWO_FUNCTIONS, encoding="utf-8")
    _argv(monkeypatch, "--headers-only", "foo", str(src))

    assert run() == 0
    assert capsys.readouterr().out == f"== {src}(2) range [1,3] ==\n== {src}(6) range [4,7] ==\n"


def test_ignore_case(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "a.c"
    src.write_text("void f() {\n  FOO();\n}\n", encoding="utf-8")
    _argv(monkeypatch, "-i", "foo", str(src))

    assert run() == 0
    assert f"== {src}(2) range [1,3] ==" in capsys.readouterr().out


def test_directory_argument_is_expanded(monkeypatch, tmp_path: Path, capsys):
    tree = tmp_path / "tree"
    (tree / "src").mkdir(parents=True)
    (tree / "src" / "a.cpp").write_text("void f() {\n  foo();\n}\n", encoding="utf-8")
    (tree / "src" / "README.md").write_text("foo() {\n}\n", encoding="utf-8")
    _argv(monkeypatch, "foo", str(tree))

    assert run() == 0
    out = capsys.readouterr().out
    assert out.startswith(f"== {tree / 'src' / 'a.cpp'}(2) range [1,3] ==\n")
    assert "README" not in out


def test_json_output(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "two.c"
    src.write_text(TWO_FUNCTIONS, encoding="utf-8")
    _argv(monkeypatch, "--output", "json", "foo", str(src))

    assert run() == 0
    data = json.loads(capsys.readouterr().out)
    assert data["pattern"] == "foo"
    assert [(m["match_line"], m["start_line"], m["end_line"]) for m in data["matches"]] == [(2, 1, 3), (6, 4, 7)]
    assert data["matches"][0]["text"] == "int a() {\n  return foo();\n}\n"
    assert data["summary"]["functions_matched"] == 2
    assert data["summary"]["files_scanned"] == 1


def test_csv_output(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "two.c"
    src.write_text(TWO_FUNCTIONS, encoding="utf-8")
    _argv(monkeypatch, "--output", "csv", "foo", str(src))

    assert run() == 0
    rows = list(csv.reader(io.StringIO(capsys.readouterr().out)))
    assert rows[0] == ["File", "Match line", "Start line", "End line"]
    assert rows[1:] == [[str(src), "2", "1", "3"], [str(src), "6", "4", "7"]]


def test_config_error_exit_code(monkeypatch, tmp_path: Path, capsys):
    cfg_file = tmp_path / "bad.toml"
    cfg_file.write_text('[output]\nformat = "xml"\n')
    _argv(monkeypatch, "--config", str(cfg_file), "foo", "a.c")

    assert run() == 1
    assert "Config error: Unsupported output format: xml" in capsys.readouterr().err


def test_unexpected_failure_is_reported(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "a.c"
    src.write_text("void foo() {}\n", encoding="utf-8")

    def boom(*_args, **_kwargs):
        raise RuntimeError("scanner exploded")

    monkeypatch.setattr("funcgrep.cli.scan_file", boom)
    _argv(monkeypatch, "foo", str(src))

    assert run() == 1
    assert "Runtime error: scanner exploded" in capsys.readouterr().err


def test_single_language_env_value_scans_directory(monkeypatch, tmp_path: Path, capsys):
    tree = tmp_path / "tree"
    tree.mkdir()
    (tree / "a.cpp").write_text("void f() {\n  foo();\n}\n", encoding="utf-8")
    (tree / "b.c").write_text("void g() {\n  foo();\n}\n", encoding="utf-8")
    monkeypatch.setenv("FUNCGREP_FILES__LANGUAGES", "cpp")
    _argv(monkeypatch, "foo", str(tree))

    assert run() == 0
    out = capsys.readouterr().out
    assert f"== {tree / 'a.cpp'}(2) range [1,3] ==" in out
    assert "b.c" not in out


def test_unknown_encoding_is_a_config_error(monkeypatch, tmp_path: Path, capsys):
    src = tmp_path / "a.c"
    src.write_text("void foo() {}\n", encoding="utf-8")
    _argv(monkeypatch, "--encoding", "no-such-codec", "foo", str(src))

    assert run() == 1
    assert "Config error: Unknown encoding: no-such-codec" in capsys.readouterr().err
