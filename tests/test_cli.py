# tests/test_cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from buildseq.cli import run_cli


def _py(code: str) -> str:
    exe = str(Path(sys.executable))
    # This returns a command string. JSON will escape it safely.
    return f'"{exe}" -c "{code}"'


def _write_json_config(path: Path, tasks: dict, **extra: str) -> None:
    path.write_text(json.dumps({"tasks": tasks, **extra}), encoding="utf-8")


def _append(log: Path, text: str) -> str:
    return _py(f"open(r'{log}','a').write('{text}\\\\n')")


def test_runs_tasks_in_given_order(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    trace = tmp_path / "trace.txt"
    _write_json_config(
        cfg,
        {
            "check": _append(trace, "check"),
            "clean": _append(trace, "clean"),
            "build": _append(trace, "build"),
        },
        log_file=str(tmp_path / "build.log"),
    )

    code = run_cli(["--config", str(cfg), "clean", "build", "check"])
    out = capsys.readouterr().out

    assert code == 0
    assert trace.read_text(encoding="utf-8").splitlines() == ["clean", "build", "check"]
    assert "[ ✓ ] clean" in out
    assert "[ ✓ ] build" in out
    assert "[ ✓ ] check" in out
    assert out.count("\n") == 3


def test_failure_returns_1_and_skips_the_rest(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    trace = tmp_path / "trace.txt"
    _write_json_config(
        cfg,
        {
            "clean": _append(trace, "clean"),
            "build": _py("raise SystemExit(5)"),
            "dist": _append(trace, "dist"),
        },
        log_file=str(tmp_path / "build.log"),
    )

    code = run_cli(["--config", str(cfg), "clean", "build", "dist"])
    captured = capsys.readouterr()

    assert code == 1
    assert trace.read_text(encoding="utf-8").splitlines() == ["clean"]
    assert "[ ✗ ] build" in captured.out
    assert "build: exit code = 5" in captured.err
    assert "SKIP dist" in captured.err


def test_release_variant_selects_release_command(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    trace = tmp_path / "trace.txt"
    _write_json_config(
        cfg,
        {
            "build": {
                "debug": _append(trace, "debug"),
                "release": _append(trace, "release"),
            }
        },
    )

    code = run_cli(["--config", str(cfg), "-v", "r", "build"])
    _ = capsys.readouterr()

    assert code == 0
    assert trace.read_text(encoding="utf-8").splitlines() == ["release"]


def test_quiet_mode_writes_output_to_log_and_show_log_prints_it(
    tmp_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    log = tmp_path / "build.log"
    _write_json_config(
        cfg,
        {
            "build": _py("print('compiled everything')"),
            "show-log": _py("import sys; print(open(sys.argv[1]).read())"),
        },
        log_file=str(log),
    )

    assert run_cli(["--config", str(cfg), "-q", "build"]) == 0
    out = capfd.readouterr().out
    assert "compiled everything" not in out
    assert "compiled everything" in log.read_text(encoding="utf-8")

    assert run_cli(["--config", str(cfg), "show-log"]) == 0
    out = capfd.readouterr().out
    assert "compiled everything" in out
    assert "[ ✓ ] show-log" in out


def test_show_log_without_log_fails_as_task(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    _write_json_config(cfg, {}, log_file=str(tmp_path / "missing.log"))

    code = run_cli(["--config", str(cfg), "show-log"])
    captured = capsys.readouterr()

    assert code == 1
    assert "[ ✗ ] show-log" in captured.out
    assert "No log file yet" in captured.err


def test_unknown_task_returns_2_and_runs_nothing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    trace = tmp_path / "trace.txt"
    _write_json_config(cfg, {"clean": _append(trace, "clean")})

    code = run_cli(["--config", str(cfg), "clean", "nope"])
    captured = capsys.readouterr()

    assert code == 2
    assert not trace.exists()
    assert captured.out == ""
    assert "nope" in captured.err


def test_unknown_variant_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    _write_json_config(cfg, {})

    code = run_cli(["--config", str(cfg), "-v", "x", "build"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_invalid_config_path_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.json"

    code = run_cli(["--config", str(missing), "build"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_config_is_discovered_in_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    trace = tmp_path / "trace.txt"
    (tmp_path / "buildseq.yml").write_text(
        # A JSON string is a valid double-quoted YAML scalar.
        "tasks:\n  clean: " + json.dumps(_append(trace, "clean")) + "\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    code = run_cli(["clean"])
    _ = capsys.readouterr()

    assert code == 0
    assert trace.read_text(encoding="utf-8").splitlines() == ["clean"]


def test_no_tasks_is_a_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as e:
        run_cli([])
    _ = capsys.readouterr()

    assert e.value.code == 2


def test_unbalanced_quote_in_config_returns_2_and_runs_nothing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    _write_json_config(cfg, {"clean": './gradlew "clean'})

    code = run_cli(["--config", str(cfg), "clean", "build"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.out == ""
    assert "clean" in captured.err


def test_unopenable_log_fails_the_task_with_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "buildseq.json"
    logs = tmp_path / "logs"
    logs.mkdir()
    trace = tmp_path / "trace.txt"
    _write_json_config(
        cfg,
        {"clean": _append(trace, "clean"), "build": _append(trace, "build")},
        log_file=str(logs),
    )

    code = run_cli(["--config", str(cfg), "-q", "clean", "build"])
    captured = capsys.readouterr()

    assert code == 1
    assert not trace.exists()
    assert "[ ✗ ] clean" in captured.out
    assert "build" not in captured.out
    assert "cannot open log file" in captured.err
    assert "SKIP build" in captured.err
