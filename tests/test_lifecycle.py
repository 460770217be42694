from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from election_predicter.runtime.lifecycle import _with_default_command, main


@pytest.fixture(autouse=True)
def _restore_root_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # No ./configs in tmp_path: the CLI falls back to built-in defaults.
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_run_is_default_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "elect_treasurer: Method name elect_treasurer must start with 'predict_'!",
        "predict_president: The president is Margie Young (Female) of the Green party!",
        "predict_secretary: The secretary is Barney Fitzgerald (Male) of the Libertarian party!",
    ]


def test_run_strict_fails_when_a_method_fails(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "--strict"]) == 1
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_list_prints_methods_and_candidates(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list"]) == 0

    listing = json.loads(capsys.readouterr().out)
    assert [item["method"] for item in listing] == [
        "elect_treasurer",
        "predict_president",
        "predict_secretary",
    ]
    assert listing[1] == {
        "method": "predict_president",
        "party": "Green",
        "first_name": "Margie",
        "last_name": "Young",
        "sex": "Female",
    }


def test_config_file_sets_prefix(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg_path = tmp_path / "custom.yaml"
    cfg_path.write_text("predicter:\n  method_prefix: elect_\n", encoding="utf-8")

    assert main(["--config", str(cfg_path), "run", "--strict"]) == 1

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "elect_treasurer: The treasurer is Bartholemew Bad (Male) of the Republican party!"
    assert out[1] == "predict_president: Method name predict_president must start with 'elect_'!"


def test_print_config_uses_profile_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "app.yaml").write_text("logging:\n  level: warning\n", encoding="utf-8")

    assert main(["print-config"]) == 0

    cfg = json.loads(capsys.readouterr().out)
    assert cfg == {
        "predicter": {"method_prefix": "predict_"},
        "logging": {"level": "WARNING", "format": "json"},
    }


def test_invalid_config_exits_with_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg_path = tmp_path / "bad.yaml"
    cfg_path.write_text("logging:\n  format: xml\n", encoding="utf-8")

    assert main(["--config", str(cfg_path)]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ConfigError: logging.format" in captured.err


def test_help_exits_cleanly(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--help"]) == 0
    assert "election-predicter" in capsys.readouterr().out


def test_unknown_cli_log_level_exits_with_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "nope"]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "--log-level" in captured.err


def test_cli_log_level_is_case_insensitive(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "warning", "list"]) == 0
    assert logging.getLogger().level == logging.WARNING


def test_unknown_config_log_level_is_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg_path = tmp_path / "bad.yaml"
    cfg_path.write_text("logging:\n  level: nope\n", encoding="utf-8")

    assert main(["--config", str(cfg_path)]) == 2
    assert "ConfigError: logging.level" in capsys.readouterr().err


def test_run_options_without_subcommand(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--strict"]) == 1
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_config_path_named_like_a_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "list").write_text("predicter:\n  method_prefix: elect_\n", encoding="utf-8")

    assert main(["--config", "list"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "elect_treasurer: The treasurer is Bartholemew Bad (Male) of the Republican party!"


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        ([], ["run"]),
        (["--strict"], ["run", "--strict"]),
        (["--config", "run"], ["--config", "run", "run"]),
        (["--profile=dev", "list"], ["--profile=dev", "list"]),
        (["--log-level", "DEBUG", "--strict"], ["--log-level", "DEBUG", "run", "--strict"]),
        (["--help"], ["--help"]),
        (["print-config"], ["print-config"]),
    ],
)
def test_default_command_inserted_after_global_options(argv: list[str], expected: list[str]) -> None:
    assert _with_default_command(argv) == expected
