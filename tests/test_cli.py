from __future__ import annotations

import json
from pathlib import Path

import pytest

from textmask import cli


def _write_config(tmp_path: Path) -> Path:
    config_path = tmp_path / "masks.toml"
    config_path.write_text(
        "[mask]\n"
        "[[mask.fields]]\n"
        "name = \"zip\"\n"
        "pattern = \"zip_us\"\n"
        "prompt_char = \"#\"\n",
        encoding="utf-8",
    )
    return config_path


def test_format_prints_display_text(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["format", "--mask", "(000) 000-0000", "555"]) == 0

    assert capsys.readouterr().out == "(555) ___-____\n"


def test_format_accepts_preset_names(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["format", "-m", "zip_us", "12345", "--show-optional"]) == 0

    assert capsys.readouterr().out == "12345-____\n"


def test_format_json_payload(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--json", "format", "--mask", "LL-0000", "ab1234"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "pattern": "LL-0000",
        "raw": "AB1234",
        "display": "AB-1234",
        "complete": True,
        "capacity": 6,
    }


def test_unmasked_json_payload_reports_no_capacity(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--json", "format", "--mask", "", "abc"]) == 0

    assert json.loads(capsys.readouterr().out)["capacity"] is None


def test_extract_with_and_without_literals(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["extract", "--mask", "phone_us", "(555) 123-4567"])
    cli.main(["extract", "--mask", "phone_us", "(555) 123-4567", "--include-literals"])

    assert capsys.readouterr().out.splitlines() == ["5551234567", "(555) 123-4567"]


def test_check_exit_status(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["check", "--mask", "000-00-0000", "123456789"]) == 0
    assert cli.main(["check", "--mask", "000-00-0000", "1234"]) == 1

    assert capsys.readouterr().out.splitlines() == ["complete", "incomplete"]


def test_literal_helpers(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["insert-literals", "--mask", "ipv4", "192168001001"])
    cli.main(["remove-literals", "--mask", "ipv4", "192.168.001.001"])

    assert capsys.readouterr().out.splitlines() == ["192.168.001.001", "192168001001"]


def test_tokens_listing(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--json", "tokens", "--mask", "0-a"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["tokens"] == [
        {"index": 0, "kind": "required_digit", "character": "0", "optional": False},
        {"index": 1, "kind": "literal", "character": "-", "optional": False},
        {"index": 2, "kind": "optional_letter", "character": "a", "optional": True},
    ]


def test_field_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = _write_config(tmp_path)

    args = ["--config", str(config_path), "format", "--field", "zip", "123", "--show-optional"]
    assert cli.main(args) == 0

    assert capsys.readouterr().out == "123##-####\n"


def test_prompt_char_override_beats_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = _write_config(tmp_path)

    cli.main(["--config", str(config_path), "format", "--field", "zip", "1", "--prompt-char", "."])

    assert capsys.readouterr().out == "1....-\n"


@pytest.mark.parametrize(
    "argv, message",
    [
        (["format", "555"], "either --mask or --field"),
        (["format", "--field", "zip", "555"], "--field requires --config"),
        (["format", "--mask", "000", "--prompt-char", "ab", "1"], "single character"),
        (["format", "--mask", "000", "--prompt-char", "", "1"], "single character"),
    ],
)
def test_usage_errors_exit(argv: list[str], message: str) -> None:
    with pytest.raises(SystemExit, match=message):
        cli.main(argv)


def test_missing_config_file_exits(tmp_path: Path) -> None:
    missing = tmp_path / "absent.toml"

    with pytest.raises(SystemExit, match="configuration file not found"):
        cli.main(["--config", str(missing), "format", "--field", "zip", "1"])


def test_unknown_field_exits(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit, match="not configured"):
        cli.main(["--config", str(config_path), "check", "--field", "phone", "1"])


def test_invalid_config_exits(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.toml"
    config_path.write_text("[other]\n", encoding="utf-8")

    with pytest.raises(SystemExit, match="invalid configuration"):
        cli.main(["--config", str(config_path), "check", "--field", "zip", "1"])
