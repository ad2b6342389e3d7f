"""
Tests for the command line interface.
"""
import json

import pytest  # type: ignore[import-not-found]
from click.testing import CliRunner

from schema_translator import __version__
from schema_translator.__main__ import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_translate_file_to_stdout(runner: CliRunner, shop_xmi_file) -> None:
    result = runner.invoke(cli, ["-l", "ERROR", "translate", str(shop_xmi_file), "--from", "xmi", "--to", "json"])

    assert result.exit_code == 0, result.output
    document = json.loads(result.stdout)
    assert [t["name"] for t in document["tables"]] == ["Customer", "InternalLog"]


@pytest.mark.filterwarnings(r"error:.*Click 9\.0:DeprecationWarning")
def test_translate_stdin_with_visibility(runner: CliRunner, shop_xmi) -> None:
    result = runner.invoke(
        cli,
        ["-l", "ERROR", "translate", "-", "-f", "xml-xmi", "-t", "json", "--visibility", "public"],
        input=shop_xmi,
    )

    assert result.exit_code == 0, result.output
    document = json.loads(result.stdout)
    assert [t["name"] for t in document["tables"]] == ["Customer"]


def test_translate_to_output_file(runner: CliRunner, shop_xmi_file, tmp_path) -> None:
    output_file = tmp_path / "schema.json"
    result = runner.invoke(
        cli, ["-l", "ERROR", "translate", str(shop_xmi_file), "-f", "xmi", "-t", "json", "-o", str(output_file)]
    )

    assert result.exit_code == 0, result.output
    assert "Output written to" in result.stdout
    assert json.loads(output_file.read_text(encoding="utf-8"))["tables"][0]["primary_key_field"] == "id"


def test_translate_unknown_parser_fails(runner: CliRunner, shop_xmi_file) -> None:
    result = runner.invoke(cli, ["-l", "ERROR", "translate", str(shop_xmi_file), "--from", "no_such_format"])

    assert result.exit_code == 1
    assert "Can't load parser 'no_such_format'" in result.output


def test_translate_malformed_input_fails(runner: CliRunner, tmp_path) -> None:
    broken = tmp_path / "broken.xmi"
    broken.write_text("<XMI><unclosed></XMI>", encoding="utf-8")
    result = runner.invoke(cli, ["-l", "CRITICAL", "translate", str(broken), "--from", "xmi"])

    assert result.exit_code == 1
    assert "Invalid XMI document" in result.output


def test_plugins_lists_builtin_names(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["plugins"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0].startswith("parsers: ")
    assert "xmi" in lines[0] and "xml-xmi" in lines[0]
    assert lines[1].startswith("producers: ")
    assert "json" in lines[1]


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"Schema Translator v{__version__}"


def test_config_show_reflects_overrides(runner: CliRunner, tmp_path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"default_parser": "xmi"}))

    result = runner.invoke(cli, ["-c", str(config_file), "--log-format", "console", "config-show"])

    assert result.exit_code == 0, result.output
    shown = json.loads(result.stdout)
    assert shown["default_parser"] == "xmi"
    assert shown["logging"]["format"] == "console"
