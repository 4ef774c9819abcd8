"""Tests for the price token plugin entry point."""

import json
import pytest
from argparse import Namespace
from pathlib import Path
from pricetoken.pltokens import parser, plugin_run, __version__


def options(**overrides) -> Namespace:
    values = dict(ask=None, quote=None, band=None, increment=None, pattern="**/*.md")
    values.update(overrides)
    return Namespace(**values)


@pytest.fixture
def inputdir(tmp_path: Path) -> Path:
    path = tmp_path / "incoming"
    path.mkdir()
    (path / "page.md").write_text(
        "Range: {{CAPITAL_REQUIREMENT_RANGE}}", encoding="utf-8"
    )
    return path


def test_version_output(capsys):
    with pytest.raises(SystemExit) as exit_info:
        parser.parse_args(["-V"])
    assert exit_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_parser_defaults():
    assert parser.get_default("pattern") == "**/*.md"
    assert parser.get_default("ask") is None
    assert parser.get_default("quote") is None


def test_plugin_run_with_ask(inputdir: Path, tmp_path: Path):
    outputdir = tmp_path / "outgoing"
    assert plugin_run(options(ask=30000.0, band=10.0), inputdir, outputdir) == 0
    assert (outputdir / "page.md").read_text(encoding="utf-8") == (
        "Range: ~$27,000–$33,000"
    )


def test_plugin_run_with_quote_file(inputdir: Path, tmp_path: Path):
    quote = tmp_path / "quote.json"
    quote.write_text(json.dumps({"ask": 30000}), encoding="utf-8")
    outputdir = tmp_path / "outgoing"
    assert plugin_run(options(quote=str(quote)), inputdir, outputdir) == 0
    assert (outputdir / "page.md").read_text(encoding="utf-8") == (
        "Range: ~$28,500–$31,500"
    )


def test_plugin_run_without_quote(inputdir: Path, tmp_path: Path):
    outputdir = tmp_path / "outgoing"
    assert plugin_run(options(), inputdir, outputdir) == 0
    assert (outputdir / "page.md").read_text(encoding="utf-8") == (
        "Range: current market price"
    )


def test_plugin_run_invalid_config(inputdir: Path, tmp_path: Path):
    outputdir = tmp_path / "outgoing"
    assert plugin_run(options(ask=30000.0, increment=0.0), inputdir, outputdir) == 1
    assert not outputdir.exists()


def test_plugin_run_reports_failures(inputdir: Path, tmp_path: Path):
    (inputdir / "broken.json").write_text("[{}]", encoding="utf-8")
    outputdir = tmp_path / "outgoing"
    assert plugin_run(options(ask=30000.0, pattern="*"), inputdir, outputdir) == 1
    assert (outputdir / "page.md").exists()
