# File: tests/test_cli.py
"""Tests for the CLI (`sitemap_scout/cli.py`) using click.testing.CliRunner.
Cover the `scrape` and `config` commands, `--version` and error handling.
"""
import asyncio
import json

import pytest
import sitemap_scout.cli as cli_module
from click.testing import CliRunner
from sitemap_scout.cli import cli
from sitemap_scout.crawler.models import SeoData

ROOT = "https://example.com/sitemap.xml"


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Patch start_scan to return fixed records without touching the network."""
    records = [
        SeoData(url="https://example.com/b", title="B", h1="", meta_description="", status_code=404),
        SeoData(url="https://example.com/a", title="A", h1="Hi", meta_description="About", status_code=200),
    ]
    seen = {}

    async def fake_scan(cfg):
        seen["config"] = cfg
        return records

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return seen


@pytest.fixture()
def config_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(f"root_url: {ROOT}\nconcurrency: 4\nseed: 5\n", encoding="utf-8")
    return cfg_file


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SitemapScout" in result.output


def test_scrape_help_needs_no_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["scrape", "--help"])
    assert result.exit_code == 0
    assert "--scan-timeout" in result.output


def test_show_config_from_file(config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["root_url"] == ROOT
    assert data["concurrency"] == 4
    assert data["seed"] == 5


def test_command_line_overrides(config_file):
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "--concurrency", "7", "--root-url", "https://other.org/s.xml", "config"]
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["concurrency"] == 7
    assert data["root_url"] == "https://other.org/s.xml"
    assert data["seed"] == 5


def test_root_url_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["--root-url", ROOT, "config"])
    assert result.exit_code == 0
    assert json.loads(result.output)["concurrency"] == 10


def test_missing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["scrape"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_invalid_root_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["--root-url", "not a url", "config"])
    assert result.exit_code == 1


def test_concurrency_must_be_positive():
    result = CliRunner().invoke(cli, ["--root-url", ROOT, "--concurrency", "0", "config"])
    assert result.exit_code == 2


def test_scrape_stdout(patch_start_scan):
    result = CliRunner().invoke(cli, ["--root-url", ROOT, "--concurrency", "3", "scrape"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert [p["url"] for p in output] == ["https://example.com/a", "https://example.com/b"]
    assert output[0]["meta_description"] == "About"
    assert patch_start_scan["config"].concurrency == 3


def test_scrape_json_file(tmp_path, config_file):
    out = tmp_path / "reports" / "out.json"
    result = CliRunner().invoke(cli, ["--config", str(config_file), "scrape", "--json", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["pages"] == 2
    assert data["summary"]["missing_h1"] == 1
    assert data["summary"]["status_codes"] == {"200": 1, "404": 1}
    assert data["pages"][0]["url"] == "https://example.com/a"


def test_scrape_html_file(tmp_path, config_file):
    out = tmp_path / "report.html"
    result = CliRunner().invoke(cli, ["--config", str(config_file), "scrape", "--html", str(out)])
    assert result.exit_code == 0
    html = out.read_text(encoding="utf-8")
    assert "https://example.com/a" in html
    assert "Missing h1: 1" in html


def test_scrape_html_custom_template(tmp_path, config_file):
    tpl_dir = tmp_path / "tpl"
    tpl_dir.mkdir()
    (tpl_dir / "report.html.j2").write_text(
        "{% for p in pages %}[{{ p.title }}]{% endfor %}", encoding="utf-8"
    )
    out = tmp_path / "report.html"
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "scrape", "--html", str(out), "--template", str(tpl_dir)]
    )
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "[A][B]"


def test_scan_timeout(monkeypatch, config_file):
    async def slow(cfg):
        await asyncio.sleep(2)
        return []

    monkeypatch.setattr(cli_module, "start_scan", slow)

    result = CliRunner().invoke(cli, ["--config", str(config_file), "scrape", "--scan-timeout", "0.2"])
    assert result.exit_code != 0
    assert "did not finish" in result.output


def test_log_file(tmp_path, config_file):
    log_file = tmp_path / "scout.log"
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "--log-file", str(log_file), "scrape"]
    )
    assert result.exit_code == 0
    assert log_file.exists()
