# File: tests/test_cli.py
"""Tests for the click CLI using click.testing.CliRunner.
Cover `crawl`, `config`, `--version` and the error paths.
"""
import asyncio
import importlib
import json
import types

import pytest
from click.testing import CliRunner

from domain_crawler.cli import cli, validate_start_url
from domain_crawler.crawler.models import CrawledPage, CrawlResult, CrawlStats, FailedPage

# the package re-exports the click group under the same name, so fetch the module itself
cli_module = importlib.import_module("domain_crawler.cli")


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("CRAWLER_STORE", "CRAWLER_MAX_CONCURRENT_REQUESTS", "CRAWLER_REDIS_URL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def fake_crawl(monkeypatch):
    """Patch start_crawl so no network or Redis is touched."""
    calls = []

    async def fake_start(cfg, start_url):
        calls.append((cfg, start_url))
        return CrawlResult(
            start_uri=start_url,
            pages=[CrawledPage("https://example.com/", ["https://example.com/a"])],
            failures=[FailedPage("https://example.com/a", "NOT_FOUND")],
            stats=CrawlStats(pages_dispatched=2, elapsed=0.5),
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_start)
    return calls


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "DomainCrawler" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "crawler.json"
    cfg_file.write_text(json.dumps({"max_concurrent_requests": 7, "store": "memory"}), encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_concurrent_requests"] == 7
    assert data["store"] == "memory"


def test_crawl_applies_overrides(fake_crawl):
    result = CliRunner().invoke(cli, ["crawl", "https://example.com", "--memory", "-n", "3", "--reset"])
    assert result.exit_code == 0, result.output
    cfg, url = fake_crawl[0]
    assert url == "https://example.com"
    assert cfg.store == "memory"
    assert cfg.max_concurrent_requests == 3
    assert cfg.reset_store is True
    assert "Crawled 1 pages, 1 failed" in result.output


@pytest.mark.parametrize("bad", ["not a url", "/relative/path", "file:///etc/passwd", "http://[::1"])
def test_crawl_rejects_bad_start_url(fake_crawl, bad):
    result = CliRunner().invoke(cli, ["crawl", bad])
    assert result.exit_code == 1
    assert fake_crawl == []


def test_crawl_requires_exactly_one_url(fake_crawl):
    assert CliRunner().invoke(cli, ["crawl"]).exit_code != 0
    assert CliRunner().invoke(cli, ["crawl", "https://a.com", "https://b.com"]).exit_code != 0
    assert fake_crawl == []


def test_crawl_writes_reports(tmp_path, fake_crawl):
    json_out = tmp_path / "out" / "crawl.json"
    html_out = tmp_path / "out" / "crawl.html"
    result = CliRunner().invoke(
        cli, ["crawl", "https://example.com", "--json", str(json_out), "--html", str(html_out)]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(json_out.read_text(encoding="utf-8"))
    assert data["pages"][0]["uri"] == "https://example.com/"
    assert data["failures"][0]["reason"] == "NOT_FOUND"
    assert "https://example.com/a" in html_out.read_text(encoding="utf-8")


def test_crawl_failure_exits_nonzero(monkeypatch):
    async def failing(cfg, start_url):
        raise ConnectionError("Redis unreachable")

    monkeypatch.setattr(cli_module, "start_crawl", failing)
    result = CliRunner().invoke(cli, ["crawl", "https://example.com"])
    assert result.exit_code == 1
    assert "Redis unreachable" in result.output


def test_crawl_timeout(monkeypatch):
    async def slow(cfg, start_url):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_crawl", slow)
    result = CliRunner().invoke(cli, ["crawl", "https://example.com", "--crawl-timeout", "0.1"])
    assert result.exit_code == 1
    assert "did not finish" in result.output


def test_validate_start_url():
    assert validate_start_url("https://example.com/start") is None
    assert validate_start_url("example.com") is not None


def test_cli_module_exposes_start_crawl():
    assert isinstance(cli_module, types.ModuleType)
    assert callable(cli_module.start_crawl)
