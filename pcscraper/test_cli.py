"""
Tests for the command line entry points.
"""
import json
import os

import pytest

from pcscraper import cli, config, links
from pcscraper.config import Config
from pcscraper.models import ListingRecord
from pcscraper.sources import DEFAULT_URLS
from pcscraper.conftest import make_record


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Isolated environment: no .env loading, output and logs under tmp_path."""
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **kw: False)
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.setenv("OUTPUT_TIMESTAMPED", "false")
    monkeypatch.setenv("LOG_FILE_PATH", "")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    return tmp_path


def output_files(tmp_path):
    out = tmp_path / "output"
    return sorted(os.listdir(out)) if out.exists() else []


def test_parse_args_defaults_and_unknown():
    args, unknown = cli.parse_args(["run", "-i", "urls.txt", "--verbose"])
    assert args.input == "urls.txt"
    assert args.output == "pc_listings"
    assert unknown == ["--verbose"]


def test_help_exits_without_running(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run", lambda *a: pytest.fail("pipeline must not run"))
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    assert "--input" in capsys.readouterr().out


def test_missing_credential_writes_nothing(env, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY")

    async def no_scrape(*a, **kw):
        pytest.fail("scrape must not start")

    monkeypatch.setattr(cli, "run_scrape", no_scrape)
    assert cli.main([]) == 1
    assert output_files(env) == []


def test_full_run_writes_both_files(env, monkeypatch):
    seen = {}

    async def fake_scrape(urls, cfg, logger=None, records=None):
        seen["urls"] = list(urls)
        for i, url in enumerate(urls):
            records.append(make_record(title=f"PC {i}", original_url=url))
        return records

    monkeypatch.setattr(cli, "run_scrape", fake_scrape)
    assert cli.main(["-o", "gaming_pcs"]) == 0
    assert seen["urls"] == DEFAULT_URLS
    assert output_files(env) == ["gaming_pcs.csv", "gaming_pcs.json"]

    with open(env / "output" / "gaming_pcs.json", encoding="utf-8") as fh:
        data = json.load(fh)
    assert [d["originalUrl"] for d in data] == DEFAULT_URLS


def test_partial_results_saved_on_unexpected_error(env, monkeypatch):
    async def crashing_scrape(urls, cfg, logger=None, records=None):
        records.append(ListingRecord.failure(urls[0], "Timeout"))
        raise RuntimeError("browser crashed")

    monkeypatch.setattr(cli, "run_scrape", crashing_scrape)
    assert cli.main([]) == 1
    assert output_files(env) == ["pc_listings.csv", "pc_listings.json"]


def test_config_from_env(env):
    cfg = Config.from_env()
    assert cfg.openai_api_key == "sk-test"
    assert cfg.timestamped_output is False
    assert cfg.log_file_path is None
    assert cfg.navigation_timeout_ms == 30_000
    cfg.validate()


def test_filter_listing_links():
    hrefs = [
        "https://www.facebook.com/marketplace/item/1/",
        "https://www.facebook.com/groups/123/",
        None,
        "https://www.facebook.com/marketplace/item/2/",
        "https://www.facebook.com/marketplace/item/1/",
    ]
    assert links.filter_listing_links(hrefs) == [
        "https://www.facebook.com/marketplace/item/1/",
        "https://www.facebook.com/marketplace/item/2/",
    ]


def test_format_links():
    assert links.format_links(["http://a", "http://b"]) == '"http://a",\n"http://b"'


def test_links_main_writes_input_file(env, monkeypatch):
    async def fake_collect(url, cfg, logger=None):
        return ["https://www.facebook.com/marketplace/item/7/"]

    monkeypatch.setattr(links, "run_collect", fake_collect)
    out = env / "urls.json"
    assert links.main(["--url", "https://www.facebook.com/marketplace/you/saved", "-o", str(out)]) == 0
    with open(out, encoding="utf-8") as fh:
        assert json.load(fh) == {"urls": ["https://www.facebook.com/marketplace/item/7/"]}
