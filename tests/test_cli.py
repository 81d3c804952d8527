"""Tests for the command line interface."""

import pendulum
import pytest
import typer
from typer.testing import CliRunner

from conftest import make_items, make_page, make_record
from dailyfeed.cli import app
from dailyfeed.config import ConfigModel, FeedConfig, StoreConfig, load_config, save_config
from dailyfeed.errors import TransportError
from dailyfeed.ingestion import FeedTransport
from dailyfeed.store import FeedCache, FileStore
from dailyfeed.sync import SyncEngine

runner = CliRunner()


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def config_path(tmp_path, cache_dir, monkeypatch):
    """Config with a file cache under tmp_path, selected via the environment."""
    path = tmp_path / "config.yaml"
    save_config(
        ConfigModel(
            feed=FeedConfig(min_cached_items=0),
            store=StoreConfig(backend="file", path=str(cache_dir)),
        ),
        path,
    )
    monkeypatch.setenv("DAILYFEED_CONFIG", str(path))
    return path


@pytest.fixture
def seeded_cache(config_path, cache_dir):
    """Three items synced just now."""
    cache = FeedCache(FileStore(cache_dir))
    cache.save(make_items(3), pendulum.now())
    return cache


def test_init_writes_config(tmp_path):
    config_dir = tmp_path / "cfg"
    cache_dir = tmp_path / "feed-cache"

    result = runner.invoke(
        app,
        ["init", "--config-dir", str(config_dir), "--cache-dir", str(cache_dir), "--page-size", "50"],
    )

    assert result.exit_code == 0, result.output
    assert "dailyfeed initialized" in result.output
    config = load_config(config_dir / "config.yaml")
    assert config.feed.page_size == 50
    assert config.store.backend == "file"
    assert cache_dir.is_dir()


def test_init_rejects_unknown_backend(tmp_path):
    result = runner.invoke(app, ["init", "--config-dir", str(tmp_path), "--backend", "sqlite"])

    assert result.exit_code == 1
    assert not (tmp_path / "config.yaml").exists()


def test_sync_uses_todays_cache(seeded_cache):
    result = runner.invoke(app, ["sync"])

    assert result.exit_code == 0, result.output
    assert "Loaded 3 items from today's cache" in result.output


def test_sync_failure_exits_nonzero(config_path, monkeypatch):
    def failing_run(self, force=False):
        raise TransportError("Request for page 1 timed out")

    monkeypatch.setattr(SyncEngine, "run", failing_run)

    result = runner.invoke(app, ["sync", "--force"])

    assert result.exit_code == 1
    assert "Sync failed" in result.output
    assert "timed out" in result.output


def test_invalid_config_exits_nonzero(config_path):
    config_path.write_text("feed:\n  page_size: 0\n")

    result = runner.invoke(app, ["sync"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_list_filters_cached_items(seeded_cache):
    result = runner.invoke(app, ["list", "--query", "entry 2"])

    assert result.exit_code == 0, result.output
    assert "Entry 2" in result.output
    assert "Entry 3" not in result.output
    assert "Showing 1 of 1 items (3 synced)" in result.output


def test_list_reports_no_matches(seeded_cache):
    result = runner.invoke(app, ["list", "-q", "kubernetes"])

    assert result.exit_code == 0, result.output
    assert "No items match." in result.output


def test_list_limit(seeded_cache):
    result = runner.invoke(app, ["list", "--order", "ASCENDING", "-n", "2"])

    assert result.exit_code == 0, result.output
    assert "Showing 2 of 3 items" in result.output


def test_reset_removes_cache_files(seeded_cache, cache_dir):
    assert (cache_dir / "cachedItems.dat").exists()

    result = runner.invoke(app, ["reset"])

    assert result.exit_code == 0, result.output
    assert "Cache reset" in result.output
    assert not (cache_dir / "cachedItems.dat").exists()
    assert not (cache_dir / "lastSyncedAt.dat").exists()


def test_open_launches_item_url(seeded_cache, monkeypatch):
    launched = []
    monkeypatch.setattr(typer, "launch", lambda url: launched.append(url))

    result = runner.invoke(app, ["open", "2"])

    assert result.exit_code == 0, result.output
    assert launched == ["https://example.com/entries/2"]


def test_open_unknown_item(seeded_cache, monkeypatch):
    monkeypatch.setattr(typer, "launch", lambda url: pytest.fail("should not launch"))

    result = runner.invoke(app, ["open", "99"])

    assert result.exit_code == 1
    assert "not found" in result.output


@pytest.fixture
def blocked_config(tmp_path, monkeypatch):
    """Config whose cache directory sits under a regular file."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    path = tmp_path / "config.yaml"
    save_config(
        ConfigModel(store=StoreConfig(backend="file", path=str(blocker / "cache"))),
        path,
    )
    monkeypatch.setenv("DAILYFEED_CONFIG", str(path))
    return path


def test_sync_with_unusable_cache_dir_reports_warning(blocked_config, monkeypatch):
    async def fetch_page(self, page, page_size):
        return make_page([make_record(1), make_record(2), make_record(3)])

    monkeypatch.setattr(FeedTransport, "fetch_page", fetch_page)

    result = runner.invoke(app, ["sync"])

    assert result.exit_code == 0, result.output
    assert "Synced 3 items from the network" in result.output
    assert "Cache write failed" in result.output


def test_reset_with_unusable_cache_dir_exits_nonzero(blocked_config):
    result = runner.invoke(app, ["reset"])

    assert result.exit_code == 1
    assert "Failed to reset cache" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_init_with_unusable_cache_dir_exits_nonzero(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    result = runner.invoke(
        app,
        ["init", "--config-dir", str(tmp_path / "cfg"), "--cache-dir", str(blocker / "cache")],
    )

    assert result.exit_code == 1
    assert "Failed to create cache directory" in result.output
