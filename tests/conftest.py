import os

import pytest

from oxmark import logger
from oxmark.app import BrowserContext
from oxmark.store import BookmarkStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep logs and config lookups inside the test's temp dir."""
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(tmp_path / "oxmark.log"))
    monkeypatch.setattr(logger, "DEBUG_LEVEL", 1)
    monkeypatch.setenv("OXMARK_CONFIG", str(tmp_path / "no-config"))
    monkeypatch.delenv("OXMARK_DB", raising=False)
    monkeypatch.delenv("OXMARK_LOG", raising=False)


@pytest.fixture
def store(tmp_path):
    with BookmarkStore(str(tmp_path / "db" / "oxmark.db")) as s:
        yield s


@pytest.fixture
def make_dir(tmp_path):
    """Create a directory under tmp_path/places and return its canonical path."""
    def _make(name):
        path = tmp_path / "places" / name
        path.mkdir(parents=True, exist_ok=True)
        return os.path.realpath(str(path))
    return _make


@pytest.fixture
def browser(store, make_dir):
    """A refreshed BrowserContext over alpha, beta and gamma."""
    for name in ("alpha", "beta", "gamma"):
        store.create(make_dir(name), name, f"the {name} dir")
    context = BrowserContext(store)
    context.refresh()
    return context
