"""Shared pytest fixtures and test helpers for wimt tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from wimt.config.models import PluginsConfig, StorageConfig
from wimt.config.settings import WimtSettings
from wimt.domain.category import Category, CategoryName
from wimt.domain.instant import Instant
from wimt.infrastructure.clock import FixedClock
from wimt.infrastructure.database.engine import init_database
from wimt.infrastructure.tracker import Tracker


def at(ms: float) -> Instant:
    """Shorthand for building an Instant in tests."""
    return Instant.create(ms)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's WIMT_* environment out of the tests."""
    for var in ("WIMT_CONFIG", "WIMT_STORAGE__BACKEND", "WIMT_STORAGE__PATH", "WIMT_VERBOSE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(0)


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "wimt.db")
    try:
        yield engine
    finally:
        engine.dispose()


def make_settings(root: Path, *, backend: str = "memory") -> WimtSettings:
    return WimtSettings(
        root=root,
        storage=StorageConfig(backend=backend),
        plugins=PluginsConfig(enabled=False),
    )


@pytest.fixture(params=["memory", "sqlite"])
def tracker(request: pytest.FixtureRequest, tmp_path: Path, clock: FixedClock) -> Iterator[Tracker]:
    """Tracker over each storage backend with a fixed clock."""
    t = Tracker(make_settings(tmp_path, backend=request.param), clock=clock)
    try:
        yield t
    finally:
        t.close()


@pytest.fixture
def category(tracker: Tracker, clock: FixedClock) -> Category:
    """A saved category with its creation event already drained."""
    cat = Category(name=CategoryName.create("Work"), created_at=clock.now())
    cat.pull_domain_events()
    tracker.categories.save(cat)
    return cat


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp root holding a wimt.toml so the CLI uses an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    (tmp_path / "wimt.toml").write_text(
        '[storage]\nbackend = "sqlite"\npath = ".wimt/wimt.db"\n\n'
        "[plugins]\nenabled = false\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
