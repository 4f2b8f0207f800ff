from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from authsvc.shared.config import load_config
from authsvc.tests.fakes import DeterministicHasher, FakeClock


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))
    for name in (
        "DATABASE_URL",
        "APP_ENV",
        "STORAGE_BACKEND",
        "ENABLE_RATE_LIMIT",
        "RL_LIMIT",
        "RL_WINDOW",
        "RL_REGISTER_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'authsvc.db'}"
