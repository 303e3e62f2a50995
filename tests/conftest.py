from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

# Make the greetings_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from greetings_api.core.config import Settings  # noqa: E402
from greetings_api.domain.greetings import Greeting  # noqa: E402


class InMemoryStore:
    """Collection store fake: keeps the collection in a list and counts saves."""

    def __init__(self, records=None) -> None:
        self.records = list(records or [])
        self.lock = threading.RLock()
        self.saves = 0
        self.fail_saves = False
        self.initialized = False

    def initialize(self) -> None:
        self.initialized = True

    def load(self):
        return list(self.records)

    def save(self, records) -> bool:
        if self.fail_saves:
            return False
        self.records = list(records)
        self.saves += 1
        return True


@pytest.fixture()
def memory_store():
    return InMemoryStore(
        [
            Greeting(id=1, language="French", greeting="Bonjour", formal=True),
            Greeting(id=2, language="Spanish", greeting="Hola", formal=False),
            Greeting(id=4, language="German", greeting="Guten Tag", formal=True),
        ]
    )


@pytest.fixture()
def make_settings(tmp_path):
    def _make(**overrides) -> Settings:
        values = dict(
            app_env="test",
            host="127.0.0.1",
            port=3000,
            data_file=str(tmp_path / "data" / "data.json"),
            database_url="",
            log_level="INFO",
            log_file="",
            cors_origins=("*",),
            api_version="1.0.0",
        )
        values.update(overrides)
        return Settings(**values)

    return _make
