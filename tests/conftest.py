from pathlib import Path

import pytest

from questionnaire_forms.schema_store import SchemaStore

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = REPO_ROOT / "v1"


@pytest.fixture(scope="session")
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture(scope="session")
def store() -> SchemaStore:
    """Load the shipped questionnaires once for the entire test session."""
    s = SchemaStore(DATA_DIR)
    s.load()
    return s


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, *, hours: float = 0, ms: int = 0) -> None:
        self.now += int(hours * 60 * 60 * 1000) + ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
