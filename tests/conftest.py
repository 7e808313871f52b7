from datetime import datetime

import pytest

from revkids.domain.scheduling.models import SpacedRepetitionCard

NOW = datetime(2024, 3, 10, 15, 30)


@pytest.fixture
def now():
    """Fixed reference time: Sunday 2024-03-10 15:30 (local, naive)."""
    return NOW


@pytest.fixture
def make_card():
    """Factory for cards with sensible defaults; override any field by keyword."""

    def _make(item_id="item-1", **overrides):
        fields = {
            "learner_id": "kid-1",
            "item_id": item_id,
            "next_review": NOW,
            "easiness_factor": 2.5,
            "repetition_number": 0,
            "interval": 1,
            "last_review": NOW,
            "quality": 4.0,
        }
        fields.update(overrides)
        return SpacedRepetitionCard(**fields)

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in ("REVKIDS_STORE_PATH", "REVKIDS_MAX_CARDS_PER_DAY", "REVKIDS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return home
