"""
JSON Card Repository — Infrastructure adapter for a single snapshot file.

Implements CardRepository by reading and rewriting one JSON document:

    {"cards": [{"learner_id": "...", "item_id": "...", ...}, ...]}
"""

import asyncio
import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from revkids.domain import constants as c
from revkids.domain.errors import CardStoreError
from revkids.domain.scheduling.models import SpacedRepetitionCard
from revkids.domain.scheduling.ports import CardRepository

logger = logging.getLogger(__name__)


class CardRecord(BaseModel):
    """Persisted layout of a card. Validates data read back from disk."""

    learner_id: str
    item_id: str
    next_review: datetime
    easiness_factor: float = Field(
        default=c.INITIAL_EASINESS_FACTOR,
        ge=c.MIN_EASINESS_FACTOR,
        le=c.MAX_EASINESS_FACTOR,
    )
    repetition_number: int = Field(default=0, ge=0)
    interval: int = Field(default=c.INITIAL_INTERVAL, ge=c.MIN_INTERVAL)
    last_review: datetime | None = None
    quality: float = Field(default=0.0, ge=0, le=5)
    total_reviews: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    average_response_time: float = Field(default=0.0, ge=0)

    @field_validator("next_review", "last_review")
    @classmethod
    def to_naive_local(cls, v: datetime | None) -> datetime | None:
        # The engine works in naive local time
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @classmethod
    def from_card(cls, card: SpacedRepetitionCard) -> "CardRecord":
        return cls(**asdict(card))

    def to_card(self) -> SpacedRepetitionCard:
        return SpacedRepetitionCard(**self.model_dump())


class CardSnapshot(BaseModel):
    cards: list[CardRecord] = Field(default_factory=list)


class JsonCardRepository(CardRepository):
    """
    Card store backed by a JSON file.

    A single lock guards the whole file since every save rewrites it.
    A missing file is an empty store.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def get_card(self, learner_id: str, item_id: str) -> SpacedRepetitionCard | None:
        for record in self._load().cards:
            if record.learner_id == learner_id and record.item_id == item_id:
                return record.to_card()
        return None

    async def list_cards(self, learner_id: str) -> list[SpacedRepetitionCard]:
        return [r.to_card() for r in self._load().cards if r.learner_id == learner_id]

    async def save_card(self, card: SpacedRepetitionCard) -> None:
        try:
            record = CardRecord.from_card(card)
        except ValidationError as e:
            raise CardStoreError(
                f"Refusing to store invalid card {card.learner_id}/{card.item_id}: {e}"
            ) from e

        snapshot = self._load()

        for i, existing in enumerate(snapshot.cards):
            if existing.learner_id == card.learner_id and existing.item_id == card.item_id:
                snapshot.cards[i] = record
                break
        else:
            snapshot.cards.append(record)

        self._write(snapshot)

    def lock(self, learner_id: str, item_id: str) -> asyncio.Lock:
        return self._lock

    def _load(self) -> CardSnapshot:
        if not self.path.exists():
            return CardSnapshot()

        try:
            return CardSnapshot.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise CardStoreError(f"Could not read card store {self.path}: {e}") from e

    def _write(self, snapshot: CardSnapshot) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(
                json.dumps(snapshot.model_dump(mode="json"), indent=2), encoding="utf-8"
            )
            tmp.replace(self.path)
        except OSError as e:
            raise CardStoreError(f"Could not write card store {self.path}: {e}") from e

        logger.debug(f"Wrote {len(snapshot.cards)} cards to {self.path}")
