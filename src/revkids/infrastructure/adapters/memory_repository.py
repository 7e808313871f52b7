"""
In-memory Card Repository — process-local implementation of CardRepository.
"""

import asyncio
from collections import defaultdict

from revkids.domain.scheduling.models import SpacedRepetitionCard
from revkids.domain.scheduling.ports import CardRepository


class InMemoryCardRepository(CardRepository):
    """
    Stores cards in a dict keyed by (learner_id, item_id).

    One asyncio.Lock per pair serializes concurrent reviews of the same item.
    """

    def __init__(self, cards: list[SpacedRepetitionCard] | None = None):
        self._cards: dict[tuple[str, str], SpacedRepetitionCard] = {}
        self._locks: defaultdict[tuple[str, str], asyncio.Lock] = defaultdict(asyncio.Lock)
        for card in cards or []:
            self._cards[(card.learner_id, card.item_id)] = card

    async def get_card(self, learner_id: str, item_id: str) -> SpacedRepetitionCard | None:
        return self._cards.get((learner_id, item_id))

    async def list_cards(self, learner_id: str) -> list[SpacedRepetitionCard]:
        return [card for (lid, _), card in self._cards.items() if lid == learner_id]

    async def save_card(self, card: SpacedRepetitionCard) -> None:
        self._cards[(card.learner_id, card.item_id)] = card

    def lock(self, learner_id: str, item_id: str) -> asyncio.Lock:
        return self._locks[(learner_id, item_id)]
