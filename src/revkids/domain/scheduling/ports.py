"""
Ports (interfaces) for card persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager, nullcontext

from .models import SpacedRepetitionCard


class CardRepository(ABC):
    """
    Port for loading and storing scheduling cards keyed by (learner, item).

    Implementations must serialize concurrent updates for the same pair so
    that two near-simultaneous reviews cannot silently drop one write.

    Implementations:
        - InMemoryCardRepository: Process-local dict, used by tests and services.
        - JsonCardRepository: Single JSON snapshot file, used by the CLI.
    """

    @abstractmethod
    async def get_card(self, learner_id: str, item_id: str) -> SpacedRepetitionCard | None:
        """
        Fetch the stored card for a (learner, item) pair.

        Returns:
            The card, or None if the learner has never answered the item.
        """
        pass

    @abstractmethod
    async def list_cards(self, learner_id: str) -> list[SpacedRepetitionCard]:
        """
        Fetch every card belonging to a learner, in insertion order.
        """
        pass

    @abstractmethod
    async def save_card(self, card: SpacedRepetitionCard) -> None:
        """
        Insert or replace the card for its (learner, item) pair.
        """
        pass

    def lock(self, learner_id: str, item_id: str) -> AbstractAsyncContextManager:
        """
        Guard held around read-schedule-write for one (learner, item) pair.

        The default does nothing; stores shared between tasks override it.
        """
        return nullcontext()
