# Infrastructure Card Store Adapters Package
from .json_repository import CardRecord, JsonCardRepository
from .memory_repository import InMemoryCardRepository

__all__ = ["CardRecord", "JsonCardRepository", "InMemoryCardRepository"]
