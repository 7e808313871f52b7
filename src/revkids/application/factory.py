"""
Card Store Factory
Centralizes the logic for selecting the card repository and building services.
"""

from revkids.application.config import AppConfig
from revkids.application.scheduling.service import ReviewService
from revkids.domain.scheduling.ports import CardRepository
from revkids.infrastructure.adapters.json_repository import JsonCardRepository


def get_card_repository(config: AppConfig) -> CardRepository:
    """
    Returns the CardRepository implementation for the configured store.
    """
    return JsonCardRepository(config.store_path)


def get_review_service(config: AppConfig) -> ReviewService:
    return ReviewService(get_card_repository(config), policy=config.policy())
