"""
Service Layer Package

Business logic between callers (app screens, website, maintenance jobs)
and the record store.

Core Services:
- GamificationService: XP aggregation, level/rank resolution, profile sync
"""

from src.services.container import ServiceContainer, get_container, init_container
from src.services.gamification_service import GamificationService

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "GamificationService",
]
