"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    The record store (PostgreSQL or in-memory) is injected.
    """

    # Infrastructure dependencies (injected)
    store: object  # RecordStore or InMemoryStore instance
    profile_id: Optional[str] = None

    # Services (lazy-loaded via properties)
    _gamification_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def gamification_service(self):
        """Get GamificationService instance (lazy-loaded)"""
        if self._gamification_service is None:
            from src.services.gamification_service import GamificationService
            kwargs = {"default_profile_id": self.profile_id} if self.profile_id else {}
            self._gamification_service = GamificationService(self.store, **kwargs)
            logger.debug("GamificationService instantiated")
        return self._gamification_service


# Global container instance
_container: Optional[ServiceContainer] = None


def init_container(store, profile_id: Optional[str] = None) -> ServiceContainer:
    """Create the global container"""
    global _container
    _container = ServiceContainer(store=store, profile_id=profile_id)
    logger.info("Service container initialized")
    return _container


def get_container() -> ServiceContainer:
    """Get the global container"""
    if _container is None:
        raise RuntimeError("Service container not initialized. Call init_container() first.")
    return _container
