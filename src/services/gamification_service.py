"""
GamificationService - Progression Business Logic

Recomputes a profile's XP, level and rank from the content collections and
writes the result back to the profile row. CRUD code calls
notify_record_changed() after every create/update/soft-delete; the sync then
runs as a detached task whose failures are logged, never raised.
"""

import asyncio
import logging
from typing import Any, Optional, Set, Tuple

from src.config import PROFILE_ID, PROFILE_TABLE
from src.exceptions import (
    ProfileNotFoundError,
    ProfileWriteError,
    ProgressionError,
    wrap_external_exception,
)
from src.gamification import XP_SOURCES, calculate_level_from_xp, calculate_total_xp
from src.models.progression import ProfileSyncResult, ProgressionState, XpBreakdown

logger = logging.getLogger(__name__)


class GamificationService:
    """
    Service for profile progression.

    Responsibilities:
    - Aggregating XP over all source collections
    - Resolving level and rank
    - Persisting progression to the profile row
    - Scheduling best-effort syncs after content changes
    """

    def __init__(
        self,
        store,
        profile_table: str = PROFILE_TABLE,
        default_profile_id: Optional[str] = PROFILE_ID or None,
    ):
        """
        Initialize GamificationService.

        Args:
            store: Record store (RecordStore or InMemoryStore)
            profile_table: Collection holding the profile row
            default_profile_id: Profile to sync when none is passed
        """
        self.store = store
        self.profile_table = profile_table
        self.default_profile_id = default_profile_id
        self._pending: Set[asyncio.Task] = set()
        logger.debug("GamificationService initialized")

    async def get_progression(self) -> Tuple[ProgressionState, XpBreakdown]:
        """Compute current progression without persisting it"""
        total_xp, breakdown = await calculate_total_xp(self.store)
        return calculate_level_from_xp(total_xp), breakdown

    async def _resolve_profile_id(self, profile_id: Optional[str]) -> Any:
        """
        Find the id of the profile row to write to.

        Explicit id first, then the configured default, then the single row
        of the profile table.
        """
        target = profile_id or self.default_profile_id
        if target:
            row = await self.store.read_record(self.profile_table, target)
        else:
            row = await self.store.read_singleton(self.profile_table)

        if not row or row.get("id") is None:
            raise ProfileNotFoundError(
                message=f"No profile record found in {self.profile_table}",
                profile_id=target,
                operation="sync_profile",
            )
        return row["id"]

    async def sync_profile(self, profile_id: Optional[str] = None) -> ProfileSyncResult:
        """
        Recompute progression and persist it to the profile row.

        Args:
            profile_id: Target profile; see _resolve_profile_id for fallbacks

        Returns:
            ProfileSyncResult. `state` and `breakdown` are always filled in;
            `error` holds ProfileNotFoundError, ProgressionError (profile read
            failed) or ProfileWriteError when the write was skipped or failed.
        """
        state, breakdown = await self.get_progression()
        result = ProfileSyncResult(state=state, breakdown=breakdown)

        try:
            target_id = await self._resolve_profile_id(profile_id)
        except ProfileNotFoundError as e:
            result.error = e
            return result
        except Exception as e:
            error = wrap_external_exception(e, operation="read_profile", profile_id=profile_id)
            result.error = ProgressionError(
                message=f"Could not read profile: {error.message}",
                profile_id=profile_id,
                operation="sync_profile",
                cause=error,
            )
            return result

        result.profile_id = str(target_id)
        fields = state.to_profile_fields()

        try:
            updated = await self.store.update_record(self.profile_table, target_id, fields)
        except Exception as e:
            error = wrap_external_exception(
                e,
                operation="update_profile",
                profile_id=result.profile_id,
                context=fields,
            )
            result.error = ProfileWriteError(
                message=f"Failed to persist progression: {error.message}",
                profile_id=result.profile_id,
                operation="sync_profile",
                context=fields,
                cause=error,
            )
            return result

        if updated is None:
            result.error = ProfileNotFoundError(
                message=f"Profile {target_id} disappeared before it could be updated",
                profile_id=result.profile_id,
                operation="sync_profile",
            )
            return result

        result.persisted = True
        logger.info(
            f"Synced profile {result.profile_id}: total_xp={state.total_xp}, "
            f"level={state.level}, xp={state.current_xp}/{state.next_level_xp}, rank={state.rank.value}"
        )
        return result

    # ------------------------------------------------------------------
    # Background triggers
    # ------------------------------------------------------------------

    async def _sync_in_background(self, profile_id: Optional[str]) -> None:
        try:
            result = await self.sync_profile(profile_id)
            if result.error:
                logger.warning(f"Background profile sync incomplete: {result.error}")
        except Exception as e:
            logger.error(f"Background profile sync failed: {e}", exc_info=True)

    def schedule_profile_sync(self, profile_id: Optional[str] = None) -> Optional[asyncio.Task]:
        """
        Start a detached sync.

        Needs a running event loop; without one the sync is skipped with a
        warning and None is returned. The task is kept referenced until it
        finishes. Errors are logged and never reach the caller.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, profile sync not scheduled")
            return None

        task = loop.create_task(self._sync_in_background(profile_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def notify_record_changed(
        self,
        collection: str,
        profile_id: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        """
        Hook for CRUD code after a create/update/soft-delete.

        Schedules a sync only when `collection` contributes XP.
        """
        if collection not in XP_SOURCES:
            logger.debug(f"Change in {collection} does not affect XP, skipping sync")
            return None
        logger.debug(f"Change in {collection}, scheduling profile sync")
        return self.schedule_profile_sync(profile_id)

    async def wait_for_pending_syncs(self) -> None:
        """Wait for all detached syncs to finish"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
