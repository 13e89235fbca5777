"""Main entry point: recompute and sync profile progression once"""
import argparse
import asyncio
import logging
from typing import Optional

from src.config import validate_config, LOG_LEVEL, PROFILE_ID
from src.db.connection import db
from src.db.queries import RecordStore
from src.services import init_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


async def main(profile_id: Optional[str] = None) -> int:
    """Main application entry point"""
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config()

        # Initialize database
        logger.info("Initializing database connection pool...")
        await db.init_pool()

        container = init_container(RecordStore(db), profile_id=profile_id or PROFILE_ID or None)
        result = await container.gamification_service.sync_profile()

        breakdown = ", ".join(f"{k}={v}" for k, v in result.breakdown.model_dump().items())
        logger.info(f"XP breakdown: {breakdown}")
        logger.info(
            f"Level {result.state.level} ({result.state.current_xp}/{result.state.next_level_xp} XP), "
            f"rank {result.state.rank.value}, total {result.state.total_xp} XP"
        )

        if result.error:
            logger.warning(
                f"Progression computed but not saved: {result.error.message} "
                f"({result.error.user_message})"
            )
            return 1
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 2
    finally:
        logger.info("Closing database connection...")
        await db.close_pool()


def run() -> None:
    parser = argparse.ArgumentParser(description="Recompute profile XP, level and rank")
    parser.add_argument("--profile-id", help="Profile to sync (defaults to PROFILE_ID or the only profile)")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(main(args.profile_id)))


if __name__ == "__main__":
    run()
