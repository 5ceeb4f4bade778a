"""Debug entry point: print the current streaks for an identity or household"""
import argparse
import asyncio
import logging

from streak_bonus.config import validate_config, LOG_LEVEL
from streak_bonus.db.connection import db
from streak_bonus.models.scope import Scope
from streak_bonus.services.container import init_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL)
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show activity streaks from the activity log")
    parser.add_argument("--identity", help="Identity (email) whose scope to inspect; omit for the whole log")
    parser.add_argument("--household", help="Household id to inspect directly")
    return parser.parse_args(argv)


async def main(argv=None) -> None:
    """Reset caches, compute the streak snapshot and log it"""
    args = parse_args(argv)
    try:
        logger.info("Validating configuration...")
        validate_config()

        logger.info("Initializing database connection pool...")
        await db.init_pool()

        container = init_container()
        service = container.streak_service
        service.reset_caches()
        container.household_directory.clear_household_caches()

        if args.household:
            members = await container.household_directory.members_of(args.household)
            if not members:
                logger.warning(f"Household {args.household} has no members, no streaks to show")
                return
            scope = Scope.household(args.household, members)
            snapshot = await service.get_streaks_for_scope(scope)
        else:
            snapshot = await service.get_streaks(args.identity)

        logger.info(f"Building streaks (2 days): {snapshot.building_streaks or 'none'}")
        logger.info(f"Streaks (3+ days): {snapshot.streaks or 'none'}")

        for name, cache in (
            ("reference", container.reference_provider.cache),
            ("settings", container.settings_provider.cache),
            ("household", container.household_directory.cache),
        ):
            logger.info(f"{name} cache: {cache.get_stats()}")

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
    finally:
        logger.info("Closing database connection...")
        await db.close_pool()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
