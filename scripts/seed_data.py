#!/usr/bin/env python3
"""Seed the database with deterministic policies and policy terms.

Replaces the whole dataset in one transaction. Only runs when API_ENV is
``development`` or ``local``.

Usage: seed_data.py [random_seed]
"""

import asyncio
import sys

from beartype import beartype
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from policy_admin.core.config import get_settings
from policy_admin.core.database import Database, DatabaseConfig
from policy_admin.core.logging_utils import configure_logging
from policy_admin.services.seed_service import (
    RANDOM_SEED,
    PolicySeedGenerator,
    SeedingNotAllowedError,
    seed_if_allowed,
)


@beartype
def parse_seed(argv: list[str]) -> int:
    """Read the optional random seed argument."""
    if len(argv) < 2:
        return RANDOM_SEED
    try:
        return int(argv[1])
    except ValueError:
        print(f"ERROR: Invalid random seed: {argv[1]}")
        print(f"Usage: {argv[0]} [random_seed]")
        sys.exit(1)


@beartype
async def main() -> None:
    """Execute main seeding function."""
    # Load environment variables
    load_dotenv()

    settings = get_settings()
    configure_logging(level=settings.log_level)
    seed = parse_seed(sys.argv)

    database = Database(DatabaseConfig.from_settings(settings))
    url = settings.database_url
    print("Connecting to database...")
    print(f"Database URL: {url.split('@')[1] if '@' in url else url}")  # Hide credentials

    try:
        await database.connect()
        try:
            if settings.is_sqlite:
                await database.create_all()
            dataset = await seed_if_allowed(
                database, settings, PolicySeedGenerator(seed=seed)
            )
        finally:
            await database.disconnect()
    except SeedingNotAllowedError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    except SQLAlchemyError as e:
        print(f"\nERROR during database seeding: {e}")
        sys.exit(1)

    print("\nSeeding completed successfully!")
    print("Summary:")
    print(f"  - Policies: {len(dataset.policies)}")
    print(f"  - Policy terms: {len(dataset.terms)}")


if __name__ == "__main__":
    asyncio.run(main())
