"""
Create (or recreate) the catalog schema without going through alembic
"""

import argparse
import asyncio
import logging
import os
import sys

sys.path.append(os.getcwd())

from core.database import check_connection, create_engine
from core.logging import setup_logging
# Importing the package registers every catalog table on the metadata
from models import Base

logger = logging.getLogger(__name__)


async def init_database(drop: bool = False) -> None:
    engine = create_engine()
    try:
        await check_connection(engine)

        async with engine.begin() as conn:
            if drop:
                logger.warning(f"Dropping {len(Base.metadata.tables)} tables")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

        logger.info(f"Schema ready: {len(Base.metadata.tables)} tables")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the catalog tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(init_database(drop=args.drop))
