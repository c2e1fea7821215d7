"""
Script to seed the catalog database from the remote API
"""

import argparse
import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.logging import setup_logging
from ingestion.runner import SeedRunner
from models.base import SeedMode

logger = logging.getLogger(__name__)

EXIT_CODES = {
    "success": 0,
    "partial": 0,
    "failed": 1,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed the catalog database")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SeedMode],
        default=settings.SEED_MODE.lower(),
        help="standard: forwarding proxy, sequential; premium: tunnel, batched"
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    parser.add_argument("--log-file", default=None, help="Also write log records to this file")
    return parser.parse_args(argv)


async def run_seed(mode: SeedMode) -> int:
    """Run one seeding pass and map its result to an exit code"""
    runner = SeedRunner(settings=settings, mode=mode)
    result = await runner.run()

    if result["errors"]:
        logger.warning(f"{len(result['errors'])} errors recorded during the run")

    return EXIT_CODES.get(result["status"], 1)


if __name__ == "__main__":
    args = parse_args()
    setup_logging(level=args.log_level, log_file=args.log_file)
    sys.exit(asyncio.run(run_seed(SeedMode(args.mode))))
