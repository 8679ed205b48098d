#!/usr/bin/env python3
"""
Command-line interface for the active pools snapshot pipeline.

Usage:
    python -m active_pools.processors.pipeline.cli
    python -m active_pools.processors.pipeline.cli --start-block 21690000 --end-block 21700000
    python -m active_pools.processors.pipeline.cli --pools-file active_pools.txt
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from active_pools.config.base import ConfigError
from active_pools.config.manager import get_config
from active_pools.processors.pipeline.active_pools_pipeline import ActivePoolsPipeline


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def format_pipeline_result(result: Dict[str, Any]) -> None:
    """Format and display pipeline results."""
    logger.info("✅ Pipeline completed successfully")
    logger.info(f"📊 Processed {result['processed_count']} pools")
    logger.info(f"💾 Written to {result['output_path']}")

    metadata = result.get("metadata") or {}
    strange = metadata.get("strange_reserves", 0)
    skipped = metadata.get("skipped_pools") or []

    logger.info(f"🔢 Block range: {metadata.get('start_block')} → {metadata.get('end_block')}")
    if strange:
        logger.warning(f"⚠️  {strange} pools with strange reserves")
    if skipped:
        logger.warning(f"⚠️  Skipped {len(skipped)} pools: {', '.join(skipped)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Snapshot of DEX pools with swap activity in a block range",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # From ACTIVE_POOLS_START_BLOCK to the chain head
  python -m active_pools.processors.pipeline.cli

  # Custom block range
  python -m active_pools.processors.pipeline.cli --start-block 21690000 --end-block 21700000

  # Reuse an active pool list from an earlier run
  python -m active_pools.processors.pipeline.cli --pools-file output/active_pools.txt
        """,
    )

    # Block range
    parser.add_argument("--start-block", type=int, help="Override start block")
    parser.add_argument(
        "--end-block", type=int, help="Override end block (defaults to chain height)"
    )

    # Input / output
    parser.add_argument(
        "--pools-file", help="Read active pools from this file instead of scanning logs"
    )
    parser.add_argument("--save-pools-file", help="Write the scanned active pools to this file")
    parser.add_argument("--output", help="Output JSON file")

    # Tuning
    parser.add_argument("--log-bulk-size", type=int, help="Blocks per log query")
    parser.add_argument("--max-concurrency", type=int, help="Pools loaded in parallel")
    parser.add_argument(
        "--skip-failed-pools",
        action="store_true",
        default=None,
        help="Skip pools whose data cannot be loaded instead of aborting",
    )
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate arguments
    if args.start_block is not None and args.start_block < 0:
        parser.error("--start-block must not be negative")
    if args.start_block is not None and args.end_block is not None and args.start_block > args.end_block:
        logger.warning("Start block is after end block, no pool can be active")
    if args.log_bulk_size is not None and args.log_bulk_size < 1:
        parser.error("--log-bulk-size must be positive")
    if args.max_concurrency is not None and args.max_concurrency < 1:
        parser.error("--max-concurrency must be positive")
    if args.pools_file and args.save_pools_file:
        parser.error("--save-pools-file cannot be used with --pools-file")

    logger.info("🚀 Starting active pools pipeline")

    try:
        pipeline = ActivePoolsPipeline(
            config=get_config(),
            window_size=args.log_bulk_size,
            max_concurrency=args.max_concurrency,
            skip_failed_pools=args.skip_failed_pools,
        )
        result = await pipeline.run(
            start_block=args.start_block,
            end_block=args.end_block,
            pools_file=args.pools_file,
            output_path=args.output,
            save_pools_file=args.save_pools_file,
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"💥 Unexpected error: {e}")
        return 1

    format_pipeline_result(result)
    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("⏹️  Pipeline interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
