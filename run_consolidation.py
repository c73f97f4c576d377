#!/usr/bin/env python3
"""
Main orchestration script for the consolidation pipeline.

This script:
1. Extracts payroll report CSVs from the uploaded archive
2. Parses and normalizes class rows
3. Aggregates rows to recurring class slots with derived metrics
4. Drops slots whose period lies in the future
5. Logs summary metrics
6. Writes the flat table to CSV or JSON
"""

import argparse
import logging
import sys
from typing import Optional
from payroll_consolidation.config import Config
from payroll_consolidation.pipeline import consolidate_archive
from payroll_consolidation.filtering import exclude_future_periods
from payroll_consolidation.metrics import summarize
from payroll_consolidation.export import write_records

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for a command-line run."""
    logging.basicConfig(
        level=getattr(logging, level or Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Consolidate a zipped payroll report export into class slot statistics."
    )
    parser.add_argument("archive", help="Path to the zip archive")
    parser.add_argument("--output", default=Config.OUTPUT_PATH, help="Output file path")
    parser.add_argument(
        "--format",
        default=Config.EXPORT_FORMAT,
        choices=Config.SUPPORTED_EXPORT_FORMATS,
        help="Output file format"
    )
    parser.add_argument(
        "--include-future",
        action="store_true",
        default=not Config.EXCLUDE_FUTURE_PERIODS,
        help="Keep slots whose period lies after today"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    
    try:
        logger.info("=" * 60)
        logger.info("Starting Consolidation Pipeline")
        logger.info("=" * 60)
        
        # Step 1-3: Extract, parse, normalize, aggregate
        logger.info(f"\n[Step 1] Consolidating {args.archive}...")
        last_reported = []
        
        def report_progress(percent: int) -> None:
            # Log each percentage once
            if not last_reported or percent != last_reported[-1]:
                last_reported.append(percent)
                logger.info(f"  Archive progress: {percent}%")
        
        records = consolidate_archive(args.archive, on_progress=report_progress)
        logger.info(f"  Class slots: {len(records)}")
        
        # Step 4: Future periods
        if not args.include_future:
            logger.info("\n[Step 2] Excluding future periods...")
            records = exclude_future_periods(records)
            logger.info(f"  Class slots kept: {len(records)}")
        
        # Step 5: Summary
        logger.info("\n[Step 3] Summary metrics:")
        for name, value in summarize(records).items():
            logger.info(f"  {name}: {value}")
        
        # Step 6: Export
        logger.info(f"\n[Step 4] Writing {args.format.upper()} output...")
        write_records(records, args.output, args.format)
        
        logger.info("\n" + "=" * 60)
        logger.info("Consolidation Pipeline Completed Successfully!")
        logger.info("=" * 60)
        return 0
        
    except Exception as e:
        logger.error(f"\nPipeline failed with error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
