"""
End-to-end consolidation of a payroll report archive.

archive -> CSV rows -> class normalization + temporal decomposition ->
slot aggregation -> derived metrics.
"""

import logging
from typing import Iterable, List, Optional

import pandas as pd

from payroll_consolidation.aggregation import aggregate_class_slots
from payroll_consolidation.archive_reader import (
    ArchiveSource,
    ProgressCallback,
    read_payroll_reports,
)
from payroll_consolidation.metrics import add_derived_metrics, to_records
from payroll_consolidation.models import AggregateRecord
from payroll_consolidation.normalizer import add_cleaned_class
from payroll_consolidation.row_parser import parse_reports
from payroll_consolidation.temporal import add_temporal_columns

logger = logging.getLogger(__name__)


def consolidate_rows(df: pd.DataFrame) -> pd.DataFrame:
    """
    Run normalization, aggregation and derived metrics over parsed rows.
    
    Args:
        df: DataFrame from parse_reports
        
    Returns:
        Slot aggregate DataFrame with derived metric columns
    """
    df = add_temporal_columns(df)
    df = add_cleaned_class(df)
    slots = aggregate_class_slots(df)
    return add_derived_metrics(slots)


def consolidate_reports(texts: Iterable[str]) -> List[AggregateRecord]:
    """
    Consolidate already-extracted report texts into slot records.
    
    Args:
        texts: CSV texts, in a deterministic order
        
    Returns:
        One AggregateRecord per class slot, in order of first appearance
    """
    rows = parse_reports(texts)
    logger.info(f"Parsed {len(rows)} class rows in total")
    return to_records(consolidate_rows(rows))


def consolidate_archive(
    source: ArchiveSource,
    on_progress: Optional[ProgressCallback] = None
) -> List[AggregateRecord]:
    """
    Consolidate a payroll report archive into slot records.
    
    Archive-level failures propagate before any output is produced;
    row-level problems are logged and the affected rows dropped.
    
    Args:
        source: Archive bytes, a path, or a binary file object
        on_progress: Optional callback receiving percent of entries processed
        
    Returns:
        One AggregateRecord per class slot, in order of first appearance.
        Empty if the archive has no payroll report entries.
        
    Raises:
        ArchiveCorruptError: If the archive cannot be read
        EmptyArchiveError: If no entry matches and Config.REQUIRE_MATCHING_ENTRIES is set
    """
    reports = read_payroll_reports(source, on_progress=on_progress)
    records = consolidate_reports(reports)
    logger.info(f"Consolidated {len(reports)} reports into {len(records)} class slots")
    return records
