"""
Flat tabular form of aggregated slots.

One row per slot and one column per output field, using the column
headers of the dashboard export.
"""

import logging
from typing import List

import pandas as pd

from payroll_consolidation.metrics import format_fixed
from payroll_consolidation.models import AggregateRecord, EXPORT_COLUMNS

logger = logging.getLogger(__name__)


def records_to_frame(records: List[AggregateRecord]) -> pd.DataFrame:
    """
    Flatten records into a DataFrame with export headers.
    
    Total time is rendered with two decimals; all other fields are kept
    as they are on the record.
    
    Args:
        records: Aggregated class slots
        
    Returns:
        DataFrame with the EXPORT_COLUMNS headers in order
    """
    rows = [record.to_dict() for record in records]
    df = pd.DataFrame(rows, columns=list(EXPORT_COLUMNS.keys()))
    df["total_time"] = df["total_time"].map(lambda v: format_fixed(v, places=2))
    return df.rename(columns=EXPORT_COLUMNS)


def write_records(records: List[AggregateRecord], path: str, fmt: str = "csv") -> None:
    """
    Write records to a CSV or JSON file.
    
    Args:
        records: Aggregated class slots
        path: Destination file path
        fmt: "csv" or "json" (JSON is a list of row objects)
        
    Raises:
        ValueError: If fmt is not supported
    """
    df = records_to_frame(records)
    
    if fmt == "csv":
        df.to_csv(path, index=False)
    elif fmt == "json":
        df.to_json(path, orient="records", indent=2)
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
    
    logger.info(f"Wrote {len(df)} class slots to {path} ({fmt})")
