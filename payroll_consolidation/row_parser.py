"""
Parsing of payroll report CSV text into typed rows.

Tolerates ragged rows, blank lines, quoted delimiters, missing columns and
non-numeric counters, which all occur in real exports.
"""

import io
import logging
from typing import Iterable, Iterator, List, Optional

import numpy as np
import pandas as pd

from payroll_consolidation.models import (
    CLASS_DATE,
    CLASS_NAME,
    DECIMAL_COLUMNS,
    INTEGER_COLUMNS,
    LOCATION,
    SOURCE_COLUMNS,
    TEACHER_FIRST_NAME,
    TEACHER_LAST_NAME,
    CHECKED_IN,
    LATE_CANCELLATIONS,
    NON_PAID_CUSTOMERS,
    TIME_HOURS,
    TOTAL_REVENUE,
    RawRecord,
)

logger = logging.getLogger(__name__)

# Source header -> internal column name
COLUMN_NAMES = {
    CLASS_NAME: "class_name",
    CLASS_DATE: "class_date",
    LOCATION: "location",
    TEACHER_FIRST_NAME: "teacher_first_name",
    TEACHER_LAST_NAME: "teacher_last_name",
    CHECKED_IN: "checked_in",
    LATE_CANCELLATIONS: "late_cancellations",
    TOTAL_REVENUE: "total_revenue",
    TIME_HOURS: "time_hours",
    NON_PAID_CUSTOMERS: "non_paid_customers",
}
RECORD_COLUMNS = list(COLUMN_NAMES.values())


# Largest counter kept exactly by a float and safely castable to int64
MAX_COUNTER = 2 ** 53


def _keep_known_fields(fields: List[str]) -> List[str]:
    # Extra fields are dropped by the reader; the known columns stay in place
    logger.warning(f"Ignoring extra fields on CSV line with {len(fields)} fields: {fields[:3]}...")
    return fields


def read_report_text(text: str) -> pd.DataFrame:
    """
    Read CSV text into a DataFrame of strings keyed by source header.
    
    Rows shorter than the header get empty strings for the missing fields;
    fields beyond the header (such as a trailing comma) are ignored and the
    known columns keep their positions. Every source column is present in
    the result even if the export omitted it.
    
    Args:
        text: Full CSV text including the header row
        
    Returns:
        DataFrame with one string column per source header
    """
    if not text or not text.strip():
        return pd.DataFrame(columns=SOURCE_COLUMNS, dtype=str)
    
    df = pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        engine="python",
        on_bad_lines=_keep_known_fields,
    )
    df.columns = [str(col).strip() for col in df.columns]
    df = df.fillna("")
    
    missing = [col for col in SOURCE_COLUMNS if col not in df.columns]
    if missing:
        logger.warning(f"Report is missing columns: {', '.join(missing)}")
        for col in missing:
            df[col] = ""
    return df


def _to_numbers(values: pd.Series, limit: Optional[float] = None) -> pd.Series:
    cleaned = values.astype(str).str.strip().str.replace(",", "", regex=False)
    numbers = pd.to_numeric(cleaned, errors="coerce").astype(float)
    
    out_of_range = np.isinf(numbers)
    if limit is not None:
        out_of_range |= numbers.abs() > limit
    if out_of_range.any():
        logger.warning(f"Treating {int(out_of_range.sum())} out-of-range values as 0: "
                       f"{list(values[out_of_range][:3])}")
    
    return numbers.mask(out_of_range, 0.0).fillna(0.0)


def to_integer(values: pd.Series) -> pd.Series:
    """
    Convert text counters to non-negative integers.
    
    Decimal text keeps its integer part ("3.7" -> 3); blank, non-numeric,
    infinite or absurdly large text becomes 0.
    """
    numbers = _to_numbers(values, limit=MAX_COUNTER)
    return np.trunc(numbers).clip(lower=0).astype("int64")


def to_decimal(values: pd.Series) -> pd.Series:
    """Convert text amounts to non-negative floats; blank, non-numeric or infinite text becomes 0.0."""
    return _to_numbers(values).clip(lower=0.0)


def parse_report(text: str) -> pd.DataFrame:
    """
    Parse one payroll report into typed rows.
    
    Rows without a class name (footer and trailer rows) are dropped.
    
    Args:
        text: Full CSV text including the header row
        
    Returns:
        DataFrame with RECORD_COLUMNS, numeric counters converted
    """
    df = read_report_text(text)[SOURCE_COLUMNS].rename(columns=COLUMN_NAMES)
    
    for col in ["class_name", "class_date", "location", "teacher_first_name", "teacher_last_name"]:
        df[col] = df[col].astype(str).str.strip()
    
    total_rows = len(df)
    df = df[df["class_name"] != ""].reset_index(drop=True)
    if total_rows != len(df):
        logger.debug(f"Dropped {total_rows - len(df)} rows without a class name")
    
    for header in INTEGER_COLUMNS:
        col = COLUMN_NAMES[header]
        df[col] = to_integer(df[col])
    for header in DECIMAL_COLUMNS:
        col = COLUMN_NAMES[header]
        df[col] = to_decimal(df[col])
    
    logger.info(f"Parsed {len(df)} class rows from report")
    return df


def parse_reports(texts: Iterable[str]) -> pd.DataFrame:
    """
    Parse several reports and concatenate them in the given order.
    
    Args:
        texts: CSV texts, typically from read_payroll_reports
        
    Returns:
        DataFrame with RECORD_COLUMNS covering every report
    """
    frames = [parse_report(text) for text in texts]
    if not frames:
        return pd.DataFrame({col: pd.Series(dtype=object) for col in RECORD_COLUMNS})
    return pd.concat(frames, ignore_index=True)


def iter_raw_records(text: str) -> Iterator[RawRecord]:
    """
    Yield RawRecord objects for each class row of a report.

    Row-at-a-time access for callers that work with typed records instead
    of DataFrames; the batch pipeline uses parse_reports directly.
    """
    df = parse_report(text)
    for row in df.itertuples(index=False):
        yield RawRecord(**row._asdict())
