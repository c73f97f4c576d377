"""
Temporal decomposition of class timestamps.

Derives the day of week, time of day and year-month period that identify
a recurring class slot.
"""

import logging
from datetime import date

import pandas as pd

from payroll_consolidation.errors import InvalidTimestampError
from payroll_consolidation.models import TemporalParts

logger = logging.getLogger(__name__)

# Fixed English abbreviations so periods do not depend on the process locale
MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
DAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
]


def parse_class_timestamp(value) -> pd.Timestamp:
    """
    Parse a class date string into a timestamp.
    
    Timezone-aware values keep their own wall-clock time.
    
    Args:
        value: Class date as found in the report (string or datetime-like)
        
    Returns:
        Parsed pandas Timestamp
        
    Raises:
        InvalidTimestampError: If the value is empty or cannot be parsed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidTimestampError(value)
    
    try:
        timestamp = pd.to_datetime(value.strip() if isinstance(value, str) else value)
    except (ValueError, TypeError, OverflowError) as e:
        raise InvalidTimestampError(value) from e
    
    if pd.isna(timestamp):
        raise InvalidTimestampError(value)
    return timestamp


def format_class_time(timestamp: pd.Timestamp) -> str:
    """Render the time of day as a 12-hour display string, e.g. '07:30 AM'."""
    hour = timestamp.hour % 12 or 12
    meridiem = "AM" if timestamp.hour < 12 else "PM"
    return f"{hour:02d}:{timestamp.minute:02d} {meridiem}"


def format_period(timestamp: pd.Timestamp) -> str:
    """Render the year-month period as 'Mon-YY', e.g. 'Mar-24'."""
    return f"{MONTH_ABBREVIATIONS[timestamp.month - 1]}-{timestamp.year % 100:02d}"


def period_start(period: str) -> date:
    """
    Return the first day of the month a period label refers to.
    
    The year is computed as 2000 + the two-digit year, so labels only
    round-trip for dates in 2000-2099.
    
    Args:
        period: Period label in 'Mon-YY' form
        
    Returns:
        First day of that month
        
    Raises:
        ValueError: If the label is not a valid period
    """
    try:
        month_label, year_label = str(period).split("-")
        month = MONTH_ABBREVIATIONS.index(month_label.strip().title()) + 1
        year = 2000 + int(year_label)
    except ValueError as e:
        raise ValueError(f"Invalid period label: {period!r}") from e
    return date(year, month, 1)


def decompose(value) -> TemporalParts:
    """
    Split a class date into its slot projections.
    
    Args:
        value: Class date as found in the report
        
    Returns:
        TemporalParts with day_of_week, class_time, period and the timestamp
        
    Raises:
        InvalidTimestampError: If the value cannot be parsed
    """
    timestamp = parse_class_timestamp(value)
    return TemporalParts(
        day_of_week=DAY_NAMES[timestamp.dayofweek],
        class_time=format_class_time(timestamp),
        period=format_period(timestamp),
        timestamp=timestamp,
    )


def add_temporal_columns(df: pd.DataFrame, date_col: str = "class_date") -> pd.DataFrame:
    """
    Add day_of_week, class_time, period and class_timestamp columns.
    
    Rows whose date cannot be parsed are dropped and logged; they do not
    abort the batch.
    
    Args:
        df: DataFrame with a class date column
        date_col: Name of the class date column
        
    Returns:
        DataFrame with added temporal columns, without unparseable rows
    """
    if date_col not in df.columns:
        raise ValueError(f"DataFrame must have {date_col} column")
    
    parts = []
    keep = []
    for value in df[date_col]:
        try:
            parts.append(decompose(value))
            keep.append(True)
        except InvalidTimestampError as e:
            logger.warning(f"Dropping row: {e}")
            keep.append(False)
    
    df = df.loc[keep].copy()
    df["day_of_week"] = [p.day_of_week for p in parts]
    df["class_time"] = [p.class_time for p in parts]
    df["period"] = [p.period for p in parts]
    df["class_timestamp"] = [p.timestamp.isoformat() for p in parts]
    
    dropped = len(keep) - len(parts)
    if dropped:
        logger.warning(f"Dropped {dropped} rows with invalid class dates")
    logger.info("Added temporal features: day_of_week, class_time, period")
    return df
