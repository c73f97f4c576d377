"""
Aggregation of class rows to recurring class slot level.

Transforms individual class occurrences into one accumulated row per
slot (cleaned_class + day_of_week + class_time).
"""

import logging
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)

KEY_COLUMNS = ["cleaned_class", "day_of_week", "class_time"]

# Taken from the first row seen for a slot
IDENTITY_COLUMNS = ["location", "teacher_name", "period", "date"]

COUNTER_COLUMNS = [
    "total_occurrences",
    "total_cancelled",
    "total_checkins",
    "total_empty",
    "total_revenue",
    "total_time",
    "total_non_paid",
]

AGGREGATE_COLUMNS = ["unique_id"] + KEY_COLUMNS + IDENTITY_COLUMNS + COUNTER_COLUMNS


def _empty_aggregate() -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype=object) for col in AGGREGATE_COLUMNS})


def _add_unique_id(df: pd.DataFrame) -> pd.DataFrame:
    df.insert(
        0,
        "unique_id",
        df["cleaned_class"] + "-" + df["day_of_week"] + "-" + df["class_time"],
    )
    return df


def aggregate_class_slots(df: pd.DataFrame) -> pd.DataFrame:
    """
    Aggregate normalized class rows to class slot level.
    
    One row per unique slot (cleaned_class + day_of_week + class_time), in
    order of first appearance. Identity fields (location, teacher, period,
    date) come from the first row of each slot; every row contributes to
    the counters. An occurrence is empty when its check-in count is 0.
    
    Args:
        df: DataFrame with normalized class rows
            Required columns: cleaned_class, day_of_week, class_time, period,
                             class_timestamp, location, teacher_first_name,
                             teacher_last_name, checked_in, late_cancellations,
                             total_revenue, time_hours, non_paid_customers
    
    Returns:
        DataFrame with AGGREGATE_COLUMNS, one row per slot
    """
    logger.info(f"Aggregating {len(df)} class rows to slot level")
    
    # Ensure required columns exist
    required_cols = KEY_COLUMNS + [
        "period", "class_timestamp", "location", "teacher_first_name",
        "teacher_last_name", "checked_in", "late_cancellations",
        "total_revenue", "time_hours", "non_paid_customers",
    ]
    missing = [col for col in required_cols if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns for aggregation: {', '.join(missing)}")
    
    if df.empty:
        logger.info("No class rows to aggregate")
        return _empty_aggregate()
    
    df = df.copy()
    df["teacher_name"] = df["teacher_first_name"] + " " + df["teacher_last_name"]
    df["is_empty"] = (df["checked_in"] == 0).astype(int)
    
    aggregated = df.groupby(KEY_COLUMNS, sort=False, as_index=False).agg(
        location=("location", "first"),
        teacher_name=("teacher_name", "first"),
        period=("period", "first"),
        date=("class_timestamp", "first"),
        total_occurrences=("checked_in", "count"),
        total_cancelled=("late_cancellations", "sum"),
        total_checkins=("checked_in", "sum"),
        total_empty=("is_empty", "sum"),
        total_revenue=("total_revenue", "sum"),
        total_time=("time_hours", "sum"),
        total_non_paid=("non_paid_customers", "sum"),
    )
    aggregated = _add_unique_id(aggregated)[AGGREGATE_COLUMNS]
    
    logger.info(f"Aggregated to {len(aggregated)} class slots")
    logger.info(f"Total check-ins across all slots: {aggregated['total_checkins'].sum()}")
    
    return aggregated


def merge_partial_aggregates(frames: List[pd.DataFrame]) -> pd.DataFrame:
    """
    Combine slot aggregates computed independently over shards of rows.
    
    Counters are summed per slot. Identity fields come from the lowest
    shard index that saw the slot, matching what a single pass over the
    concatenated shards would produce. Derived metric columns are dropped
    and must be recomputed on the merged result.
    
    Args:
        frames: Partial aggregates from aggregate_class_slots, in shard order
        
    Returns:
        DataFrame with AGGREGATE_COLUMNS, one row per slot
    """
    frames = [frame for frame in frames if not frame.empty]
    if not frames:
        return _empty_aggregate()
    
    combined = pd.concat([frame[AGGREGATE_COLUMNS] for frame in frames], ignore_index=True)
    
    aggregations = {col: "first" for col in IDENTITY_COLUMNS}
    aggregations.update({col: "sum" for col in COUNTER_COLUMNS})
    merged = (
        combined.drop(columns=["unique_id"])
        .groupby(KEY_COLUMNS, sort=False, as_index=False)
        .agg(aggregations)
    )
    merged = _add_unique_id(merged)[AGGREGATE_COLUMNS]
    
    logger.info(f"Merged {len(frames)} partial aggregates into {len(merged)} class slots")
    return merged
