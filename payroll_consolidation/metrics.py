"""
Derived metrics for aggregated class slots.

Computes attendance averages per slot and summary metrics across slots.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Union

import numpy as np
import pandas as pd

from payroll_consolidation.models import AggregateRecord, NOT_APPLICABLE

logger = logging.getLogger(__name__)


def format_fixed(value: float, places: int = 1) -> str:
    """
    Format a number with a fixed number of decimal places.
    
    Exact binary ties round away from zero (2.25 -> "2.3"), so results
    match the figures shown on the dashboard.
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def add_derived_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add non-empty counts and attendance averages to slot aggregates.
    
    - total_non_empty: total_occurrences - total_empty
    - class_average_including_empty: check-ins / occurrences, one decimal
    - class_average_excluding_empty: check-ins / non-empty occurrences, one
      decimal, or "N/A" when every occurrence was empty
    
    Args:
        df: DataFrame from aggregate_class_slots
        
    Returns:
        DataFrame with added derived metric columns
    """
    df = df.copy()
    
    if df.empty:
        for col in ["total_non_empty", "class_average_including_empty", "class_average_excluding_empty"]:
            df[col] = pd.Series(dtype=object)
        return df
    
    df["total_non_empty"] = df["total_occurrences"] - df["total_empty"]
    
    # Every emitted slot has at least one occurrence
    including = df["total_checkins"] / df["total_occurrences"]
    df["class_average_including_empty"] = including.map(format_fixed)
    
    excluding = df["total_checkins"] / df["total_non_empty"].replace(0, np.nan)
    df["class_average_excluding_empty"] = excluding.map(
        lambda v: NOT_APPLICABLE if pd.isna(v) else format_fixed(v)
    )
    
    all_empty = (df["total_non_empty"] == 0).sum()
    logger.info(f"Computed attendance averages for {len(df)} slots ({all_empty} with no attendance)")
    return df


def to_records(df: pd.DataFrame) -> List[AggregateRecord]:
    """
    Convert a slot aggregate DataFrame with derived metrics to records.
    
    Args:
        df: DataFrame from add_derived_metrics
        
    Returns:
        List of AggregateRecord in DataFrame row order
    """
    records = []
    for row in df.to_dict(orient="records"):
        records.append(AggregateRecord(
            unique_id=row["unique_id"],
            cleaned_class=row["cleaned_class"],
            day_of_week=row["day_of_week"],
            class_time=row["class_time"],
            location=row["location"],
            teacher_name=row["teacher_name"],
            period=row["period"],
            date=row["date"],
            total_occurrences=int(row["total_occurrences"]),
            total_cancelled=int(row["total_cancelled"]),
            total_checkins=int(row["total_checkins"]),
            total_empty=int(row["total_empty"]),
            total_non_empty=int(row["total_non_empty"]),
            class_average_including_empty=row["class_average_including_empty"],
            class_average_excluding_empty=row["class_average_excluding_empty"],
            total_revenue=float(row["total_revenue"]),
            total_time=float(row["total_time"]),
            total_non_paid=int(row["total_non_paid"]),
        ))
    return records


def summarize(records: List[AggregateRecord]) -> Dict[str, Union[int, float, str]]:
    """
    Calculate dashboard summary metrics across class slots.
    
    Utilization rate is the share of occurrences with at least one
    check-in, as a percentage with one decimal.
    
    Args:
        records: Aggregated class slots
        
    Returns:
        Dictionary with total_classes, total_checkins, total_revenue,
        revenue_per_class, average_attendance, utilization_rate,
        total_cancelled, total_hours, class_types and instructors
    """
    total_classes = sum(r.total_occurrences for r in records)
    total_checkins = sum(r.total_checkins for r in records)
    total_revenue = sum(r.total_revenue for r in records)
    total_empty = sum(r.total_empty for r in records)
    
    if total_classes > 0:
        average_attendance = format_fixed(total_checkins / total_classes)
        revenue_per_class = total_revenue / total_classes
        utilization_rate = format_fixed((total_classes - total_empty) / total_classes * 100)
    else:
        average_attendance = "0"
        revenue_per_class = 0.0
        utilization_rate = "0"
    
    return {
        "total_classes": total_classes,
        "total_checkins": total_checkins,
        "total_revenue": total_revenue,
        "revenue_per_class": revenue_per_class,
        "average_attendance": average_attendance,
        "utilization_rate": utilization_rate,
        "total_cancelled": sum(r.total_cancelled for r in records),
        "total_hours": round(sum(r.total_time for r in records)),
        "total_non_paid": sum(r.total_non_paid for r in records),
        "class_types": len({r.cleaned_class for r in records}),
        "instructors": len({r.teacher_name for r in records}),
    }
