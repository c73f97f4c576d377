"""
Filtering of aggregated slots by period.

The consolidation pipeline emits every observed period; presentation
code uses this to hide slots whose period lies in the future.
"""

import logging
from datetime import date
from typing import List, Optional

from payroll_consolidation.models import AggregateRecord
from payroll_consolidation.temporal import period_start

logger = logging.getLogger(__name__)


def exclude_future_periods(
    records: List[AggregateRecord],
    today: Optional[date] = None
) -> List[AggregateRecord]:
    """
    Drop slots whose period starts after today.
    
    A period counts as current once its first day has passed, so the whole
    of the current month is kept. Slots without a period are kept.
    
    Args:
        records: Aggregated class slots
        today: Reference date (defaults to date.today())
        
    Returns:
        Records whose period is not in the future, in the original order
    """
    today = today or date.today()
    
    kept = []
    for record in records:
        if not record.period:
            kept.append(record)
            continue
        try:
            starts = period_start(record.period)
        except ValueError:
            logger.warning(f"Keeping slot {record.unique_id} with unreadable period '{record.period}'")
            kept.append(record)
            continue
        if starts <= today:
            kept.append(record)
    
    excluded = len(records) - len(kept)
    if excluded:
        logger.info(f"Excluded {excluded} slots with periods after {today.isoformat()}")
    return kept
