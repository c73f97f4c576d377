"""Data models for payroll report consolidation."""
from dataclasses import dataclass, asdict
from typing import NamedTuple

import pandas as pd

# Source CSV headers (exact names in the payroll report export)
CLASS_NAME = "Class name"
CLASS_DATE = "Class date"
LOCATION = "Location"
TEACHER_FIRST_NAME = "Teacher First Name"
TEACHER_LAST_NAME = "Teacher Last Name"
CHECKED_IN = "Checked in"
LATE_CANCELLATIONS = "Late cancellations"
TOTAL_REVENUE = "Total Revenue"
TIME_HOURS = "Time (h)"
NON_PAID_CUSTOMERS = "Non Paid Customers"

SOURCE_COLUMNS = [
    CLASS_NAME, CLASS_DATE, LOCATION, TEACHER_FIRST_NAME, TEACHER_LAST_NAME,
    CHECKED_IN, LATE_CANCELLATIONS, TOTAL_REVENUE, TIME_HOURS, NON_PAID_CUSTOMERS,
]
INTEGER_COLUMNS = [CHECKED_IN, LATE_CANCELLATIONS, NON_PAID_CUSTOMERS]
DECIMAL_COLUMNS = [TOTAL_REVENUE, TIME_HOURS]

# Marks an average that has no non-empty occurrences to divide by
NOT_APPLICABLE = "N/A"

UNCATEGORIZED = "Uncategorized"

# Flat export headers, in column order, keyed by AggregateRecord field
EXPORT_COLUMNS = {
    "unique_id": "Unique ID",
    "cleaned_class": "Cleaned Class",
    "day_of_week": "Day of the Week",
    "class_time": "Class Time",
    "location": "Location",
    "teacher_name": "Trainer Name",
    "period": "Period",
    "total_occurrences": "Total Occurrences",
    "total_cancelled": "Total Cancelled",
    "total_checkins": "Total Checkins",
    "total_empty": "Total Empty",
    "total_non_empty": "Total Non-Empty",
    "class_average_including_empty": "Class Average (Including Empty)",
    "class_average_excluding_empty": "Class Average (Excluding Empty)",
    "total_revenue": "Total Revenue",
    "total_time": "Total Time",
    "total_non_paid": "Total Non-Paid",
    "date": "Date",
}


@dataclass
class RawRecord:
    """One payroll report row after field conversion."""
    class_name: str
    class_date: str
    location: str
    teacher_first_name: str
    teacher_last_name: str
    checked_in: int
    late_cancellations: int
    total_revenue: float
    time_hours: float
    non_paid_customers: int
    
    @property
    def teacher_name(self) -> str:
        return f"{self.teacher_first_name} {self.teacher_last_name}"


class TemporalParts(NamedTuple):
    """Projections of a class timestamp used for slot grouping."""
    day_of_week: str
    class_time: str
    period: str
    timestamp: pd.Timestamp


class AggregateKey(NamedTuple):
    """Identifies a recurring class slot independent of calendar date."""
    category: str
    day_of_week: str
    class_time: str
    
    @property
    def unique_id(self) -> str:
        return f"{self.category}-{self.day_of_week}-{self.class_time}"


@dataclass
class AggregateRecord:
    """Consolidated statistics for one class slot."""
    unique_id: str
    cleaned_class: str
    day_of_week: str
    class_time: str
    location: str
    teacher_name: str
    period: str
    date: str
    total_occurrences: int
    total_cancelled: int
    total_checkins: int
    total_empty: int
    total_non_empty: int
    class_average_including_empty: str
    class_average_excluding_empty: str
    total_revenue: float
    total_time: float
    total_non_paid: int
    
    @property
    def key(self) -> AggregateKey:
        return AggregateKey(self.cleaned_class, self.day_of_week, self.class_time)
    
    def to_dict(self) -> dict:
        return asdict(self)
