"""
Class Slot Consolidation Pipeline

Turns a zipped set of payroll/attendance exports from the studio booking
platform into one aggregated record per recurring class slot.
"""

__version__ = "1.0.0"
