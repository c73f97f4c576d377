"""Unit tests for period filtering."""
from datetime import date

from payroll_consolidation.filtering import exclude_future_periods
from test_metrics import make_record


class TestExcludeFuturePeriods:
    """Test cases for exclude_future_periods()."""
    
    def test_drops_future_periods(self):
        """Test that only periods starting after today are removed."""
        records = [
            make_record(unique_id="past", period="Feb-24"),
            make_record(unique_id="current", period="Mar-24"),
            make_record(unique_id="future", period="Apr-24"),
        ]
        
        kept = exclude_future_periods(records, today=date(2024, 3, 15))
        
        assert [r.unique_id for r in kept] == ["past", "current"]
    
    def test_keeps_records_without_readable_period(self):
        """Test that blank or malformed periods are not filtered out."""
        records = [
            make_record(unique_id="blank", period=""),
            make_record(unique_id="bogus", period="someday"),
        ]
        
        kept = exclude_future_periods(records, today=date(2024, 3, 15))
        
        assert [r.unique_id for r in kept] == ["blank", "bogus"]
    
    def test_defaults_to_today(self):
        """Test that the current date is used when none is given."""
        records = [make_record(period="Jan-00"), make_record(period="Dec-99")]
        
        kept = exclude_future_periods(records)
        
        assert [r.period for r in kept] == ["Jan-00"]
