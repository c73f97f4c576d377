"""
Configuration management for the consolidation pipeline.

Loads environment variables and validates settings.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration class for the consolidation pipeline."""
    
    # Archive entries whose name contains this substring are payroll reports
    ARCHIVE_ENTRY_PATTERN: str = os.getenv(
        "ARCHIVE_ENTRY_PATTERN",
        "momence-teachers-payroll-report-aggregate-combined"
    )
    CSV_ENCODING: str = os.getenv("CSV_ENCODING", "utf-8-sig")
    
    # Raise EmptyArchiveError instead of returning no reports
    REQUIRE_MATCHING_ENTRIES: bool = _env_flag("REQUIRE_MATCHING_ENTRIES", "false")
    
    # Output configuration (used by run_consolidation.py)
    EXCLUDE_FUTURE_PERIODS: bool = _env_flag("EXCLUDE_FUTURE_PERIODS", "true")
    EXPORT_FORMAT: str = os.getenv("EXPORT_FORMAT", "csv").lower()
    OUTPUT_PATH: str = os.getenv("OUTPUT_PATH", "consolidated_data.csv")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    
    SUPPORTED_EXPORT_FORMATS = ("csv", "json")
    
    @classmethod
    def validate(cls) -> None:
        """
        Validate that all configuration values are usable.
        
        Raises:
            ValueError: If any setting is invalid.
        """
        invalid = []
        
        if not cls.ARCHIVE_ENTRY_PATTERN:
            invalid.append("ARCHIVE_ENTRY_PATTERN (must not be empty)")
        if cls.EXPORT_FORMAT not in cls.SUPPORTED_EXPORT_FORMATS:
            invalid.append(
                f"EXPORT_FORMAT (got '{cls.EXPORT_FORMAT}', "
                f"expected one of {', '.join(cls.SUPPORTED_EXPORT_FORMATS)})"
            )
        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            invalid.append(f"LOG_LEVEL (got '{cls.LOG_LEVEL}')")
        
        if invalid:
            raise ValueError(
                f"Invalid configuration: {'; '.join(invalid)}. "
                f"Check your .env file or environment variables."
            )


# Validate configuration on import
Config.validate()
