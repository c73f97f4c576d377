"""Exceptions raised by the consolidation pipeline."""


class ConsolidationError(Exception):
    """Base class for pipeline failures."""


class ArchiveCorruptError(ConsolidationError):
    """The uploaded archive cannot be opened or decompressed."""


class EmptyArchiveError(ConsolidationError):
    """No archive entry matches the payroll report naming pattern."""


class InvalidTimestampError(ConsolidationError, ValueError):
    """A class date cannot be parsed into a timestamp."""
    
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unparseable class date: {value!r}")
