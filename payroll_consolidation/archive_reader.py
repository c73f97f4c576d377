"""
Extraction of payroll report CSVs from an uploaded zip archive.

Reads every entry whose name matches the payroll report naming pattern
and reports per-entry progress to the caller.
"""

import io
import logging
import os
import zipfile
import zlib
from typing import BinaryIO, Callable, List, Optional, Union

from payroll_consolidation.config import Config
from payroll_consolidation.errors import ArchiveCorruptError, EmptyArchiveError

logger = logging.getLogger(__name__)

ArchiveSource = Union[bytes, bytearray, str, os.PathLike, BinaryIO]
ProgressCallback = Callable[[int], None]


def _open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        return zipfile.ZipFile(source)
    except (zipfile.BadZipFile, OSError, EOFError) as e:
        raise ArchiveCorruptError(f"Cannot open archive: {e}") from e


def read_payroll_reports(
    source: ArchiveSource,
    on_progress: Optional[ProgressCallback] = None,
    pattern: Optional[str] = None,
    encoding: Optional[str] = None,
    require_match: Optional[bool] = None
) -> List[str]:
    """
    Extract the text of every payroll report entry in an archive.
    
    Entries are visited in lexicographic name order so the returned list
    is reproducible for a given archive. Every entry (matched or skipped)
    counts toward progress, which is reported as a whole percentage after
    each entry and reaches 100 only after the last one.
    
    Args:
        source: Archive bytes, a path, or a binary file object
        on_progress: Optional callback receiving percent complete (0-100)
        pattern: Substring identifying payroll report entries
            (defaults to Config.ARCHIVE_ENTRY_PATTERN)
        encoding: Text encoding of the CSV entries (defaults to Config.CSV_ENCODING)
        require_match: Raise EmptyArchiveError when nothing matches
            (defaults to Config.REQUIRE_MATCHING_ENTRIES)
        
    Returns:
        Text content of each matching entry, in entry-name order. Empty if
        no entry matches and require_match is false.
        
    Raises:
        ArchiveCorruptError: If the archive cannot be opened or an entry
            cannot be decompressed
        EmptyArchiveError: If require_match is set and no entry matches
    """
    pattern = pattern or Config.ARCHIVE_ENTRY_PATTERN
    encoding = encoding or Config.CSV_ENCODING
    if require_match is None:
        require_match = Config.REQUIRE_MATCHING_ENTRIES
    
    reports = []
    with _open_archive(source) as archive:
        names = sorted(archive.namelist())
        total = len(names)
        logger.info(f"Archive contains {total} entries")
        
        for index, name in enumerate(names, start=1):
            if pattern in name:
                try:
                    raw = archive.read(name)
                except (zipfile.BadZipFile, zlib.error, EOFError, OSError,
                        NotImplementedError, RuntimeError) as e:
                    raise ArchiveCorruptError(f"Cannot decompress entry '{name}': {e}") from e
                reports.append(raw.decode(encoding, errors="replace"))
                logger.debug(f"Extracted payroll report '{name}' ({len(raw)} bytes)")
            else:
                logger.debug(f"Skipping entry '{name}'")
            
            if on_progress is not None:
                on_progress(index * 100 // total)
    
    # An archive with no entries still completes
    if total == 0 and on_progress is not None:
        on_progress(100)
    
    logger.info(f"Extracted {len(reports)} payroll reports matching '{pattern}'")
    
    if not reports and require_match:
        raise EmptyArchiveError(f"No archive entries match '{pattern}'")
    return reports
