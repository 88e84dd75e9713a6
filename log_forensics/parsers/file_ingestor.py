"""
File Ingestor

Runs a batch of log files through a parser, one file at a time and in
input order, keeping successes and per-file failures apart so a single
unreadable file never sinks the whole batch.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Union

from .base_parser import BaseParser, LogEntry
from .line_parser import LineParser
from ..errors import FileAccessError, InvalidInputError, NoAccessibleFilesError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FileFailure:
    """
    A file that could not be processed, with the reason.

    Attributes:
        path: Path as given, or None when the batch held None
        error: Why the file was skipped
    """
    path: Optional[str]
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {'path': self.path, 'error': self.error}


@dataclass
class IngestionResult:
    """Entries and bookkeeping gathered from one batch of files."""
    entries: List[LogEntry] = field(default_factory=list)
    processed_files: List[str] = field(default_factory=list)
    failed_files: List[FileFailure] = field(default_factory=list)
    parse_errors: int = 0


def is_accessible_file(path: Any) -> bool:
    """Check that a path value names an existing regular file."""
    if not isinstance(path, (str, Path)) or not str(path):
        return False
    try:
        return Path(path).is_file()
    except OSError:
        return False


def validate_paths(file_paths: Any) -> List[PathLike]:
    """
    Check a batch of paths before any file is read.

    Args:
        file_paths: Candidate list of file paths

    Returns:
        The paths as a list, in input order

    Raises:
        InvalidInputError: If the value is not a non-empty list of paths
        NoAccessibleFilesError: If no path names an existing regular file
    """
    if isinstance(file_paths, (str, bytes, Path)) or not isinstance(file_paths, Sequence):
        raise InvalidInputError("file_paths must be a list of file paths")

    paths = list(file_paths)
    if not paths:
        raise InvalidInputError("No file paths provided for analysis")

    if not any(is_accessible_file(p) for p in paths):
        raise NoAccessibleFilesError(paths)

    return paths


class FileIngestor:
    """
    Streams log files through a parser and collects the results.

    Each file is read line by line, so memory use is bounded by the longest
    line rather than the file size.
    """

    def __init__(self, parser: Optional[BaseParser] = None):
        """
        Initialize the ingestor.

        Args:
            parser: Parser applied to every line (defaults to LineParser)
        """
        self.parser = parser or LineParser()

    def ingest_file(self, file_path: PathLike) -> List[LogEntry]:
        """
        Parse a single file.

        Args:
            file_path: Path to the log file

        Returns:
            Entries in file order; empty for an empty file

        Raises:
            FileAccessError: If the file cannot be opened or read
        """
        entries = list(self.parser.parse_file(file_path))
        logger.debug(
            "Parsed %d entries from %s (%d lines, %d errors)",
            len(entries), file_path,
            self.parser.lines_processed, len(self.parser.parse_errors)
        )
        return entries

    def ingest(self, file_paths: Sequence[PathLike]) -> IngestionResult:
        """
        Parse every file in a batch, recording failures per file.

        Args:
            file_paths: Paths to process; validated with validate_paths()

        Returns:
            IngestionResult with all entries and the per-file outcome
        """
        paths = validate_paths(file_paths)
        result = IngestionResult()

        for path in paths:
            if not isinstance(path, (str, Path)) or not str(path):
                raw = None if path is None else str(path)
                result.failed_files.append(FileFailure(raw, "Invalid file path type"))
                continue

            try:
                entries = self.ingest_file(path)
            except FileAccessError as e:
                logger.error("Error processing file %s: %s", path, e.reason)
                result.failed_files.append(FileFailure(str(path), e.reason))
                continue
            except Exception as e:
                logger.exception("Unexpected error processing file %s", path)
                result.failed_files.append(FileFailure(str(path), str(e)))
                continue

            result.entries.extend(entries)
            result.processed_files.append(str(path))
            result.parse_errors += len(self.parser.parse_errors)

        return result
