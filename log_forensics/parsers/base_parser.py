"""
Base Parser Module

Provides the abstract base class for all log parsers and the standardized
LogEntry dataclass shared by every detection stage.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterator, Union

from ..errors import FileAccessError, LineParseError

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 500
MAX_RAW_CONTENT_LENGTH = 1000


class Severity(Enum):
    """
    Severity classification of a single log line.

    Ordered from most to least significant; the parser assigns the first
    level whose keywords appear in the line.
    """
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    NORMAL = "NORMAL"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class LogEntry:
    """
    Structured representation of one log line.

    Attributes:
        line_number: 1-based position of the line in its file
        timestamp: Raw timestamp text, empty when the line has none
        event_id: Numeric event identifier, 0 when absent
        user: Username associated with the event
        ip_address: First dotted-quad address found on the line
        severity: Keyword-derived severity
        message: Trimmed line, capped at 500 characters
        raw_content: Original line, capped at 1000 characters
        source: Name of the file the line was read from
    """
    line_number: int
    timestamp: str = ""
    event_id: int = 0
    user: str = ""
    ip_address: str = ""
    severity: Severity = Severity.NORMAL
    message: str = ""
    raw_content: str = ""
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            'line_number': self.line_number,
            'timestamp': self.timestamp,
            'event_id': self.event_id,
            'user': self.user,
            'ip_address': self.ip_address,
            'severity': self.severity.value,
            'message': self.message,
            'raw_content': self.raw_content,
            'source': self.source,
        }


class BaseParser(ABC):
    """
    Abstract base class for log parsers.

    Subclasses turn one raw line into a LogEntry; this class handles
    streaming a file through that per-line contract and keeps per-file
    parsing statistics.
    """

    def __init__(self, log_type: str):
        """
        Initialize the parser.

        Args:
            log_type: Identifier for the log format (e.g., 'generic')
        """
        self.log_type = log_type
        self.parse_errors: List[Dict[str, Any]] = []
        self.lines_processed = 0
        self.lines_parsed = 0

    @abstractmethod
    def parse_line(self, line: str, line_number: int, source: str = "") -> Optional[LogEntry]:
        """
        Parse a single log line into a LogEntry.

        Args:
            line: Raw log line to parse
            line_number: 1-based line number within its file
            source: Name of the originating file

        Returns:
            LogEntry if the line carries content, None for blank lines
        """
        pass

    def parse_file(self, file_path: Union[str, Path]) -> Iterator[LogEntry]:
        """
        Parse an entire log file, one line at a time.

        Lines that fail to parse are skipped and logged; their line numbers
        are still consumed so later entries keep their true position.

        Args:
            file_path: Path to the log file

        Yields:
            LogEntry objects for each successfully parsed line

        Raises:
            FileAccessError: If the path is not a readable regular file
        """
        file_path = Path(file_path)
        self.parse_errors = []
        self.lines_processed = 0
        self.lines_parsed = 0

        if not file_path.exists():
            raise FileAccessError(file_path, "File does not exist")
        if not file_path.is_file():
            raise FileAccessError(file_path, "Path is not a file")

        source = file_path.name
        try:
            with open(file_path, 'r', encoding='utf-8', errors='replace', newline=None) as f:
                for line_num, line in enumerate(f, 1):
                    self.lines_processed += 1
                    line = line.rstrip('\r\n')

                    if not line.strip():
                        continue

                    try:
                        entry = self.parse_line(line, line_num, source)
                    except LineParseError as e:
                        self._record_error(line_num, line, e)
                        continue
                    except Exception as e:
                        self._record_error(line_num, line, LineParseError(line_num, str(e), str(file_path)))
                        continue

                    if entry:
                        self.lines_parsed += 1
                        yield entry
        except OSError as e:
            raise FileAccessError(file_path, f"Error reading file: {e}") from e

    def _record_error(self, line_number: int, line: str, error: LineParseError) -> None:
        logger.warning("%s", error)
        self.parse_errors.append({
            'line_number': line_number,
            'line': line[:200],
            'error': error.reason,
        })

    def get_stats(self) -> Dict[str, Any]:
        """
        Get parsing statistics.

        Returns:
            Dictionary containing parsing metrics
        """
        return {
            'log_type': self.log_type,
            'lines_processed': self.lines_processed,
            'lines_parsed': self.lines_parsed,
            'parse_errors': len(self.parse_errors),
            'success_rate': (self.lines_parsed / self.lines_processed * 100)
                           if self.lines_processed > 0 else 0
        }
