"""
Log Parsers Module

Turns raw log files into structured entries:
- Generic line parser (timestamp, IP, user, event id, severity)
- File ingestor for batches of files with per-file failure tracking
"""

from .base_parser import BaseParser, LogEntry, Severity
from .line_parser import LineParser, FieldMatch, classify_severity
from .file_ingestor import FileIngestor, FileFailure, IngestionResult, validate_paths

__all__ = [
    'BaseParser',
    'LogEntry',
    'Severity',
    'LineParser',
    'FieldMatch',
    'classify_severity',
    'FileIngestor',
    'FileFailure',
    'IngestionResult',
    'validate_paths',
]
