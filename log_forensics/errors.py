"""
Error Types

Exception hierarchy for the analysis pipeline. Input errors abort a run
before any file is read; file and line errors are recovered locally and
recorded on the result.
"""

from typing import Optional


class LogAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class InvalidInputError(LogAnalyzerError, ValueError):
    """The analysis call itself is malformed (e.g. no file paths given)."""


class NoAccessibleFilesError(LogAnalyzerError, FileNotFoundError):
    """None of the requested paths is an existing regular file."""

    def __init__(self, paths):
        self.paths = list(paths)
        super().__init__(
            f"No valid, accessible file paths provided ({len(self.paths)} requested)"
        )


class FileAccessError(LogAnalyzerError, OSError):
    """A single log file could not be opened or read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot access file {self.path}: {reason}")


class LineParseError(LogAnalyzerError):
    """A single log line could not be turned into an entry."""

    def __init__(self, line_number: int, reason: str, path: Optional[str] = None):
        self.line_number = line_number
        self.reason = reason
        self.path = path
        location = f"{path}:{line_number}" if path else f"line {line_number}"
        super().__init__(f"Error parsing {location}: {reason}")
