"""
Generic Line Parser

Extracts structured fields from free-form security log lines without
assuming a specific log format. Each field is located independently so a
line missing one field still yields the others.

Example lines:
    2024-01-15 10:23:45 ERROR Failed login for user=admin from 10.0.0.5
    2024-01-15T10:24:00 EventID: 1102 The audit log was cleared
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from .base_parser import (
    BaseParser, LogEntry, Severity, MAX_MESSAGE_LENGTH, MAX_RAW_CONTENT_LENGTH
)
from ..errors import LineParseError


@dataclass(frozen=True)
class FieldMatch:
    """Result of searching a line for one field."""
    found: bool
    value: str = ""

    @classmethod
    def search(cls, pattern: Pattern, text: str) -> 'FieldMatch':
        match = pattern.search(text)
        if match is None:
            return cls(found=False)
        return cls(found=True, value=match.group(1))


NOT_FOUND = FieldMatch(found=False)

# Severity keywords, checked in priority order; the first hit wins
SEVERITY_RULES = (
    (Severity.CRITICAL, ('critical', 'emergency', 'alert')),
    (Severity.ERROR, ('error', 'fail')),
    (Severity.WARNING, ('warn',)),
    (Severity.INFO, ('info', 'information')),
)


def classify_severity(text: str) -> Severity:
    """
    Classify a line by keyword, case-insensitively.

    Args:
        text: Log line or message

    Returns:
        Severity of the first matching rule, NORMAL if none match
    """
    lowered = text.lower()
    for severity, keywords in SEVERITY_RULES:
        if any(keyword in lowered for keyword in keywords):
            return severity
    return Severity.NORMAL


class LineParser(BaseParser):
    """
    Heuristic parser for unstructured security log lines.

    Pulls timestamp, IP address, user, and event id out of any line using
    independent patterns, and classifies severity from keywords.
    """

    TIMESTAMP_PATTERN = re.compile(r'(\d{4}-\d{2}-\d{2}[\sT]\d{2}:\d{2}:\d{2})')
    IP_PATTERN = re.compile(r'(\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b)')
    USER_PATTERN = re.compile(
        r'(?:user|username|account)[=:\s]+[\'"]?(\w+)[\'"]?',
        re.IGNORECASE
    )
    EVENT_ID_PATTERN = re.compile(r'(?:event\s*id|eventid)[=:\s]+(\d+)', re.IGNORECASE)

    def __init__(self, extract_event_ids: bool = True):
        """
        Initialize the line parser.

        Args:
            extract_event_ids: When False every entry gets event id 0
        """
        super().__init__("generic")
        self.extract_event_ids = extract_event_ids

    def parse_line(self, line: str, line_number: int, source: str = "") -> Optional[LogEntry]:
        """Parse one raw line; blank lines yield None."""
        if not isinstance(line, str):
            raise LineParseError(line_number, f"expected text, got {type(line).__name__}")

        trimmed = line.strip()
        if not trimmed:
            return None

        timestamp = FieldMatch.search(self.TIMESTAMP_PATTERN, trimmed)
        ip_address = FieldMatch.search(self.IP_PATTERN, trimmed)
        user = FieldMatch.search(self.USER_PATTERN, trimmed)
        event_id = (
            FieldMatch.search(self.EVENT_ID_PATTERN, trimmed)
            if self.extract_event_ids else NOT_FOUND
        )

        return LogEntry(
            line_number=max(1, line_number),
            timestamp=timestamp.value,
            event_id=int(event_id.value) if event_id.found else 0,
            user=user.value,
            ip_address=ip_address.value,
            severity=classify_severity(trimmed),
            message=trimmed[:MAX_MESSAGE_LENGTH],
            raw_content=line[:MAX_RAW_CONTENT_LENGTH],
            source=source,
        )
