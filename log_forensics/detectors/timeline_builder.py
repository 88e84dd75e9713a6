"""
Timeline Builder

Reconstructs a chronological incident timeline from the significant
(non-routine) entries of a run, giving each event a short title derived
from its message.

Timestamps are compared as strings, which orders zero-padded ISO-8601
values chronologically. Entries without a timestamp sort first; entries
with equal timestamps keep their encounter order.
"""

import time
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence

from .base_detector import BaseDetector
from ..parsers.base_parser import LogEntry

DEFAULT_TITLE = 'Security Incident Timeline'
EMPTY_SUMMARY = 'No timeline events available'
ROUTINE_SEVERITIES = frozenset({'NORMAL', 'INFO', 'DEBUG'})
MAX_DESCRIPTION_LENGTH = 250
TIMELINE_CONFIDENCE = 0.75

MITIGATION_STEPS = (
    'Review timeline events in chronological order',
    'Identify and remediate root cause',
    'Block compromised accounts and IP addresses',
    'Preserve evidence and document chain of custody',
    'Implement preventive measures to stop recurrence',
)


def event_title(message: str) -> str:
    """
    Derive a human-readable title from an entry message.

    Args:
        message: Entry message

    Returns:
        Title of the first matching category, "System Event" otherwise
    """
    msg = message.lower()

    if 'failed' in msg and ('login' in msg or 'logon' in msg):
        return 'Failed Login Attempt'
    if 'success' in msg and 'login' in msg:
        return 'Successful Login'
    if 'privilege' in msg or 'elevated' in msg:
        return 'Privilege Escalation Event'
    if 'account' in msg and 'lock' in msg:
        return 'Account Lockout Event'
    if 'access' in msg or 'permission' in msg:
        return 'Access Control Event'
    if 'error' in msg or 'fail' in msg:
        return 'Error/Failure Event'

    return 'System Event'


@dataclass(frozen=True)
class TimelineEvent:
    """One significant entry placed on the timeline."""
    timestamp: str
    title: str
    description: str
    severity: str
    actor: str
    ip_address: str
    line_number: int

    @classmethod
    def from_entry(cls, entry: LogEntry) -> 'TimelineEvent':
        return cls(
            timestamp=entry.timestamp,
            title=event_title(entry.message),
            description=entry.message[:MAX_DESCRIPTION_LENGTH],
            severity=entry.severity.value,
            actor=entry.user or 'Unknown',
            ip_address=entry.ip_address or 'N/A',
            line_number=entry.line_number,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'title': self.title,
            'description': self.description,
            'severity': self.severity,
            'actor': self.actor,
            'ip_address': self.ip_address,
            'line_number': self.line_number,
        }


@dataclass(frozen=True)
class Timeline:
    """
    Chronological view of the significant events of a run.

    Attributes:
        timeline_id: Generated identifier (run metadata)
        title: Timeline title
        start_time: Timestamp of the first event
        end_time: Timestamp of the last event
        summary: Human-readable event count
        severity: CRITICAL, WARNING or INFO
        confidence_score: Confidence in the reconstruction
        events: Ordered timeline events
        mitigation_steps: Suggested follow-up actions
    """
    timeline_id: str
    title: str
    start_time: str
    end_time: str
    summary: str
    severity: str
    confidence_score: float
    events: List[TimelineEvent] = field(default_factory=list)
    mitigation_steps: List[str] = field(default_factory=list)

    @property
    def event_count(self) -> int:
        return len(self.events)

    def to_dict(self) -> Dict[str, Any]:
        """Convert timeline to dictionary for serialization."""
        return {
            'id': self.timeline_id,
            'title': self.title,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'summary': self.summary,
            'severity': self.severity,
            'confidence_score': self.confidence_score,
            'events': [e.to_dict() for e in self.events],
            'event_count': self.event_count,
            'mitigation_steps': list(self.mitigation_steps),
        }


def _overall_severity(events: Sequence[TimelineEvent]) -> str:
    if any(e.severity in ('CRITICAL', 'ALERT') for e in events):
        return 'CRITICAL'
    if any(e.severity == 'WARNING' for e in events):
        return 'WARNING'
    return 'INFO'


class TimelineBuilder(BaseDetector):
    """Builds the incident timeline for a run."""

    def __init__(self, title: Optional[str] = None):
        """
        Initialize timeline builder.

        Args:
            title: Timeline title (defaults to "Security Incident Timeline")
        """
        super().__init__(
            name="timeline",
            description="Reconstructs a chronological incident timeline"
        )
        self.title = title or DEFAULT_TITLE

    def analyze(self, entries: Sequence[LogEntry]) -> List[TimelineEvent]:
        """
        Select significant entries and order them by timestamp.

        Args:
            entries: All parsed entries of the run

        Returns:
            Timeline events in chronological order
        """
        self.reset()
        self.entries_analyzed = len(entries)

        significant = [e for e in entries if e.severity.value not in ROUTINE_SEVERITIES]
        significant.sort(key=lambda e: e.timestamp)

        events = [TimelineEvent.from_entry(e) for e in significant]
        self.detection_count = len(events)
        return events

    def build(self, entries: Sequence[LogEntry]) -> Timeline:
        """
        Build the complete timeline record.

        Args:
            entries: All parsed entries of the run

        Returns:
            Timeline; an explicit empty timeline when there are no entries
        """
        timeline_id = f"TL-{int(time.time() * 1000)}"

        if not entries:
            self.reset()
            return Timeline(
                timeline_id=timeline_id,
                title=self.title,
                start_time='',
                end_time='',
                summary=EMPTY_SUMMARY,
                severity='INFO',
                confidence_score=0.0,
            )

        events = self.analyze(entries)
        plural = '' if len(events) == 1 else 's'

        return Timeline(
            timeline_id=timeline_id,
            title=self.title,
            start_time=events[0].timestamp if events else '',
            end_time=events[-1].timestamp if events else '',
            summary=f"Timeline contains {len(events)} significant event{plural}",
            severity=_overall_severity(events),
            confidence_score=TIMELINE_CONFIDENCE,
            events=events,
            mitigation_steps=list(MITIGATION_STEPS),
        )
