"""
Analysis Result Model

The top-level record produced by one analysis run, handed to exporters
and report generators once the run completes.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from .base_detector import Threat, ThreatSeverity
from .brute_force_detector import BruteForceAttack
from .timeline_builder import Timeline
from .user_profiler import UserProfile
from ..config import AnalysisOptions
from ..parsers.base_parser import LogEntry, Severity
from ..parsers.file_ingestor import FileFailure

CRITICAL_EVENT_SEVERITIES = frozenset({'CRITICAL', 'ERROR', 'ALERT'})
DEFAULT_ENTRY_LIMIT = 1000


@dataclass(frozen=True)
class EventStatistics:
    """Entry counts grouped by severity class."""
    total_entries: int = 0
    normal_events: int = 0
    warning_events: int = 0
    critical_events: int = 0
    parse_errors: int = 0

    @classmethod
    def from_entries(cls, entries: List[LogEntry], parse_errors: int = 0) -> 'EventStatistics':
        """Count entries per severity class; parse_errors counts skipped lines."""
        normal = warning = critical = 0
        for entry in entries:
            severity = entry.severity.value
            if severity in CRITICAL_EVENT_SEVERITIES:
                critical += 1
            elif severity == 'WARNING':
                warning += 1
            else:
                normal += 1
        return cls(
            total_entries=len(entries),
            normal_events=normal,
            warning_events=warning,
            critical_events=critical,
            parse_errors=parse_errors,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_entries': self.total_entries,
            'normal_events': self.normal_events,
            'warning_events': self.warning_events,
            'critical_events': self.critical_events,
            'parse_errors': self.parse_errors,
        }


@dataclass(frozen=True)
class DetectionSummary:
    """Threat counts and the run's overall risk score."""
    total_threats: int = 0
    critical_threats: int = 0
    warning_threats: int = 0
    overall_risk_score: float = 0.0

    @classmethod
    def from_threats(cls, threats: List[Threat], risk_score: float) -> 'DetectionSummary':
        return cls(
            total_threats=len(threats),
            critical_threats=sum(1 for t in threats if t.severity == ThreatSeverity.CRITICAL),
            warning_threats=sum(1 for t in threats if t.severity == ThreatSeverity.WARNING),
            overall_risk_score=max(0.0, min(1.0, risk_score)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_threats': self.total_threats,
            'critical_threats': self.critical_threats,
            'warning_threats': self.warning_threats,
            'overall_risk_score': self.overall_risk_score,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis run.

    The analysis id, start/end times, processing time and timeline id
    describe the run itself; every other field depends only on the input
    files and options. Parsed entries are kept for CSV export and entry
    queries but are left out of to_dict().
    """
    analysis_id: str
    success: bool
    error_message: str
    start_time: str
    end_time: str
    processing_time_ms: int
    total_files_analyzed: int
    successful_files: int
    failed_files: List[FileFailure]
    total_entries_parsed: int
    statistics: EventStatistics
    detection_summary: DetectionSummary
    brute_force_attacks: List[BruteForceAttack]
    threats: List[Threat]
    user_profiles: List[UserProfile]
    timeline: Optional[Timeline]
    recommendations: List[str]
    options: AnalysisOptions
    entries: List[LogEntry] = field(default_factory=list, repr=False, compare=False)

    @property
    def critical_threat_count(self) -> int:
        return self.detection_summary.critical_threats

    def get_entries(
        self,
        keyword: Optional[str] = None,
        severity: Optional[str] = None,
        user: Optional[str] = None,
        ip: Optional[str] = None,
        limit: int = DEFAULT_ENTRY_LIMIT,
    ) -> List[LogEntry]:
        """
        Query parsed entries.

        Args:
            keyword: Case-insensitive substring of the message
            severity: Severity name, case-insensitive
            user: Username, case-insensitive
            ip: Exact IP address
            limit: Maximum number of entries (at least 1)

        Returns:
            Matching entries in parse order
        """
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            limit = DEFAULT_ENTRY_LIMIT

        filtered = self.entries

        if keyword and keyword.strip():
            needle = keyword.strip().lower()
            filtered = [e for e in filtered if needle in e.message.lower()]

        if severity:
            if isinstance(severity, Severity):
                severity = severity.value
            wanted = severity.upper()
            filtered = [e for e in filtered if e.severity.value == wanted]

        if user and user.strip():
            wanted_user = user.lower()
            filtered = [e for e in filtered if e.user.lower() == wanted_user]

        if ip and ip.strip():
            filtered = [e for e in filtered if e.ip_address == ip]

        return list(filtered[:max(1, limit)])

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to plain, JSON-compatible data."""
        return {
            'analysis_id': self.analysis_id,
            'success': self.success,
            'error_message': self.error_message,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'processing_time_ms': self.processing_time_ms,
            'total_files_analyzed': self.total_files_analyzed,
            'successful_files': self.successful_files,
            'failed_files': [f.to_dict() for f in self.failed_files],
            'total_entries_parsed': self.total_entries_parsed,
            'statistics': self.statistics.to_dict(),
            'detection_summary': self.detection_summary.to_dict(),
            'brute_force_attacks': [a.to_dict() for a in self.brute_force_attacks],
            'threats': [t.to_dict() for t in self.threats],
            'user_profiles': [p.to_dict() for p in self.user_profiles],
            'timeline': self.timeline.to_dict() if self.timeline else None,
            'recommendations': list(self.recommendations),
            'options': self.options.to_dict(),
        }
