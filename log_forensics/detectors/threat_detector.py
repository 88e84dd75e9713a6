"""
Threat Detector

Rule-based detection of two threat families over the full entry set of
a run:
- Repeated failed logins (raised as a BRUTE_FORCE threat)
- Log tampering (cleared/deleted/purged logs, Windows event 1102)

Each rule emits at most one threat per run, summarizing every matching
entry.
"""

from typing import List, Sequence

from .base_detector import BaseDetector, Threat, ThreatType, ThreatSeverity
from ..config import AnalysisOptions
from ..parsers.base_parser import LogEntry

LOG_CLEARED_EVENT_ID = 1102


def is_failed_login(entry: LogEntry) -> bool:
    """Check if an entry reports a failed login or authentication."""
    msg = entry.message.lower()
    return (
        ('failed' in msg or 'failure' in msg)
        and ('login' in msg or 'logon' in msg or 'authentication' in msg)
    )


def is_log_tampering(entry: LogEntry) -> bool:
    """Check if an entry indicates logs being cleared or removed."""
    msg = entry.message.lower()
    return (
        'cleared' in msg or 'deleted' in msg or 'purged' in msg
        or entry.event_id == LOG_CLEARED_EVENT_ID
    )


class FailedLoginDetector(BaseDetector):
    """Raises a brute-force threat when failed logins exceed a fixed count."""

    FAILED_LOGIN_THRESHOLD = 5

    def __init__(self):
        super().__init__(
            name="failed_login",
            description="Detects repeated failed login attempts"
        )

    def analyze(self, entries: Sequence[LogEntry]) -> List[Threat]:
        self.reset()
        self.entries_analyzed = len(entries)

        failed = [e for e in entries if is_failed_login(e)]
        if len(failed) <= self.FAILED_LOGIN_THRESHOLD:
            return []

        first = failed[0]
        source_ip = first.ip_address or 'unknown'
        target_user = first.user or 'unknown'

        threat = Threat(
            threat_type=ThreatType.BRUTE_FORCE,
            severity=ThreatSeverity.CRITICAL,
            description=f"Multiple failed login attempts detected ({len(failed)})",
            source=source_ip,
            target=target_user,
            timestamp=first.timestamp,
            confidence_score=min(0.95, 0.5 + len(failed) * 0.05),
            recommendation=f"Block source IP {source_ip} and reset affected account",
            related_entries=len(failed),
        )
        self.detection_count = 1
        self.logger.info("%d failed login entries, first from %s", len(failed), source_ip)
        return [threat]


class LogTamperingDetector(BaseDetector):
    """Raises a threat when any entry suggests the logs were manipulated."""

    CONFIDENCE = 0.9

    def __init__(self):
        super().__init__(
            name="log_tampering",
            description="Detects log clearing and deletion events"
        )

    def analyze(self, entries: Sequence[LogEntry]) -> List[Threat]:
        self.reset()
        self.entries_analyzed = len(entries)

        clear_events = [e for e in entries if is_log_tampering(e)]
        if not clear_events:
            return []

        threat = Threat(
            threat_type=ThreatType.LOG_TAMPERING,
            severity=ThreatSeverity.CRITICAL,
            description=(
                f"Log tampering indicator: {len(clear_events)} event(s) "
                f"suggest log manipulation"
            ),
            source='System',
            target='Logs',
            timestamp=clear_events[0].timestamp,
            confidence_score=self.CONFIDENCE,
            recommendation='CRITICAL: Preserve remaining logs immediately and investigate',
            related_entries=len(clear_events),
        )
        self.detection_count = 1
        self.logger.info("%d log tampering indicator(s)", len(clear_events))
        return [threat]


class ThreatDetector:
    """
    Runs the enabled threat rules and combines their findings.

    Args:
        options: Run options deciding which rules are active
    """

    def __init__(self, options: AnalysisOptions):
        self.options = options
        self.detectors: List[BaseDetector] = []

        if options.enable_login_analysis and options.enable_failed_login_detection:
            self.detectors.append(FailedLoginDetector())
        if options.enable_log_tampering_detection:
            self.detectors.append(LogTamperingDetector())

    def analyze(self, entries: Sequence[LogEntry]) -> List[Threat]:
        """Apply every enabled rule; no entries means no threats."""
        if not entries:
            return []

        threats: List[Threat] = []
        for detector in self.detectors:
            threats.extend(detector.analyze(entries))
        return threats
