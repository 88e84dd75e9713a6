"""
Brute Force Attack Correlator

Correlates failed or denied attempts by source IP and reports every IP
whose attempt count reaches the configured threshold.

Grouping covers the whole entry set of the run. The configured time
window is validated and carried with the options but does not split
groups: attempts from one IP are counted together however far apart they
are.

MITRE ATT&CK References:
- T1110.001: Brute Force - Password Guessing
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Dict, Any, Sequence

from .base_detector import BaseDetector, clamp
from ..config import AnalysisOptions
from ..parsers.base_parser import LogEntry


@dataclass(frozen=True)
class BruteForceAttack:
    """
    A cluster of failed attempts from one source IP.

    Attributes:
        target_user: User named by the first attempt
        source_ip: Attacking IP address
        start_time: Timestamp of the first attempt (encounter order)
        end_time: Timestamp of the last attempt (encounter order)
        attempt_count: Number of attempts in the cluster
        account_locked: Whether any attempt reported an account lockout
        confidence_score: Confidence in [0.5, 0.99]
        recommendation: Suggested remediation
        related_entries: Number of entries in the cluster
    """
    target_user: str
    source_ip: str
    start_time: str
    end_time: str
    attempt_count: int
    account_locked: bool
    confidence_score: float
    recommendation: str
    related_entries: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert attack to dictionary for serialization."""
        return {
            'target_user': self.target_user,
            'source_ip': self.source_ip,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'attempt_count': self.attempt_count,
            'account_locked': self.account_locked,
            'confidence_score': self.confidence_score,
            'recommendation': self.recommendation,
            'related_entries': self.related_entries,
        }


def is_failed_attempt(entry: LogEntry) -> bool:
    """Check if an entry records a failed or denied attempt."""
    msg = entry.message.lower()
    return 'failed' in msg or 'denied' in msg


class BruteForceDetector(BaseDetector):
    """
    Detects brute force attacks by counting failed attempts per source IP.

    One BruteForceAttack is emitted per IP whose group size reaches the
    threshold, in the order the IPs were first seen.
    """

    def __init__(self, options: AnalysisOptions = None):
        """
        Initialize brute force detector.

        Args:
            options: Run options supplying threshold and window
        """
        super().__init__(
            name="brute_force",
            description="Correlates failed attempts by source IP"
        )
        options = options or AnalysisOptions()
        self.threshold = options.brute_force_threshold
        self.window_seconds = options.brute_force_window_seconds

    def analyze(self, entries: Sequence[LogEntry]) -> List[BruteForceAttack]:
        """
        Group failed attempts by IP and report groups over threshold.

        Args:
            entries: All parsed entries of the run

        Returns:
            List of BruteForceAttack records
        """
        self.reset()
        if not entries:
            return []

        failed_by_ip: Dict[str, List[LogEntry]] = OrderedDict()
        for entry in entries:
            self.entries_analyzed += 1
            if entry.ip_address and is_failed_attempt(entry):
                failed_by_ip.setdefault(entry.ip_address, []).append(entry)

        attacks = [
            self._create_attack(ip, attempts)
            for ip, attempts in failed_by_ip.items()
            if len(attempts) >= self.threshold
        ]

        self.detection_count = len(attacks)
        if attacks:
            self.logger.info(
                "%d source IP(s) reached %d failed attempts",
                len(attacks), self.threshold
            )
        return attacks

    def _create_attack(self, source_ip: str, attempts: List[LogEntry]) -> BruteForceAttack:
        """Create the attack record for one IP's attempts."""
        count = len(attempts)
        return BruteForceAttack(
            target_user=attempts[0].user or 'unknown',
            source_ip=source_ip,
            start_time=attempts[0].timestamp,
            end_time=attempts[-1].timestamp,
            attempt_count=count,
            account_locked=any('locked' in e.message.lower() for e in attempts),
            confidence_score=clamp(0.5 + count * 0.05, 0.5, 0.99),
            recommendation=f"Block source IP {source_ip}, reset affected passwords, enable MFA",
            related_entries=count,
        )
