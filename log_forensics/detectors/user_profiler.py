"""
User Profile Builder

Aggregates per-user activity across the run: activity and login
counters, the distinct source IPs a user appeared from, first/last seen
times, and a behavior-based risk score with anomaly notes.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Sequence

from .base_detector import BaseDetector, clamp
from ..parsers.base_parser import LogEntry

ELEVATED_FAILED_LOGINS = 10
# Distinct IPs above which the IP term is added to the risk score
RISK_IP_COUNT = 3
# Distinct IPs above which "unusual location activity" is reported; four IPs
# for one account already count as unusual
UNUSUAL_LOCATION_IP_COUNT = 3
HIGH_FAILURE_RATIO = 0.5


@dataclass(frozen=True)
class UserProfile:
    """
    Behavior summary for one user.

    Attributes:
        username: Username as first seen
        total_activities: Number of entries naming the user
        failed_logins: Entries reporting failed or denied activity
        successful_logins: Entries reporting successful authentication
        source_ips: Distinct source IPs in first-seen order
        first_seen: Smallest non-empty timestamp (string order)
        last_seen: Largest non-empty timestamp (string order)
        risk_score: Behavior risk in [0, 1]
        anomalies: Descriptions of unusual behavior
    """
    username: str
    total_activities: int
    failed_logins: int
    successful_logins: int
    source_ips: List[str]
    first_seen: str
    last_seen: str
    risk_score: float
    anomalies: List[str] = field(default_factory=list)

    @property
    def fail_ratio(self) -> float:
        if self.total_activities == 0:
            return 0.0
        return self.failed_logins / self.total_activities

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary for serialization."""
        return {
            'username': self.username,
            'total_activities': self.total_activities,
            'failed_logins': self.failed_logins,
            'successful_logins': self.successful_logins,
            'source_ips': list(self.source_ips),
            'first_seen': self.first_seen,
            'last_seen': self.last_seen,
            'risk_score': self.risk_score,
            'anomalies': list(self.anomalies),
        }


class _ProfileAccumulator:
    """Mutable counters for one user while entries are scanned."""

    def __init__(self, username: str):
        self.username = username
        self.total_activities = 0
        self.failed_logins = 0
        self.successful_logins = 0
        # dict keys keep insertion order and drop duplicates
        self.source_ips: Dict[str, None] = {}
        self.first_seen = ""
        self.last_seen = ""

    def add(self, entry: LogEntry) -> None:
        self.total_activities += 1

        if entry.ip_address.strip():
            self.source_ips.setdefault(entry.ip_address, None)

        if entry.timestamp:
            if not self.first_seen or entry.timestamp < self.first_seen:
                self.first_seen = entry.timestamp
            if entry.timestamp > self.last_seen:
                self.last_seen = entry.timestamp

        message = entry.message.lower()
        if 'failed' in message or 'denied' in message:
            self.failed_logins += 1
        elif 'success' in message or 'logged in' in message or 'authenticated' in message:
            self.successful_logins += 1

    def build(self) -> UserProfile:
        fail_ratio = (
            self.failed_logins / self.total_activities
            if self.total_activities > 0 else 0.0
        )
        ip_count = len(self.source_ips)

        risk_score = clamp(
            fail_ratio * 0.5
            + (0.3 if ip_count > RISK_IP_COUNT else 0.0)
            + (0.2 if self.failed_logins > ELEVATED_FAILED_LOGINS else 0.0)
        )

        anomalies = []
        if self.failed_logins > ELEVATED_FAILED_LOGINS:
            anomalies.append(f"elevated failed logins ({self.failed_logins})")
        if ip_count > UNUSUAL_LOCATION_IP_COUNT:
            anomalies.append(f"unusual location activity ({ip_count} distinct IPs)")
        if fail_ratio > HIGH_FAILURE_RATIO:
            anomalies.append("high failure rate")

        return UserProfile(
            username=self.username,
            total_activities=self.total_activities,
            failed_logins=self.failed_logins,
            successful_logins=self.successful_logins,
            source_ips=list(self.source_ips),
            first_seen=self.first_seen,
            last_seen=self.last_seen,
            risk_score=risk_score,
            anomalies=anomalies,
        )


class UserProfiler(BaseDetector):
    """Builds one UserProfile per distinct, case-insensitive username."""

    def __init__(self):
        super().__init__(
            name="user_profiling",
            description="Builds per-user behavior profiles"
        )

    def analyze(self, entries: Sequence[LogEntry]) -> List[UserProfile]:
        self.reset()
        profiles: Dict[str, _ProfileAccumulator] = {}

        for entry in entries:
            self.entries_analyzed += 1
            user = entry.user.strip()
            if not user:
                continue

            key = user.lower()
            if key not in profiles:
                profiles[key] = _ProfileAccumulator(entry.user)
            profiles[key].add(entry)

        result = [acc.build() for acc in profiles.values()]
        self.detection_count = sum(1 for p in result if p.anomalies)
        return result
