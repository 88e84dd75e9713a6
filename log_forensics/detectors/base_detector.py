"""
Base Detector Module

Provides the abstract base class for all analysis stages and the
standardized Threat dataclass for consistent threat reporting.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Any, Sequence

from ..parsers.base_parser import LogEntry


class ThreatType(Enum):
    """Rule families that can raise a threat."""
    BRUTE_FORCE = "BRUTE_FORCE"
    LOG_TAMPERING = "LOG_TAMPERING"

    def __str__(self):
        return self.value


class ThreatSeverity(Enum):
    """
    Threat severity levels.

    - CRITICAL: Immediate action required
    - WARNING: Suspicious, should be reviewed
    """
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"

    def __str__(self):
        return self.value


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a score into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class Threat:
    """
    A detected security issue summarizing one or more log entries.

    Attributes:
        threat_type: Rule family that fired
        severity: Severity of the threat
        description: Human-readable description
        source: Origin of the activity (IP address or component)
        target: Affected account or resource
        timestamp: Timestamp of the first related entry
        confidence_score: Confidence in [0, 1]
        recommendation: Suggested remediation
        related_entries: Number of entries supporting the threat
    """
    threat_type: ThreatType
    severity: ThreatSeverity
    description: str
    source: str
    target: str
    timestamp: str
    confidence_score: float
    recommendation: str
    related_entries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert threat to dictionary for serialization."""
        return {
            'type': self.threat_type.value,
            'severity': self.severity.value,
            'description': self.description,
            'source': self.source,
            'target': self.target,
            'timestamp': self.timestamp,
            'confidence_score': self.confidence_score,
            'recommendation': self.recommendation,
            'related_entries': self.related_entries,
        }


class BaseDetector(ABC):
    """
    Abstract base class for analysis stages.

    Every stage reads the full entry collection of one run and returns
    derived records; entries are never modified. A detector instance
    belongs to a single run.
    """

    def __init__(self, name: str, description: str):
        """
        Initialize the detector.

        Args:
            name: Unique identifier for the detector
            description: Human-readable description of what the detector finds
        """
        self.name = name
        self.description = description
        self.entries_analyzed = 0
        self.detection_count = 0
        self.logger = logging.getLogger(f"{__name__.rsplit('.', 1)[0]}.{name}")

    @abstractmethod
    def analyze(self, entries: Sequence[LogEntry]) -> List[Any]:
        """
        Analyze log entries.

        Args:
            entries: All parsed entries of the run

        Returns:
            List of derived records
        """
        pass

    def reset(self):
        """Reset detector state for new analysis."""
        self.entries_analyzed = 0
        self.detection_count = 0

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detection statistics.

        Returns:
            Dictionary containing detection metrics
        """
        return {
            'detector_name': self.name,
            'description': self.description,
            'entries_analyzed': self.entries_analyzed,
            'detections': self.detection_count,
        }
