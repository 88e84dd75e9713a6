"""
Threat Detectors Module

Provides the analysis stages run over the parsed entries of a batch:
- Failed login and log tampering threat rules
- Brute force correlation by source IP
- User behavior profiling
- Incident timeline reconstruction
"""

from .base_detector import BaseDetector, Threat, ThreatType, ThreatSeverity
from .threat_detector import ThreatDetector, FailedLoginDetector, LogTamperingDetector
from .brute_force_detector import BruteForceDetector, BruteForceAttack
from .user_profiler import UserProfiler, UserProfile
from .timeline_builder import TimelineBuilder, Timeline, TimelineEvent
from .results import AnalysisResult, DetectionSummary, EventStatistics
from .detection_engine import DetectionEngine, RunState, run_analysis

__all__ = [
    'BaseDetector',
    'Threat',
    'ThreatType',
    'ThreatSeverity',
    'ThreatDetector',
    'FailedLoginDetector',
    'LogTamperingDetector',
    'BruteForceDetector',
    'BruteForceAttack',
    'UserProfiler',
    'UserProfile',
    'TimelineBuilder',
    'Timeline',
    'TimelineEvent',
    'AnalysisResult',
    'DetectionSummary',
    'EventStatistics',
    'DetectionEngine',
    'RunState',
    'run_analysis',
]
