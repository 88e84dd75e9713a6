"""
Detection Engine

Orchestrates one analysis run: validates the input batch, ingests every
file, runs the enabled detection stages over the combined entries, and
assembles the AnalysisResult.

A run moves through Idle -> Running -> Completed (or PartiallyFailed when
some files could not be read). Input errors are raised before Running;
once running, per-file problems are recorded on the result instead of
being raised.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Union

from .base_detector import Threat, ThreatType
from .brute_force_detector import BruteForceAttack, BruteForceDetector
from .results import AnalysisResult, DetectionSummary, EventStatistics
from .threat_detector import ThreatDetector
from .timeline_builder import Timeline, TimelineBuilder
from .user_profiler import UserProfile, UserProfiler
from ..config import AnalysisOptions
from ..parsers.base_parser import LogEntry
from ..parsers.file_ingestor import FileIngestor, validate_paths
from ..parsers.line_parser import LineParser

logger = logging.getLogger(__name__)

# Risk contribution per threat severity, scaled by confidence
SEVERITY_RISK_WEIGHTS = {
    'CRITICAL': 0.3,
    'ALERT': 0.3,
    'WARNING': 0.15,
    'INFO': 0.05,
}
UNWEIGHTED_RISK = 0.02

BRUTE_FORCE_RECOMMENDATIONS = (
    'Block source IPs involved in brute-force attacks',
    'Implement or enforce account lockout policies',
    'Enable multi-factor authentication (MFA)',
    'Review and harden password policies',
)
TAMPERING_RECOMMENDATIONS = (
    'CRITICAL: Preserve all remaining log evidence',
    'Implement centralized log forwarding (syslog, CEF)',
    'Enable file integrity monitoring (FIM)',
    'Investigate system access immediately',
)
AUTHENTICATION_RECOMMENDATION = 'Review and strengthen authentication mechanisms'
NO_ISSUES_RECOMMENDATION = 'No critical issues detected - maintain current security monitoring'


class RunState(Enum):
    """Lifecycle of an analysis run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    PARTIALLY_FAILED = "partially_failed"


def calculate_risk_score(threats: Sequence[Threat]) -> float:
    """
    Combine threats into an overall risk score.

    Each threat adds a severity weight times its confidence; severities
    without a weight add a flat 0.02. The sum is clamped to [0, 1].

    Args:
        threats: Threats detected in the run

    Returns:
        Risk score in [0, 1]
    """
    score = 0.0
    for threat in threats:
        weight = SEVERITY_RISK_WEIGHTS.get(threat.severity.value.upper())
        if weight is None:
            score += UNWEIGHTED_RISK
        else:
            score += weight * threat.confidence_score
    return max(0.0, min(1.0, score))


def generate_recommendations(
    threats: Sequence[Threat],
    attacks: Sequence[BruteForceAttack]
) -> List[str]:
    """
    Derive remediation advice from what the run found.

    Args:
        threats: Threats detected in the run
        attacks: Correlated brute force attacks

    Returns:
        Ordered list of recommendation lines, never empty
    """
    recommendations: List[str] = []

    if attacks:
        recommendations.extend(BRUTE_FORCE_RECOMMENDATIONS)

    if any(t.threat_type == ThreatType.LOG_TAMPERING for t in threats):
        recommendations.extend(TAMPERING_RECOMMENDATIONS)

    if any(t.threat_type == ThreatType.BRUTE_FORCE for t in threats) and not attacks:
        recommendations.append(AUTHENTICATION_RECOMMENDATION)

    if not recommendations:
        recommendations.append(NO_ISSUES_RECOMMENDATION)

    return recommendations


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DetectionEngine:
    """
    Central engine that coordinates one analysis run.

    Each engine owns its entry collection and detector instances, so
    separate engines can analyze different batches concurrently.
    """

    def __init__(self, options: Optional[AnalysisOptions] = None):
        """
        Initialize detection engine.

        Args:
            options: Run options (defaults enable every stage)
        """
        if options is not None and not isinstance(options, AnalysisOptions):
            options = AnalysisOptions.from_dict(options)
        self.options = options or AnalysisOptions()
        self.state = RunState.IDLE

        self.parser = LineParser(extract_event_ids=self.options.enable_event_extraction)
        self.ingestor = FileIngestor(self.parser)
        self.threat_detector = ThreatDetector(self.options)
        self.brute_force_detector = BruteForceDetector(self.options)
        self.user_profiler = UserProfiler()
        self.timeline_builder = TimelineBuilder()

        self.entries: List[LogEntry] = []
        self.result: Optional[AnalysisResult] = None

    def analyze(self, file_paths: Sequence[Union[str, Path]]) -> AnalysisResult:
        """
        Run the full pipeline over a batch of log files.

        Args:
            file_paths: Log files to analyze, processed in order

        Returns:
            AnalysisResult for the run

        Raises:
            InvalidInputError: If file_paths is empty or not a list
            NoAccessibleFilesError: If no path names an existing file
        """
        paths = validate_paths(file_paths)

        self.state = RunState.RUNNING
        start_clock = time.monotonic()
        start_time = _iso_now()
        analysis_id = f"LFA-{uuid.uuid4().hex[:8]}-{int(time.time() * 1000)}"
        logger.info("Analysis %s started for %d file(s)", analysis_id, len(paths))

        ingestion = self.ingestor.ingest(paths)
        self.entries = ingestion.entries

        threats: List[Threat] = []
        attacks: List[BruteForceAttack] = []
        profiles: List[UserProfile] = []
        timeline: Optional[Timeline] = None

        if self.entries:
            threats = self._run_stage('threat detection', self.threat_detector.analyze)
            if self.options.enable_user_profiling:
                profiles = self._run_stage('user profiling', self.user_profiler.analyze)
            if self.options.enable_brute_force_detection:
                attacks = self._run_stage('brute force correlation', self.brute_force_detector.analyze)

        if self.options.enable_timeline_reconstruction:
            timeline = self.timeline_builder.build(self.entries)

        risk_score = calculate_risk_score(threats)
        failed = ingestion.failed_files

        self.result = AnalysisResult(
            analysis_id=analysis_id,
            success=len(ingestion.processed_files) > 0,
            error_message=f"{len(failed)} file(s) could not be processed" if failed else '',
            start_time=start_time,
            end_time=_iso_now(),
            processing_time_ms=int((time.monotonic() - start_clock) * 1000),
            total_files_analyzed=len(paths),
            successful_files=len(ingestion.processed_files),
            failed_files=list(failed),
            total_entries_parsed=len(self.entries),
            statistics=EventStatistics.from_entries(self.entries, ingestion.parse_errors),
            detection_summary=DetectionSummary.from_threats(threats, risk_score),
            brute_force_attacks=attacks,
            threats=threats,
            user_profiles=profiles,
            timeline=timeline,
            recommendations=generate_recommendations(threats, attacks),
            options=self.options,
            entries=list(self.entries),
        )

        self.state = RunState.PARTIALLY_FAILED if failed else RunState.COMPLETED
        logger.info(
            "Analysis %s %s: %d entries, %d threat(s), %d attack(s), risk %.2f",
            analysis_id, self.state.value, len(self.entries),
            len(threats), len(attacks), risk_score
        )
        return self.result

    def _run_stage(self, name: str, stage) -> List[Any]:
        """Run one detection stage; a failing stage contributes nothing."""
        try:
            return stage(self.entries)
        except Exception:
            logger.exception("Stage %s failed", name)
            return []

    def get_stats(self) -> Dict[str, Any]:
        """Get per-stage statistics from the last run."""
        stats = {
            'state': self.state.value,
            'parser': self.parser.get_stats(),
            'brute_force': self.brute_force_detector.get_stats(),
            'user_profiling': self.user_profiler.get_stats(),
            'timeline': self.timeline_builder.get_stats(),
        }
        for detector in self.threat_detector.detectors:
            stats[detector.name] = detector.get_stats()
        return stats


def run_analysis(
    file_paths: Sequence[Union[str, Path]],
    options: Optional[AnalysisOptions] = None
) -> AnalysisResult:
    """
    Analyze a batch of log files with a fresh engine.

    Args:
        file_paths: Log files to analyze
        options: Run options, an AnalysisOptions or a plain mapping

    Returns:
        AnalysisResult for the run
    """
    return DetectionEngine(options).analyze(file_paths)
