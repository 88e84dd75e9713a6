"""
Log Forensics Analyzer - heuristic threat detection for security log files.

This package parses unstructured log lines into structured entries, detects
brute force and log tampering activity, profiles user behavior, rebuilds an
incident timeline, and exports the results as JSON, CSV, or a text report.
"""

from .config import AnalysisOptions
from .detectors.detection_engine import DetectionEngine, run_analysis
from .detectors.results import AnalysisResult
from .errors import (
    LogAnalyzerError,
    InvalidInputError,
    NoAccessibleFilesError,
    FileAccessError,
    LineParseError,
)

__version__ = "1.0.0"
__author__ = "Security Research Team"

__all__ = [
    'AnalysisOptions',
    'AnalysisResult',
    'DetectionEngine',
    'run_analysis',
    'LogAnalyzerError',
    'InvalidInputError',
    'NoAccessibleFilesError',
    'FileAccessError',
    'LineParseError',
]
