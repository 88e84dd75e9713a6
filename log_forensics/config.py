"""
Analysis Configuration

Explicit, fully enumerated options for one analysis run. Defaults and
floors are applied at construction so downstream components never see an
out-of-range threshold.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional


DEFAULT_BRUTE_FORCE_THRESHOLD = 5
DEFAULT_BRUTE_FORCE_WINDOW_SECONDS = 300
MIN_BRUTE_FORCE_THRESHOLD = 1
MIN_BRUTE_FORCE_WINDOW_SECONDS = 60

# Maps the camelCase keys used by upload forms onto option fields
_CAMEL_CASE_KEYS = {
    'enableBasicParsing': 'enable_basic_parsing',
    'enableEventExtraction': 'enable_event_extraction',
    'enableLoginAnalysis': 'enable_login_analysis',
    'enableFailedLoginDetection': 'enable_failed_login_detection',
    'enableBruteForceDetection': 'enable_brute_force_detection',
    'enableLogTamperingDetection': 'enable_log_tampering_detection',
    'enableCrossCorrelation': 'enable_cross_correlation',
    'enableUserProfiling': 'enable_user_profiling',
    'enableTimelineReconstruction': 'enable_timeline_reconstruction',
    'bruteForceThreshold': 'brute_force_threshold',
    'bruteForceWindowSeconds': 'brute_force_window_seconds',
}


def _coerce_int(value: Any, default: int, minimum: int) -> int:
    """Parse an integer option, falling back to the default and applying a floor."""
    if isinstance(value, bool):
        value = None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = 0
    # Zero behaves like "not set", matching form submissions with empty fields
    if not parsed:
        parsed = default
    return max(minimum, parsed)


@dataclass(frozen=True)
class AnalysisOptions:
    """
    Options controlling which pipeline stages run.

    Attributes:
        enable_basic_parsing: Accepted for compatibility; parsing always runs
        enable_event_extraction: Extract numeric event ids from lines
        enable_login_analysis: Master switch for the failed-login rule
        enable_failed_login_detection: Failed-login threat rule
        enable_brute_force_detection: Per-IP brute-force correlation
        enable_log_tampering_detection: Log-tampering threat rule
        enable_cross_correlation: Accepted for compatibility
        enable_user_profiling: Build per-user profiles
        enable_timeline_reconstruction: Build the incident timeline
        brute_force_threshold: Failed attempts per IP before an attack is
            reported (floored at 1)
        brute_force_window_seconds: Intended correlation window (floored
            at 60); recorded but not applied to grouping
    """
    enable_basic_parsing: bool = True
    enable_event_extraction: bool = True
    enable_login_analysis: bool = True
    enable_failed_login_detection: bool = True
    enable_brute_force_detection: bool = True
    enable_log_tampering_detection: bool = True
    enable_cross_correlation: bool = True
    enable_user_profiling: bool = True
    enable_timeline_reconstruction: bool = True
    brute_force_threshold: int = DEFAULT_BRUTE_FORCE_THRESHOLD
    brute_force_window_seconds: int = DEFAULT_BRUTE_FORCE_WINDOW_SECONDS

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'brute_force_threshold', _coerce_int(
            self.brute_force_threshold,
            DEFAULT_BRUTE_FORCE_THRESHOLD,
            MIN_BRUTE_FORCE_THRESHOLD,
        ))
        object.__setattr__(self, 'brute_force_window_seconds', _coerce_int(
            self.brute_force_window_seconds,
            DEFAULT_BRUTE_FORCE_WINDOW_SECONDS,
            MIN_BRUTE_FORCE_WINDOW_SECONDS,
        ))
        for f in fields(self):
            if f.name.startswith('enable_'):
                object.__setattr__(self, f.name, getattr(self, f.name) is not False)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'AnalysisOptions':
        """
        Build options from a plain mapping.

        Accepts both snake_case field names and the camelCase keys sent by
        upload forms. Unknown keys are ignored; a non-mapping yields defaults.
        """
        if not isinstance(data, Mapping):
            return cls()

        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to dictionary for serialization."""
        return asdict(self)
