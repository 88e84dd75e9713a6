"""
JSON Exporter

Serializes an AnalysisResult for external consumers. Output contains only
plain JSON values: sets become lists and non-finite numbers become null.
"""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any

from .base_reporter import BaseReporter
from ..detectors.results import AnalysisResult

logger = logging.getLogger(__name__)


def to_json_safe(value: Any) -> Any:
    """
    Normalize a value into JSON-compatible data.

    Args:
        value: Any nested structure of dicts, lists, sets and scalars

    Returns:
        Equivalent structure using only JSON-native types
    """
    if isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return [to_json_safe(v) for v in sorted(value, key=str)]
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class JSONReporter(BaseReporter):
    """Exports the full analysis result as indented JSON."""

    def __init__(self, indent: int = 2):
        super().__init__("Analysis Result")
        self.indent = indent

    def render(self, result: AnalysisResult) -> str:
        try:
            return json.dumps(to_json_safe(result.to_dict()), indent=self.indent, allow_nan=False)
        except (TypeError, ValueError) as e:
            logger.error("JSON serialization error for %s: %s", result.analysis_id, e)
            return json.dumps({
                'error': 'Failed to serialize analysis results',
                'analysis_id': result.analysis_id,
                'timestamp': datetime.now(timezone.utc).isoformat(),
            }, indent=self.indent)
