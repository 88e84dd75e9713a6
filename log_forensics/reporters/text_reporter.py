"""
Text Report Generator

Generates the fixed-format forensic summary report, with optional ANSI
color for terminal display.
"""

import re
from datetime import datetime
from typing import List

from .base_reporter import BaseReporter
from ..detectors.results import AnalysisResult

RULE_LINE = "=" * 80
DIVIDER_LINE = "-" * 80
ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


class TextReporter(BaseReporter):
    """
    Generates plain-text forensic reports.

    Features:
    - Executive summary of files, entries and threats
    - Risk score as a percentage
    - Numbered recommendations
    - Optional ANSI colors when printed to a terminal
    """

    # ANSI color codes
    COLORS = {
        'CRITICAL': '\033[91m',  # Red
        'WARNING': '\033[93m',   # Yellow
        'OK': '\033[92m',        # Green
        'RESET': '\033[0m',
        'BOLD': '\033[1m',
        'HEADER': '\033[95m',    # Magenta
    }

    def __init__(self, title: str = "LOG FORENSICS ANALYZER - FORENSIC REPORT", use_colors: bool = False):
        """
        Initialize text reporter.

        Args:
            title: Report title
            use_colors: Enable ANSI color output
        """
        super().__init__(title)
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors enabled."""
        if not self.use_colors:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['RESET']}"

    def render(self, result: AnalysisResult) -> str:
        """Render the text report."""
        lines = [""]
        lines.extend(self._generate_header(result))
        lines.extend(self._generate_summary(result))
        lines.extend(self._generate_recommendations(result))
        lines.extend(self._generate_footer())
        return '\n'.join(lines)

    def _generate_header(self, result: AnalysisResult) -> List[str]:
        return [
            self._color(RULE_LINE, 'HEADER'),
            self._color(self.title.center(80).rstrip(), 'BOLD'),
            self._color(RULE_LINE, 'HEADER'),
            "",
            f"Analysis ID: {result.analysis_id or 'N/A'}",
            f"Generated:   {datetime.now().isoformat()}",
            f"Duration:    {result.processing_time_ms} ms",
        ]

    def _generate_summary(self, result: AnalysisResult) -> List[str]:
        stats = result.statistics
        detection = result.detection_summary
        risk_pct = detection.overall_risk_score * 100
        risk_color = 'CRITICAL' if risk_pct >= 50 else ('WARNING' if risk_pct > 0 else 'OK')

        return [
            DIVIDER_LINE,
            "EXECUTIVE SUMMARY".center(80).rstrip(),
            DIVIDER_LINE,
            "",
            f"Files Analyzed:     {result.total_files_analyzed}",
            f"Successful:         {result.successful_files}",
            f"Failed:             {len(result.failed_files)}",
            f"Total Entries:      {result.total_entries_parsed}",
            f"Parse Errors:       {stats.parse_errors}",
            f"Normal Events:      {stats.normal_events}",
            f"Warning Events:     {stats.warning_events}",
            f"Critical Events:    {stats.critical_events}",
            f"Threats Detected:   {detection.total_threats}",
            f"Critical Threats:   {detection.critical_threats}",
            f"Risk Score:         {self._color(f'{risk_pct:.1f}%', risk_color)}",
        ]

    def _generate_recommendations(self, result: AnalysisResult) -> List[str]:
        lines = [
            DIVIDER_LINE,
            "RECOMMENDATIONS".center(80).rstrip(),
            DIVIDER_LINE,
            "",
        ]

        if result.recommendations:
            for i, rec in enumerate(result.recommendations, 1):
                lines.append(f"{i}. {rec}")
        else:
            lines.append("(No specific recommendations)")

        lines.append("")
        return lines

    def _generate_footer(self) -> List[str]:
        return [
            self._color(RULE_LINE, 'HEADER'),
            "END OF REPORT".center(80).rstrip(),
            self._color(RULE_LINE, 'HEADER'),
            "",
        ]

    def _file_content(self, report: str) -> str:
        # Remove color codes for file output
        return ANSI_ESCAPE.sub('', report)
