"""
Report Generation Module

Provides output formats for analysis results:
- Text reports for terminal display
- JSON export for integration
- CSV export of parsed entries for spreadsheet analysis
"""

from .base_reporter import BaseReporter
from .text_reporter import TextReporter
from .json_reporter import JSONReporter, to_json_safe
from .csv_reporter import CSVReporter

__all__ = [
    'BaseReporter',
    'TextReporter',
    'JSONReporter',
    'CSVReporter',
    'to_json_safe',
]
