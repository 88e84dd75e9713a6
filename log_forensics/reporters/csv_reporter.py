"""
CSV Exporter

Exports the parsed entries of a run for spreadsheet analysis. Fields
containing commas, quotes or line breaks are quoted, with embedded quotes
doubled.
"""

import csv
import io

from .base_reporter import BaseReporter
from ..detectors.results import AnalysisResult

CSV_HEADERS = ['Timestamp', 'EventID', 'User', 'Source', 'IPAddress', 'Severity', 'Message']
MAX_MESSAGE_LENGTH = 1000


class CSVReporter(BaseReporter):
    """Exports log entries, one row per entry."""

    def __init__(self):
        super().__init__("Log Entries")

    def render(self, result: AnalysisResult) -> str:
        """Render entries as CSV; a run without entries yields an empty string."""
        if not result.entries:
            return ''

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
        writer.writerow(CSV_HEADERS)

        for entry in result.entries:
            writer.writerow([
                entry.timestamp,
                entry.event_id,
                entry.user,
                entry.source,
                entry.ip_address,
                entry.severity.value,
                entry.message[:MAX_MESSAGE_LENGTH],
            ])

        return buffer.getvalue()
