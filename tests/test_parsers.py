"""
Unit tests for the line parser and file ingestor.
"""

import unittest
import tempfile
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from log_forensics.errors import (
    FileAccessError, InvalidInputError, LineParseError, NoAccessibleFilesError
)
from log_forensics.parsers.base_parser import Severity
from log_forensics.parsers.line_parser import LineParser, FieldMatch, classify_severity
from log_forensics.parsers.file_ingestor import FileIngestor, validate_paths


class TestLineParser(unittest.TestCase):
    """Tests for the generic line parser."""

    def setUp(self):
        self.parser = LineParser()

    def test_parse_failed_login(self):
        """Test extraction of all fields from a typical line."""
        line = '2024-01-15 10:23:45 ERROR Failed login for user=admin from 10.0.0.5'
        entry = self.parser.parse_line(line, 7)

        self.assertIsNotNone(entry)
        self.assertEqual(entry.line_number, 7)
        self.assertEqual(entry.timestamp, "2024-01-15 10:23:45")
        self.assertEqual(entry.ip_address, "10.0.0.5")
        self.assertEqual(entry.user, "admin")
        self.assertEqual(entry.event_id, 0)
        self.assertEqual(entry.severity, Severity.ERROR)
        self.assertEqual(entry.message, line)

    def test_parse_iso_timestamp_and_event_id(self):
        """Test T-separated timestamps and event ids."""
        entry = self.parser.parse_line('2024-01-15T11:47:12 EventID: 1102 The audit log was cleared', 1)

        self.assertEqual(entry.timestamp, "2024-01-15T11:47:12")
        self.assertEqual(entry.event_id, 1102)
        self.assertEqual(entry.ip_address, "")
        self.assertEqual(entry.user, "")
        self.assertEqual(entry.severity, Severity.NORMAL)

    def test_event_id_variants(self):
        """Test 'Event ID' with a space and case-insensitive matching."""
        entry = self.parser.parse_line('event id=4625 logon attempt', 1)
        self.assertEqual(entry.event_id, 4625)

    def test_user_variants(self):
        """Test username, account and quoted user values."""
        self.assertEqual(self.parser.parse_line('username="bob" logged in', 1).user, "bob")
        self.assertEqual(self.parser.parse_line('Account: svc_backup changed', 1).user, "svc_backup")
        self.assertEqual(self.parser.parse_line('Failed password for USER root', 1).user, "root")

    def test_missing_fields(self):
        """Test that absent fields fall back to empty values."""
        entry = self.parser.parse_line('service restarted', 3)

        self.assertEqual(entry.timestamp, "")
        self.assertEqual(entry.ip_address, "")
        self.assertEqual(entry.user, "")
        self.assertEqual(entry.event_id, 0)
        self.assertEqual(entry.severity, Severity.NORMAL)

    def test_blank_line(self):
        """Test that blank and whitespace-only lines yield nothing."""
        self.assertIsNone(self.parser.parse_line('', 1))
        self.assertIsNone(self.parser.parse_line('   \t  ', 2))

    def test_truncation(self):
        """Test message and raw content limits."""
        line = '  ' + 'x' * 1200
        entry = self.parser.parse_line(line, 1)

        self.assertEqual(len(entry.message), 500)
        self.assertEqual(len(entry.raw_content), 1000)
        self.assertTrue(entry.raw_content.startswith('  '))
        self.assertFalse(entry.message.startswith(' '))

    def test_event_extraction_disabled(self):
        """Test that event ids stay 0 when extraction is off."""
        parser = LineParser(extract_event_ids=False)
        entry = parser.parse_line('EventID=1102 log cleared', 1)
        self.assertEqual(entry.event_id, 0)

    def test_non_text_line(self):
        """Test that non-string input raises a line parse error."""
        with self.assertRaises(LineParseError):
            self.parser.parse_line(None, 4)

    def test_field_match(self):
        """Test explicit found/not found results."""
        found = FieldMatch.search(LineParser.IP_PATTERN, 'from 1.2.3.4 port 22')
        missing = FieldMatch.search(LineParser.IP_PATTERN, 'no address here')

        self.assertTrue(found.found)
        self.assertEqual(found.value, '1.2.3.4')
        self.assertFalse(missing.found)
        self.assertEqual(missing.value, '')


class TestSeverityClassification(unittest.TestCase):
    """Tests for keyword severity classification."""

    def test_each_level(self):
        """Test the keyword set for every level."""
        self.assertEqual(classify_severity('EMERGENCY shutdown'), Severity.CRITICAL)
        self.assertEqual(classify_severity('Alert raised'), Severity.CRITICAL)
        self.assertEqual(classify_severity('disk error'), Severity.ERROR)
        self.assertEqual(classify_severity('login FAILED'), Severity.ERROR)
        self.assertEqual(classify_severity('Warning: low disk'), Severity.WARNING)
        self.assertEqual(classify_severity('informational notice'), Severity.INFO)
        self.assertEqual(classify_severity('user logged out'), Severity.NORMAL)

    def test_priority_order(self):
        """Test that the highest priority keyword wins."""
        self.assertEqual(classify_severity('info: critical error warning'), Severity.CRITICAL)
        self.assertEqual(classify_severity('warning: an error occurred'), Severity.ERROR)
        self.assertEqual(classify_severity('info: disk warning'), Severity.WARNING)

    def test_deterministic(self):
        """Test that repeated classification gives the same answer."""
        message = 'Failed logon, see information in event log'
        results = {classify_severity(message) for _ in range(10)}
        self.assertEqual(results, {Severity.ERROR})


class TestFileIngestor(unittest.TestCase):
    """Tests for file ingestion."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp_path = Path(self._tmp.name)
        self.ingestor = FileIngestor()

    def _write(self, name: str, content: str, newline: str = '\n') -> Path:
        path = self.tmp_path / name
        with open(path, 'w', encoding='utf-8', newline=newline) as f:
            f.write(content)
        return path

    def test_ingest_file(self):
        """Test line numbering across blank lines."""
        path = self._write('app.log', 'first line\n\nthird line from 10.1.1.1\n')
        entries = self.ingestor.ingest_file(path)

        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[0].line_number, 1)
        self.assertEqual(entries[1].line_number, 3)
        self.assertEqual(entries[1].ip_address, '10.1.1.1')
        self.assertEqual(entries[1].source, 'app.log')

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        path = self._write('win.log', 'one\ntwo\n', newline='\r\n')
        entries = self.ingestor.ingest_file(path)

        self.assertEqual([e.message for e in entries], ['one', 'two'])
        self.assertFalse(entries[0].raw_content.endswith('\r'))

    def test_empty_file(self):
        """Test that an empty file is a success with no entries."""
        path = self._write('empty.log', '')
        self.assertEqual(self.ingestor.ingest_file(path), [])

    def test_missing_file(self):
        """Test that a missing file raises a file access error."""
        with self.assertRaises(FileAccessError):
            self.ingestor.ingest_file(self.tmp_path / 'missing.log')

    def test_directory_is_not_a_file(self):
        """Test that directories are rejected."""
        with self.assertRaises(FileAccessError):
            self.ingestor.ingest_file(self.tmp_path)

    def test_line_errors_are_skipped(self):
        """Test that a failing line is logged and skipped."""

        class FlakyParser(LineParser):
            def parse_line(self, line, line_number, source=""):
                if 'bad' in line:
                    raise ValueError("unparseable")
                return super().parse_line(line, line_number, source)

        path = self._write('mixed.log', 'good one\nbad line\ngood two\n')
        ingestor = FileIngestor(FlakyParser())

        with self.assertLogs('log_forensics', level='WARNING') as logs:
            entries = ingestor.ingest_file(path)

        self.assertEqual([e.line_number for e in entries], [1, 3])
        self.assertEqual(len(ingestor.parser.parse_errors), 1)
        self.assertEqual(ingestor.parser.parse_errors[0]['line_number'], 2)
        self.assertTrue(any('unparseable' in message for message in logs.output))

    def test_batch_with_failures(self):
        """Test that one missing file does not stop the batch."""
        good = self._write('good.log', 'Failed login from 10.0.0.5\n')
        missing = self.tmp_path / 'missing.log'

        result = self.ingestor.ingest([missing, good])

        self.assertEqual(len(result.entries), 1)
        self.assertEqual(result.processed_files, [str(good)])
        self.assertEqual(len(result.failed_files), 1)
        self.assertEqual(result.failed_files[0].path, str(missing))
        self.assertEqual(result.failed_files[0].error, 'File does not exist')

    def test_none_path_recorded_as_none(self):
        """Test that a None entry is kept as None rather than the text 'None'."""
        good = self._write('good.log', 'alpha\n')

        result = self.ingestor.ingest([None, good])

        self.assertEqual(len(result.failed_files), 1)
        self.assertIsNone(result.failed_files[0].path)
        self.assertEqual(result.failed_files[0].error, 'Invalid file path type')
        self.assertEqual(result.failed_files[0].to_dict(), {'path': None, 'error': 'Invalid file path type'})

    def test_parse_error_count(self):
        """Test that skipped lines are totalled across the batch."""

        class FlakyParser(LineParser):
            def parse_line(self, line, line_number, source=""):
                if 'bad' in line:
                    raise ValueError("unparseable")
                return super().parse_line(line, line_number, source)

        a = self._write('a.log', 'bad one\ngood\n')
        b = self._write('b.log', 'bad two\nbad three\n')

        with self.assertLogs('log_forensics', level='WARNING'):
            result = FileIngestor(FlakyParser()).ingest([a, b])

        self.assertEqual(len(result.entries), 1)
        self.assertEqual(result.parse_errors, 3)

    def test_batch_order(self):
        """Test that files are processed in input order."""
        a = self._write('a.log', 'alpha\n')
        b = self._write('b.log', 'beta\n')

        result = self.ingestor.ingest([b, a])
        self.assertEqual([e.message for e in result.entries], ['beta', 'alpha'])


class TestValidatePaths(unittest.TestCase):
    """Tests for batch input validation."""

    def test_empty_list(self):
        with self.assertRaises(InvalidInputError):
            validate_paths([])

    def test_not_a_list(self):
        with self.assertRaises(InvalidInputError):
            validate_paths('/var/log/auth.log')
        with self.assertRaises(InvalidInputError):
            validate_paths(None)

    def test_nothing_accessible(self):
        with self.assertRaises(NoAccessibleFilesError):
            validate_paths(['/nonexistent/one.log', '/nonexistent/two.log'])

    def test_invalid_entries_with_one_valid(self):
        with tempfile.NamedTemporaryFile(suffix='.log') as f:
            paths = validate_paths([None, f.name])
            self.assertEqual(paths, [None, f.name])


if __name__ == '__main__':
    unittest.main()
