#!/usr/bin/env python3
"""
Log Forensics Analyzer - Main CLI Entry Point

Parses security log files, detects brute force and log tampering activity,
and prints or saves a forensic report.

Usage:
    python analyzer.py <log_file_or_dir> [...] [options]
    python analyzer.py --demo

Examples:
    python analyzer.py /var/log/auth.log
    python analyzer.py security.log --output-format json --output result.json
    python analyzer.py logs/ --recursive --threshold 10
    python analyzer.py --demo --output-format csv
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from log_forensics import (
    AnalysisOptions,
    DetectionEngine,
    InvalidInputError,
    NoAccessibleFilesError,
    __version__,
)
from log_forensics.logging_setup import setup_logging
from log_forensics.reporters import CSVReporter, JSONReporter, TextReporter

STAGE_FLAGS = {
    'event-extraction': 'enable_event_extraction',
    'login-analysis': 'enable_login_analysis',
    'failed-login': 'enable_failed_login_detection',
    'brute-force': 'enable_brute_force_detection',
    'log-tampering': 'enable_log_tampering_detection',
    'user-profiling': 'enable_user_profiling',
    'timeline': 'enable_timeline_reconstruction',
}

LOG_EXTENSIONS = ['*.log', '*.txt']


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Log Forensics Analyzer - Detect threats in security log files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /var/log/auth.log                     Analyze a single log
  %(prog)s a.log b.log --output-format json      Export results as JSON
  %(prog)s logs/ --recursive                     Analyze all logs in directory
  %(prog)s --demo                                Run demo with sample logs

Detection capabilities:
  - Repeated failed logins
  - Brute force attacks correlated by source IP
  - Log tampering (cleared logs, event 1102)
  - User behavior profiling
  - Incident timeline reconstruction
        """
    )

    parser.add_argument(
        'inputs',
        nargs='*',
        help='Log files or directories to analyze'
    )

    parser.add_argument(
        '--demo',
        action='store_true',
        help='Run demo analysis with sample log files'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file path for report'
    )

    parser.add_argument(
        '--output-format',
        choices=['text', 'json', 'csv'],
        default='text',
        help='Report format (default: text)'
    )

    parser.add_argument(
        '--recursive', '-r',
        action='store_true',
        help='Recursively analyze logs in directories'
    )

    parser.add_argument(
        '--threshold',
        type=int,
        default=5,
        help='Failed attempts per IP before a brute force attack is reported (default: 5)'
    )

    parser.add_argument(
        '--window',
        type=int,
        default=300,
        help='Brute force correlation window in seconds (default: 300)'
    )

    parser.add_argument(
        '--disable',
        action='append',
        choices=sorted(STAGE_FLAGS),
        default=[],
        help='Disable an analysis stage (repeatable)'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress progress output'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show informational log messages on stderr'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Log Forensics Analyzer v{__version__}'
    )

    return parser.parse_args(argv)


def print_banner():
    """Print application banner."""
    print("\033[95m" + "=" * 80)
    print("  LOG FORENSICS ANALYZER".ljust(60) + f"v{__version__}".rjust(18))
    print("=" * 80 + "\033[0m")


def print_stage_stats(stats: Dict[str, Any]):
    """Print per-stage statistics of the last run."""
    print(f"\n\033[94m[*] Stage statistics ({stats['state']}):\033[0m", file=sys.stderr)
    for name, values in stats.items():
        if isinstance(values, dict):
            details = ', '.join(f"{key}={value}" for key, value in values.items()
                                if key not in ('detector_name', 'description'))
            print(f"    - {name}: {details}", file=sys.stderr)


def get_log_files(path: Path, recursive: bool = False) -> List[Path]:
    """Get list of log files from path."""
    if path.is_file():
        return [path]

    if path.is_dir():
        files = []
        for ext in LOG_EXTENSIONS:
            files.extend(path.rglob(ext) if recursive else path.glob(ext))
        return sorted(set(f for f in files if f.is_file()))

    # Let the engine report missing paths as per-file failures
    return [path]


def build_options(args: argparse.Namespace) -> AnalysisOptions:
    """Translate CLI flags into analysis options."""
    disabled = {STAGE_FLAGS[name]: False for name in args.disable}
    return AnalysisOptions(
        brute_force_threshold=args.threshold,
        brute_force_window_seconds=args.window,
        **disabled
    )


def run(log_files: List[Path], args: argparse.Namespace) -> int:
    """Run analysis on log files and emit the report."""
    if not args.quiet:
        print(f"\033[94m[*] Analyzing {len(log_files)} log file(s)...\033[0m\n", file=sys.stderr)

    engine = DetectionEngine(build_options(args))
    try:
        result = engine.analyze(log_files)
    except (InvalidInputError, NoAccessibleFilesError) as e:
        print(f"\033[91mError: {e}\033[0m", file=sys.stderr)
        return 1

    if args.output_format == 'json':
        reporter = JSONReporter()
    elif args.output_format == 'csv':
        reporter = CSVReporter()
    else:
        reporter = TextReporter(use_colors=not args.no_color and not args.output)

    output_path = Path(args.output) if args.output else None
    report = reporter.generate(result, output_path)

    if not output_path:
        print(report)

    if not args.quiet:
        print(f"\n\033[94m[*] Analysis complete.\033[0m", file=sys.stderr)
        print(f"    - Entries analyzed: {result.total_entries_parsed:,}", file=sys.stderr)
        print(f"    - Threats detected: {result.detection_summary.total_threats}", file=sys.stderr)
        for failure in result.failed_files:
            print(f"    - Skipped {failure.path}: {failure.error}", file=sys.stderr)
        if output_path:
            print(f"    - Report saved to: {output_path}", file=sys.stderr)

    if args.verbose:
        print_stage_stats(engine.get_stats())

    # Return non-zero if critical threats found
    return 1 if result.critical_threat_count > 0 else 0


def run_demo(args: argparse.Namespace) -> int:
    """Run demo analysis with sample logs."""
    sample_dir = Path(__file__).parent / 'sample_logs'
    log_files = get_log_files(sample_dir) if sample_dir.is_dir() else []

    if not log_files:
        print("\033[91mError: No sample log files found in sample_logs/.\033[0m", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"\033[92m[+] Found {len(log_files)} sample log files:\033[0m", file=sys.stderr)
        for f in log_files:
            print(f"    - {f.name}", file=sys.stderr)

    return run(log_files, args)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if not args.quiet and args.output_format == 'text' and not args.output:
        print_banner()

    if args.demo:
        return run_demo(args)

    if not args.inputs:
        print("\033[91mError: No input file specified. Use --demo for demo mode.\033[0m", file=sys.stderr)
        print("Run with --help for usage information.", file=sys.stderr)
        return 1

    log_files: List[Path] = []
    for value in args.inputs:
        log_files.extend(get_log_files(Path(value), args.recursive))

    return run(log_files, args)


if __name__ == '__main__':
    sys.exit(main())
