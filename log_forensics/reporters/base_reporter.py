"""
Base Reporter Module

Provides abstract base class for report generators and exporters.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..detectors.results import AnalysisResult


class BaseReporter(ABC):
    """
    Abstract base class for report generators.

    All report formats must inherit from this class and implement
    the required abstract methods.
    """

    def __init__(self, title: str = "Security Log Analysis Report"):
        """
        Initialize reporter.

        Args:
            title: Report title
        """
        self.title = title
        self.generated_at = datetime.now()

    @abstractmethod
    def render(self, result: AnalysisResult) -> str:
        """
        Render the result in this reporter's format.

        Args:
            result: Completed analysis result

        Returns:
            Report content as string
        """
        pass

    def generate(self, result: AnalysisResult, output_path: Optional[Path] = None) -> str:
        """
        Generate the report, saving it when a path is given.

        Args:
            result: Completed analysis result
            output_path: Optional file path to save report

        Returns:
            Report content as string
        """
        report = self.render(result)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8', newline='') as f:
                f.write(self._file_content(report))

        return report

    def _file_content(self, report: str) -> str:
        """Content written to disk; subclasses may strip display-only markup."""
        return report
