import logging
import os
from pathlib import Path

from .naming import find_invalid_names
from .report.analysis import ReportAnalysisResult, analyze_report
from .report.builder import FileProcessed, generate_report
from .report.codec import load_report, save_report
from .report.record import Report
from .report.reconcile import ReportComparisonResult, compare_reports
from .utils.processor import Processor
from .utils.walker import list_files

logger = logging.getLogger(__name__)


class ReportSession:
    """Workflow layer holding the current report between user actions.

    A session starts without a report. create() and open() replace the current report; save_as() and
    compare_with() require one. A failed create() or open() leaves the previously held report untouched, and so
    does a create() stopped by invalid file names.

    Contrast with the report package, which provides the individual operations without any state.
    """

    def __init__(self, processor: Processor):
        """Initialize an empty session.

        Args:
            processor: File processing backend computing fingerprints
        """
        self._processor = processor
        self._report: Report | None = None
        self._source: str | None = None

    @property
    def report(self) -> Report | None:
        return self._report

    @property
    def source(self) -> str | None:
        """Directory or report file the current report comes from."""
        return self._source

    def create(
            self,
            root: str | os.PathLike,
            check_names: bool = False,
            file_processed: FileProcessed | None = None) -> set[str]:
        """Build a report for a directory tree and make it current.

        Args:
            root: Directory to report
            check_names: Require every file name to be a valid book file name before anything is fingerprinted
            file_processed: Progress callback, see build_report()

        Returns:
            Normalized relative paths of files with invalid names. When not empty, no report was built.

        Raises:
            OSError: If the tree cannot be listed or a file cannot be read
        """
        root = Path(root)
        relative_paths = list_files(root)

        if check_names:
            invalid_names = find_invalid_names(relative_paths)
            if invalid_names:
                logger.warning(f"Found {len(invalid_names)} invalid file names under {root}, no report built")
                return invalid_names

        report = generate_report(self._processor, root, relative_paths, file_processed)

        self._report = report
        self._source = str(root)
        return set()

    def open(self, source: str | os.PathLike) -> None:
        """Load a saved report and make it current.

        Raises:
            OSError: If the file cannot be read
            FormatError: If the file is not a valid report
        """
        report = load_report(source)

        self._report = report
        self._source = str(source)

    def save_as(self, destination: str | os.PathLike, encoding: str | None = None) -> None:
        save_report(self._require_report(), destination, encoding)

    def analyze(self) -> ReportAnalysisResult:
        return analyze_report(self._require_report())

    def compare_with(self, old_report_source: str | os.PathLike) -> ReportComparisonResult:
        """Compare a saved older report with the current report.

        Raises:
            OSError: If the file cannot be read
            FormatError: If the file is not a valid report
        """
        current = self._require_report()
        return compare_reports(load_report(old_report_source), current)

    def _require_report(self) -> Report:
        if self._report is None:
            raise RuntimeError("No report. Create or open a report first.")
        return self._report
