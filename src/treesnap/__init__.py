from .naming import is_valid_book_file_name, find_invalid_names
from .report.analysis import ReportAnalysisResult, analyze_report
from .report.builder import build_report, generate_report
from .report.codec import FormatError, load_report, save_report
from .report.path import normalize_path
from .report.record import FileRecord, Report, make_report
from .report.reconcile import ReportComparisonResult, compare_reports, extract_pairs, find_pairs
from .session import ReportSession
from .utils.processor import Processor
from .utils.walker import list_files
