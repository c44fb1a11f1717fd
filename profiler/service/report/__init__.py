from .report_formatter import ReportFormatter
from .report_writer import ReportWriter

__all__ = ["ReportFormatter", "ReportWriter"]
