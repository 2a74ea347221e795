"""
Charges Return

Parses the Monthly Abstract of Charges (ACM001) into an ordered,
deduplicated table of charge heads with as-on totals, and stores,
exports and serves the parsed reports.
"""
from .common.models import ChargeRow, ExtractedPair, ParseResult, ReportDate
from .parsing.pipeline import ChargesReportParser, parse_report

__version__ = "1.0.0"

__all__ = [
    'ChargeRow',
    'ExtractedPair',
    'ParseResult',
    'ReportDate',
    'ChargesReportParser',
    'parse_report',
]
