"""
Parsing Module

Turns Monthly Abstract of Charges text into ordered charge rows:
- Line classifier (noise filter)
- Date extractor
- Head/amount extractor (ordered line matchers)
- Row finaliser and aggregator
- Pipeline / parser facade
"""

# Base class
from .base import BaseReportParser

# Configuration
from .config.layout import ReportLayout, DEFAULT_LAYOUT
from .config.registry import LayoutRegistry

# Stages
from .noise import is_noise
from .dates import extract_report_date
from .extractors.money import parse_money_token
from .extractors.line_matchers import extract_pair
from .rows import finalize
from .aggregator import aggregate, order_rows, is_summary_row, should_include_head

# Pipeline
from .pipeline import ChargesReportParser, parse_report

__all__ = [
    'BaseReportParser',
    'ReportLayout',
    'DEFAULT_LAYOUT',
    'LayoutRegistry',
    'is_noise',
    'extract_report_date',
    'parse_money_token',
    'extract_pair',
    'finalize',
    'aggregate',
    'order_rows',
    'is_summary_row',
    'should_include_head',
    'ChargesReportParser',
    'parse_report',
]
