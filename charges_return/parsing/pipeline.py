"""
Charges Report Pipeline

Single linear pass over the report text:
- Date Extractor runs once on the full text
- per line: noise check -> head/amount extraction -> row finalisation
- Aggregator filters, deduplicates and orders the collected rows
"""
from typing import List, Optional
from charges_return.common.logging_config import get_logger
from charges_return.common.models import ChargeRow, ParseResult, ReportDate
from .base import BaseReportParser
from .config.layout import ReportLayout, DEFAULT_LAYOUT
from .config.registry import LayoutRegistry
from .noise import is_noise
from .dates import extract_report_date
from .extractors.line_matchers import extract_pair
from .rows import finalize
from .aggregator import aggregate

logger = get_logger(__name__)


class ChargesReportParser(BaseReportParser):
    """
    Parser for the Monthly Abstract of Charges.

    The parser holds only configuration, so one instance can serve
    concurrent callers.
    """

    def __init__(self, layout: Optional[ReportLayout] = None, registry: Optional[LayoutRegistry] = None):
        """
        Args:
            layout: Fixed layout to use. When None, the layout is detected
                    through the registry, falling back to ACM001.
            registry: LayoutRegistry used for detection
        """
        self.layout = layout
        self.registry = registry

    def layout_for(self, text: str) -> ReportLayout:
        """Layout used for this text: the fixed one, else detected, else ACM001."""
        if self.layout is not None:
            return self.layout
        if self.registry is not None:
            return self.registry.detect_or_default(text)
        return DEFAULT_LAYOUT

    def identify(self, text: str) -> bool:
        return self.layout_for(text).identifies(text)

    def parse(self, text: str, include_summaries: bool = True) -> ParseResult:
        """
        Parse report text into a ParseResult.

        Never raises on content: a missing date gives ReportDate.missing(),
        unreadable lines are dropped, and no rows gives an empty result.
        """
        text = text or ""
        layout = self.layout_for(text)

        report_date = extract_report_date(text) or ReportDate.missing()

        lines = text.splitlines()
        rows: List[ChargeRow] = []
        noise_count = 0
        for line in lines:
            if is_noise(line, layout):
                noise_count += 1
                continue
            pair = extract_pair(line)
            if pair is None:
                continue
            rows.append(finalize(pair))

        ordered = aggregate(rows, include_summaries, layout)

        logger.debug(
            "Parsed charges report",
            layout=layout.name,
            report_date=report_date.iso or None,
            lines=len(lines),
            noise_lines=noise_count,
            extracted_rows=len(rows),
            kept_rows=len(ordered),
            include_summaries=include_summaries,
        )
        return ParseResult(report_date=report_date, rows=ordered)


_default_parser = ChargesReportParser()


def parse_report(text: str, include_summaries: bool = True) -> ParseResult:
    """Parse report text with the ACM001 layout."""
    return _default_parser.parse(text, include_summaries)
