"""
Aggregator

Filters, deduplicates and orders parsed rows for presentation:
data rows by month amount (largest first, blanks last), then the
summary rows (monthly total, previous total, GL balance) in fixed order.
"""
from typing import Dict, Iterable, List
from charges_return.common.models import ChargeRow
from .config.layout import ReportLayout, DEFAULT_LAYOUT
from .text import normalize_spaces


def should_include_head(label: str, include_summaries: bool, layout: ReportLayout = DEFAULT_LAYOUT) -> bool:
    if include_summaries:
        return True

    u = normalize_spaces(label).upper()
    if any(u.startswith(p) for p in layout.excluded_head_prefixes):
        return False
    if u in layout.excluded_heads:
        return False
    return True


def summary_rank(label: str, layout: ReportLayout = DEFAULT_LAYOUT) -> int:
    """
    Index of the first summary phrase contained in the label, or -1.
    """
    u = label.upper()
    for i, phrase in enumerate(layout.summary_phrases):
        if phrase in u:
            return i
    return -1


def is_summary_row(label: str, layout: ReportLayout = DEFAULT_LAYOUT) -> bool:
    return summary_rank(label, layout) >= 0


def dedupe_last_wins(rows: Iterable[ChargeRow]) -> List[ChargeRow]:
    """
    Keep one row per label; a later row replaces an earlier one outright
    but takes over its position.
    """
    by_label: Dict[str, ChargeRow] = {}
    for row in rows:
        by_label[row.label] = row
    return list(by_label.values())


def order_rows(rows: Iterable[ChargeRow], layout: ReportLayout = DEFAULT_LAYOUT) -> List[ChargeRow]:
    """Partition into data and summary rows, sort each, data rows first."""
    data_rows = []
    summary_rows = []
    for row in rows:
        if is_summary_row(row.label, layout):
            summary_rows.append(row)
        else:
            data_rows.append(row)

    # Stable sorts: ties keep their original order
    data_rows.sort(
        key=lambda r: r.month_amount if r.month_amount is not None else float('-inf'),
        reverse=True,
    )
    summary_rows.sort(key=lambda r: summary_rank(r.label, layout))

    return data_rows + summary_rows


def aggregate(rows: Iterable[ChargeRow], include_summaries: bool, layout: ReportLayout = DEFAULT_LAYOUT) -> List[ChargeRow]:
    kept = [r for r in rows if should_include_head(r.label, include_summaries, layout)]
    return order_rows(dedupe_last_wins(kept), layout)
