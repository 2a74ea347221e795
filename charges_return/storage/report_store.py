"""
Report Store

Persists parsed abstracts as one JSON document per report date.
"""
import json
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from charges_return.common.exceptions import ReportDateMissingError, ReportNotFoundError
from charges_return.common.logging_config import get_logger
from charges_return.common.models import ChargeRow, ParseResult, ReportDate
from charges_return.common.settings import get_settings
from charges_return.parsing.aggregator import order_rows
from charges_return.parsing.config.layout import ReportLayout, DEFAULT_LAYOUT
from charges_return.parsing.config.registry import LayoutRegistry

logger = get_logger(__name__)


@dataclass
class StoredReport:
    """A saved report: its metadata and the parse result."""
    report_id: str
    imported_at: str
    include_totals: bool
    result: ParseResult
    layout_name: str = DEFAULT_LAYOUT.name

    @property
    def metadata(self) -> Dict[str, Any]:
        return {
            'report_id': self.report_id,
            'report_date_iso': self.result.report_date.iso,
            'report_date_label': self.result.report_date.label,
            'imported_at': self.imported_at,
            'include_totals': self.include_totals,
            'layout': self.layout_name,
            'row_count': len(self.result.rows),
        }


class ReportStore:
    """
    File-backed store keyed by the report's ISO date.

    Saving a report for a date that is already stored replaces it wholesale.
    Each document records the layout it was parsed with; rows are reordered
    with that layout on load, looked up in the registry when one is given.
    """

    def __init__(self, storage_dir: Optional[Path] = None, registry: Optional[LayoutRegistry] = None):
        self.storage_dir = Path(storage_dir or get_settings().storage_dir)
        self.registry = registry
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, report_id: str) -> Path:
        # Report ids are ISO dates; reject anything that could escape the directory
        if not report_id or any(c in report_id for c in ('/', '\\')) or report_id.startswith('.'):
            raise ReportNotFoundError(report_id)
        return self.storage_dir / f"{report_id}.json"

    def _layout_named(self, name: Optional[str]) -> ReportLayout:
        if not name or name == DEFAULT_LAYOUT.name:
            return DEFAULT_LAYOUT
        layout = self.registry.get_by_name(name) if self.registry is not None else None
        if layout is None:
            logger.warning(f"Unknown layout {name!r}, ordering rows with the default", layout=name)
            return DEFAULT_LAYOUT
        return layout

    def save(self, result: ParseResult, include_summaries: bool = True,
             layout: Optional[ReportLayout] = None) -> StoredReport:
        """
        Save a parse result under its ISO date.

        Args:
            layout: Layout the result was parsed with (default ACM001)

        Raises:
            ReportDateMissingError: the result has no report date
        """
        if not result.report_date.is_valid:
            raise ReportDateMissingError(row_count=len(result.rows))

        stored = StoredReport(
            report_id=result.report_date.iso,
            imported_at=datetime.now().isoformat(),
            include_totals=include_summaries,
            result=result,
            layout_name=(layout or DEFAULT_LAYOUT).name,
        )
        document = {
            'report': stored.metadata,
            'rows': [r.to_dict() for r in result.rows],
        }

        path = self._path(stored.report_id)
        tmp_path = path.with_suffix('.json.tmp')
        with self._lock:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)

        logger.info(
            f"Report saved: {result.report_date.label}",
            report_id=stored.report_id,
            rows=len(result.rows),
        )
        return stored

    def load(self, report_id: str) -> StoredReport:
        """
        Load a stored report; rows come back in presentation order.

        Raises:
            ReportNotFoundError: no report with that id
        """
        path = self._path(report_id)
        if not path.exists():
            raise ReportNotFoundError(report_id)

        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)

        meta = document.get('report', {})
        layout = self._layout_named(meta.get('layout'))
        rows = [ChargeRow.from_dict(r) for r in document.get('rows', [])]
        result = ParseResult(
            report_date=ReportDate(
                iso=meta.get('report_date_iso', report_id),
                label=meta.get('report_date_label', ''),
            ),
            rows=order_rows(rows, layout),
        )
        return StoredReport(
            report_id=meta.get('report_id', report_id),
            imported_at=meta.get('imported_at', ''),
            include_totals=bool(meta.get('include_totals', True)),
            result=result,
            layout_name=meta.get('layout') or layout.name,
        )

    def exists(self, report_id: str) -> bool:
        try:
            return self._path(report_id).exists()
        except ReportNotFoundError:
            return False

    def list_reports(self) -> List[Dict[str, Any]]:
        """Metadata of all stored reports, newest report date first."""
        reports = []
        for path in self.storage_dir.glob("*.json"):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    reports.append(json.load(f).get('report', {}))
            except (OSError, ValueError) as e:
                logger.error(f"Failed to read stored report {path.name}: {e}", file=path.name)

        return sorted(reports, key=lambda r: r.get('report_date_iso', ''), reverse=True)

    def delete(self, report_id: str) -> bool:
        path = self._path(report_id)
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
        logger.info("Report deleted", report_id=report_id)
        return True

    def clear(self) -> int:
        """Delete every stored report. Returns how many were removed."""
        removed = 0
        with self._lock:
            for path in self.storage_dir.glob("*.json"):
                path.unlink()
                removed += 1
        logger.info("All reports cleared", removed=removed)
        return removed


# Global instance
_report_store = None


def get_report_store() -> ReportStore:
    """Get the process-wide ReportStore rooted at the configured storage dir."""
    global _report_store
    if _report_store is None:
        _report_store = ReportStore(registry=LayoutRegistry(get_settings().layouts_dir))
    return _report_store
