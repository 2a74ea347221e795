"""
Shared objects handed to endpoints through FastAPI's Depends.
Tests override these with app.dependency_overrides.
"""
from functools import lru_cache
from fastapi import HTTPException
from charges_return.common.exceptions import ReportNotFoundError
from charges_return.common.settings import get_settings
from charges_return.parsing.config.registry import LayoutRegistry
from charges_return.parsing.pipeline import ChargesReportParser
from charges_return.reference.bgl_master import BGLMaster
from charges_return.storage.report_store import ReportStore, StoredReport, get_report_store


@lru_cache(maxsize=1)
def get_parser() -> ChargesReportParser:
    registry = LayoutRegistry(get_settings().layouts_dir)
    return ChargesReportParser(registry=registry)


def get_store() -> ReportStore:
    return get_report_store()


@lru_cache(maxsize=1)
def get_bgl_master() -> BGLMaster:
    path = get_settings().bgl_master_file
    if path:
        return BGLMaster.from_csv(path)
    return BGLMaster.default()


def load_report_or_404(store: ReportStore, report_id: str) -> StoredReport:
    try:
        return store.load(report_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
