"""
BGL reference table endpoints.
"""
from dataclasses import asdict
from fastapi import APIRouter, Depends
from charges_return.api.dependencies import get_bgl_master, get_store, load_report_or_404
from charges_return.reference.bgl_master import BGLMaster
from charges_return.storage.report_store import ReportStore

router = APIRouter()


@router.get("/bgl")
def list_bgl_entries(master: BGLMaster = Depends(get_bgl_master)):
    return {'entries': [asdict(e) for e in master.entries]}


@router.get("/categories/{report_id}")
def report_category_totals(
    report_id: str,
    master: BGLMaster = Depends(get_bgl_master),
    store: ReportStore = Depends(get_store),
):
    """Month amounts of a stored report grouped by charges-return category."""
    stored = load_report_or_404(store, report_id)
    return {
        'report_id': report_id,
        'report_date_label': stored.result.report_date.label,
        'categories': master.category_totals(stored.result.rows),
    }
