"""
Endpoints for parsing, storing and exporting charges abstracts.
"""
import os
import shutil
import tempfile
from datetime import datetime
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from charges_return.api.dependencies import get_parser, get_store, load_report_or_404
from charges_return.common.exceptions import ReportDateMissingError, ReportNotFoundError
from charges_return.common.logging_config import get_logger, set_report_id
from charges_return.common.models import ParseResult
from charges_return.common.settings import get_settings
from charges_return.exporters.csv_exporter import export_csv, csv_filename
from charges_return.exporters.excel_exporter import ExcelExporter
from charges_return.exporters.print_renderer import PrintExporter
from charges_return.parsing.pipeline import ChargesReportParser
from charges_return.storage.report_store import ReportStore

logger = get_logger(__name__)

router = APIRouter()


class ParseRequest(BaseModel):
    text: str
    include_summaries: bool = True


def _parse_payload(result: ParseResult) -> dict:
    payload = result.to_dict()
    payload['row_count'] = len(result.rows)
    if result.is_empty:
        payload['message'] = "Nothing parsed: no charge rows were found in the report."
    return payload


def _attachment(content: bytes, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@router.post("/parse")
def parse_text(request: ParseRequest, parser: ChargesReportParser = Depends(get_parser)):
    """Preview: parse report text without storing it."""
    result = parser.parse(request.text, request.include_summaries)
    return _parse_payload(result)


@router.post("/upload")
async def parse_upload(
    file: UploadFile = File(...),
    include_summaries: bool = Form(True),
    parser: ChargesReportParser = Depends(get_parser),
):
    """Preview an uploaded report (.txt or .pdf)."""
    suffix = os.path.splitext(file.filename or "")[1].lower() or ".txt"

    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        shutil.copyfileobj(file.file, tmp)
        tmp_path = tmp.name
    try:
        result = parser.parse_file(tmp_path, include_summaries)
    except Exception as e:
        logger.error(f"Failed to read uploaded report: {e}", exc_info=True, filename=file.filename)
        raise HTTPException(status_code=400, detail=f"Could not read {file.filename}: {e}")
    finally:
        os.unlink(tmp_path)

    payload = _parse_payload(result)
    payload['filename'] = file.filename
    return payload


@router.post("")
def save_report(
    request: ParseRequest,
    parser: ChargesReportParser = Depends(get_parser),
    store: ReportStore = Depends(get_store),
):
    """Parse report text and store it under its 'AS AT' date."""
    result = parser.parse(request.text, request.include_summaries)
    set_report_id(result.report_date.iso or None)
    try:
        stored = store.save(result, request.include_summaries, layout=parser.layout_for(request.text))
    except ReportDateMissingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    finally:
        set_report_id(None)

    return {'report': stored.metadata, **_parse_payload(result)}


@router.get("")
def list_reports(store: ReportStore = Depends(get_store)):
    return {'reports': store.list_reports()}


@router.delete("")
def clear_reports(store: ReportStore = Depends(get_store)):
    removed = store.clear()
    return {'message': f"{removed} reports deleted.", 'removed': removed}


@router.get("/{report_id}")
def get_report(report_id: str, store: ReportStore = Depends(get_store)):
    stored = load_report_or_404(store, report_id)
    return {'report': stored.metadata, **stored.result.to_dict()}


@router.delete("/{report_id}")
def delete_report(report_id: str, store: ReportStore = Depends(get_store)):
    try:
        deleted = store.delete(report_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Report not found: {report_id}")
    return {'message': f"Report {report_id} deleted."}


@router.get("/{report_id}/csv")
def export_report_csv(report_id: str, store: ReportStore = Depends(get_store)):
    stored = load_report_or_404(store, report_id)
    content = export_csv(stored.result).encode('utf-8')
    return _attachment(content, csv_filename(stored.result.report_date.label), 'text/csv')


@router.get("/{report_id}/excel")
def export_report_excel(report_id: str, store: ReportStore = Depends(get_store)):
    stored = load_report_or_404(store, report_id)
    content = ExcelExporter(stored.result, branch_name=get_settings().branch_name).generate()
    filename = f"ACM_Report_{report_id}_{datetime.now().strftime('%Y%m%d%H%M%S')}.xlsx"
    return _attachment(
        content, filename, 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )


@router.get("/{report_id}/print")
def export_report_print(report_id: str, store: ReportStore = Depends(get_store)):
    stored = load_report_or_404(store, report_id)
    content = PrintExporter(stored.result, branch_name=get_settings().branch_name).generate()
    return _attachment(content, f"ACM_Report_{report_id}.pdf", 'application/pdf')
