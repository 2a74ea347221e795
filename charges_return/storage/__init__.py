from .report_store import ReportStore, StoredReport, get_report_store

__all__ = ['ReportStore', 'StoredReport', 'get_report_store']
