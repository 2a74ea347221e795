"""
Errors raised around the parser: by the report store, the BGL reference
table and the API. The parser itself never raises on report content.
"""


class ChargesReturnError(Exception):
    """Base class for all application errors."""


class ReportDateMissingError(ChargesReturnError):
    """
    Raised when saving a parse result that has no 'AS AT' date.
    The ISO date is the storage key, so such a result can be previewed but not stored.
    """

    def __init__(self, message: str = None, row_count: int = None, sample_text: str = None):
        self.row_count = row_count
        self.sample_text = sample_text

        details = []
        if row_count is not None:
            details.append(f"Rows parsed: {row_count}")
        if sample_text:
            details.append(f"Sample: {sample_text[:200]}...")

        message = message or "Report date stamp ('AS AT MON DD, YYYY') not found; report cannot be saved."
        full_message = f"{message}\n" + "\n".join(details) if details else message
        super().__init__(full_message)


class ReportNotFoundError(ChargesReturnError):
    """Raised when a stored report id does not exist."""

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report not found: {report_id}")


class ReferenceTableError(ChargesReturnError):
    """Raised when a BGL master file cannot be read into a reference table."""

    def __init__(self, message: str, source: str = None, line_number: int = None):
        self.source = source
        self.line_number = line_number

        details = []
        if source:
            details.append(f"Source: {source}")
        if line_number is not None:
            details.append(f"Line: {line_number}")

        full_message = f"{message} ({', '.join(details)})" if details else message
        super().__init__(full_message)
