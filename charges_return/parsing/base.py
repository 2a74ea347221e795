"""
Base Class for Report Parsers

Handles getting text out of a report file (plain text or PDF) so that
subclasses only deal with report text.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union
from charges_return.common.logging_config import get_logger
from charges_return.common.models import ParseResult

logger = get_logger(__name__)


class BaseReportParser(ABC):
    """
    Abstract Base Class for charges report parsers.

    Returns:
        ParseResult: (report_date, rows)
    """

    @abstractmethod
    def identify(self, text: str) -> bool:
        """
        Returns True if this parser recognises the report text.
        """
        pass

    @abstractmethod
    def parse(self, text: str, include_summaries: bool = True) -> ParseResult:
        """
        Parses report text. Must never raise on report content.
        """
        pass

    def parse_file(self, file_path: Union[str, Path], include_summaries: bool = True) -> ParseResult:
        """
        Template method: read the file's text, then parse it.
        """
        text = self.read_text(file_path)
        return self.parse(text, include_summaries)

    def read_text(self, file_path: Union[str, Path]) -> str:
        """
        Read report text from a .pdf (via pdfplumber) or any text file.
        Text files are read as UTF-8, falling back to latin-1.
        """
        path = Path(file_path)
        if path.suffix.lower() == '.pdf':
            return self._read_pdf_text(path)

        raw = path.read_bytes()
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            logger.debug("Report is not UTF-8, decoding as latin-1", file=path.name)
            return raw.decode('latin-1')

    def _read_pdf_text(self, path: Path) -> str:
        import pdfplumber

        full_text = ""
        with pdfplumber.open(path) as pdf:
            for page in pdf.pages:
                t = page.extract_text()
                if t:
                    full_text += t + "\n"

        logger.debug("Extracted PDF text", file=path.name, chars=len(full_text))
        return full_text
