"""
BGL Master

Reference table linking General Ledger (BGL) codes to the heads printed in the
abstract and to the categories of the charges return. Tables are plain values
passed to whoever needs them; BGLMaster.default() gives the stock table.
"""
import io
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union
import pandas as pd
from charges_return.common.exceptions import ReferenceTableError
from charges_return.common.logging_config import get_logger
from charges_return.common.models import ChargeRow
from charges_return.parsing.aggregator import is_summary_row

logger = get_logger(__name__)

UNCATEGORIZED = "Uncategorized"
CSV_COLUMNS = ['bgl_code', 'head', 'sub_head', 'acm_category', 'report_category']


@dataclass(frozen=True)
class BGLEntry:
    """
    Attributes:
        bgl_code: General Ledger account code
        head: Payment head (e.g. "Rent")
        sub_head: Payment sub-head
        acm_category: Head exactly as printed in the abstract
        report_category: Category of the charges return
    """
    bgl_code: str
    head: str
    sub_head: str
    acm_category: str
    report_category: str


DEFAULT_BGL_ENTRIES = (
    BGLEntry("21111", "Rent", "Rent for office building", "RENT (OFFICE PREMISES)", "Rent Office"),
    BGLEntry("21112", "Rent", "Rent for staff quarters", "RENT (OTHER PREMISES)", "Rent Other Premises"),
    BGLEntry("21121", "Telephone", "Telephone charges", "TELEPHONE", "Telephone"),
    BGLEntry("21131", "Stationery", "Stationery & printing", "STATIONERY & PRINTING", "Stationery"),
    BGLEntry("21141", "Postage", "Postage & courier", "POSTAGE, TELEGRAM, TELEX, STAMPS", "Postage"),
    BGLEntry("21151", "Electricity", "Electricity charges", "ELECTRICITY & GAS CHARGES", "Electricity & Gas"),
    BGLEntry("21161", "Water", "Water charges", "WATER CHARGES", "Sundries"),
    BGLEntry("21171", "Repairs", "Repairs & maintenance", "REPAIRS TO BANK PROPERTY", "Repair to Bank Property"),
    BGLEntry("21181", "Insurance", "Insurance premium", "INSURANCE", "Insurance"),
    BGLEntry("21191", "Miscellaneous", "Other expenses", "SUNDRIES", "Sundries"),
)


def _key(text: str) -> str:
    return (text or "").strip().upper()


class BGLMaster:
    """Lookup table over BGL entries."""

    def __init__(self, entries: Iterable[BGLEntry]):
        self.entries: List[BGLEntry] = list(entries)
        self._by_code: Dict[str, BGLEntry] = {e.bgl_code: e for e in self.entries}
        self._by_category: Dict[str, BGLEntry] = {}
        for e in self.entries:
            # First entry wins when two codes share an abstract head
            self._by_category.setdefault(_key(e.acm_category), e)

    @classmethod
    def default(cls) -> "BGLMaster":
        return cls(DEFAULT_BGL_ENTRIES)

    @classmethod
    def from_csv(cls, source: Union[str, Path, io.IOBase]) -> "BGLMaster":
        """
        Load a five-column table: BGL code, head, sub-head, abstract head,
        report category. Comma or tab separated; a header row is optional.

        Raises:
            ReferenceTableError: fewer than five columns, or no usable rows
        """
        name = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "<buffer>")
        try:
            if isinstance(source, (str, Path)):
                with open(source, "r", encoding="utf-8-sig") as f:
                    content = f.read()
            else:
                content = source.read()
                if isinstance(content, bytes):
                    content = content.decode("utf-8-sig", errors="replace")

            first_line = next((l for l in content.splitlines() if l.strip()), "")
            sep = "\t" if "\t" in first_line else ","
            df = pd.read_csv(io.StringIO(content), sep=sep, header=None, dtype=str,
                             keep_default_na=False, skip_blank_lines=True)
        except (ValueError, OSError, pd.errors.ParserError) as e:
            raise ReferenceTableError(f"Cannot read BGL master: {e}", source=name) from e

        if df.shape[1] < len(CSV_COLUMNS):
            raise ReferenceTableError(
                f"BGL master needs {len(CSV_COLUMNS)} columns, found {df.shape[1]}", source=name
            )

        df = df.iloc[:, :len(CSV_COLUMNS)]
        df.columns = CSV_COLUMNS
        df = df.fillna("").apply(lambda col: col.str.strip())

        # Skip header row
        first = " ".join(df.iloc[0]).upper() if len(df) else ""
        if any(word in first for word in ("BGL", "CODE", "HEAD")):
            df = df.iloc[1:]

        complete = df[(df != "").all(axis=1)]
        skipped = len(df) - len(complete)
        if skipped:
            logger.warning("Skipped incomplete BGL master rows", source=name, skipped=skipped)
        if complete.empty:
            raise ReferenceTableError("BGL master has no complete rows", source=name)

        entries = [BGLEntry(**record) for record in complete.to_dict(orient='records')]
        logger.info("Loaded BGL master", source=name, entries=len(entries))
        return cls(entries)

    def find_by_code(self, bgl_code: str) -> Optional[BGLEntry]:
        return self._by_code.get((bgl_code or "").strip())

    def find_by_acm_category(self, head: str) -> Optional[BGLEntry]:
        """Case-insensitive exact match of an abstract head."""
        return self._by_category.get(_key(head))

    def category_for(self, head: str) -> str:
        entry = self.find_by_acm_category(head)
        return entry.report_category if entry else UNCATEGORIZED

    def category_totals(self, rows: Iterable[ChargeRow]) -> Dict[str, float]:
        """
        Sum month amounts of data rows per report category.
        Summary rows are skipped; blank amounts count as 0.
        """
        totals: Dict[str, float] = {}
        for row in rows:
            if is_summary_row(row.label):
                continue
            category = self.category_for(row.label)
            totals[category] = totals.get(category, 0) + (row.month_amount or 0)
        return totals

    def __len__(self) -> int:
        return len(self.entries)
