"""
Date Extractor

Finds the report-as-of stamp ("AS AT MAR 7, 2024") anywhere in the report text.
"""
import re
from typing import Optional
from charges_return.common.models import ReportDate

MONTHS = {
    'JAN': '01', 'FEB': '02', 'MAR': '03', 'APR': '04', 'MAY': '05', 'JUN': '06',
    'JUL': '07', 'AUG': '08', 'SEP': '09', 'OCT': '10', 'NOV': '11', 'DEC': '12'
}

AS_AT_PATTERN = re.compile(r"AS\s+AT\s+([A-Z]{3})\s+([0-9]{1,2}),\s*([0-9]{4})", re.IGNORECASE)


def extract_report_date(text: str) -> Optional[ReportDate]:
    """
    Extract the report date from the first 'AS AT' stamp.

    Returns:
        ReportDate(iso='2024-03-07', label='Mar 7, 2024'), or None when no stamp
        is found or the month abbreviation is unknown.
    """
    match = AS_AT_PATTERN.search(text or "")
    if not match:
        return None

    mon_s, day_s, year_s = match.groups()
    mon = mon_s.upper()
    mm = MONTHS.get(mon)
    if not mm:
        return None

    dd = day_s.zfill(2)
    return ReportDate(
        iso=f"{year_s}-{mm}-{dd}",
        label=f"{mon.title()} {int(day_s)}, {year_s}",
    )
