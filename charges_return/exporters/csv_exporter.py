"""
CSV export of a parsed abstract.
"""
import re
import pandas as pd
from charges_return.common.models import ParseResult
from .formatting import DASH

HEAD_COLUMN = "HEAD"
AMOUNT_COLUMN = "AMOUNT (Rs.)"
PREVIOUS_COLUMN = "TOTAL EXPENDITURE TILL END OF PREVIOUS MONTH"


def as_on_column(report_label: str) -> str:
    return f"TOTAL EXPENDITURE TILL {report_label}"


def rows_to_dataframe(result: ParseResult) -> pd.DataFrame:
    """
    Table view of the result in row order. Blank amounts become '-';
    the as-on total is always numeric.
    """
    columns = [HEAD_COLUMN, AMOUNT_COLUMN, PREVIOUS_COLUMN, as_on_column(result.report_date.label)]
    data = [
        [
            row.label,
            DASH if row.month_amount is None else row.month_amount,
            DASH if row.prior_total is None else row.prior_total,
            row.as_on_total,
        ]
        for row in result.rows
    ]
    return pd.DataFrame(data, columns=columns)


def export_csv(result: ParseResult) -> str:
    return rows_to_dataframe(result).to_csv(index=False)


def csv_filename(report_label: str) -> str:
    """'Mar 7, 2024' -> 'ACM_Report_Mar_7__2024.csv'"""
    return f"ACM_Report_{re.sub(r'[^a-zA-Z0-9]', '_', report_label or '')}.csv"
