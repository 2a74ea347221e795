"""
Tests for amount formatting and the CSV / Excel / print exporters.
"""
from io import StringIO
import pandas as pd
import pytest
from charges_return.common.models import ParseResult, ReportDate
from charges_return.exporters import (
    format_indian_currency,
    format_amount_or_dash,
    rows_to_dataframe,
    export_csv,
    csv_filename,
    ExcelExporter,
    PrintExporter,
)
from charges_return.parsing.pipeline import parse_report


@pytest.fixture
def parsed(sample_report):
    return parse_report(sample_report)


# ============================================================================
# TEST: formatting
# ============================================================================

class TestFormatting:

    @pytest.mark.parametrize("amount,expected", [
        (0, "0.00"),
        (999, "999.00"),
        (1000, "1,000.00"),
        (123456.5, "1,23,456.50"),
        (12345678.9, "1,23,45,678.90"),
        (-1500, "-1,500.00"),
        (None, "0.00"),
    ])
    def test_indian_grouping(self, amount, expected):
        assert format_indian_currency(amount) == expected

    def test_dash_for_blank(self):
        assert format_amount_or_dash(None) == "-"
        assert format_amount_or_dash(0.0) == "0.00"


# ============================================================================
# TEST: CSV
# ============================================================================

class TestCsv:

    def test_columns(self, parsed):
        df = rows_to_dataframe(parsed)
        assert list(df.columns) == [
            "HEAD",
            "AMOUNT (Rs.)",
            "TOTAL EXPENDITURE TILL END OF PREVIOUS MONTH",
            "TOTAL EXPENDITURE TILL Mar 7, 2024",
        ]
        assert len(df) == len(parsed.rows)

    def test_blank_amounts_are_dashes(self, parsed):
        df = rows_to_dataframe(parsed).set_index("HEAD")
        assert df.loc["STATIONERY & PRINTING", "TOTAL EXPENDITURE TILL END OF PREVIOUS MONTH"] == "-"
        assert df.loc["STATIONERY & PRINTING", "TOTAL EXPENDITURE TILL Mar 7, 2024"] == 750.25

    def test_csv_text(self, parsed):
        df = pd.read_csv(StringIO(export_csv(parsed)), dtype=str)
        assert df.iloc[0]["HEAD"] == "ELECTRICITY & GAS CHARGES"
        assert df.iloc[-1]["HEAD"] == "BALANCE AS PER GENERAL LEDGER"

    def test_empty_result(self):
        result = ParseResult(report_date=ReportDate.missing())
        assert rows_to_dataframe(result).empty

    @pytest.mark.parametrize("label,expected", [
        ("Mar 7, 2024", "ACM_Report_Mar_7__2024.csv"),
        ("—", "ACM_Report__.csv"),
    ])
    def test_filename(self, label, expected):
        assert csv_filename(label) == expected


# ============================================================================
# TEST: binary exporters
# ============================================================================

class TestBinaryExporters:

    def test_excel(self, parsed):
        content = ExcelExporter(parsed, branch_name="MAIN BRANCH").generate()
        assert content[:2] == b"PK"

    def test_print(self, parsed):
        content = PrintExporter(parsed, branch_name="MAIN & CO").generate()
        assert content.startswith(b"%PDF")

    def test_print_empty(self):
        content = PrintExporter(ParseResult(report_date=ReportDate.missing())).generate()
        assert content.startswith(b"%PDF")
