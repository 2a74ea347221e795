"""
Excel export of a parsed abstract, laid out like the printed ACM001 table.
"""
from io import BytesIO
from datetime import datetime
import xlsxwriter
from charges_return.common.models import ParseResult
from charges_return.parsing.aggregator import is_summary_row
from .csv_exporter import HEAD_COLUMN, AMOUNT_COLUMN, PREVIOUS_COLUMN, as_on_column
from .formatting import DASH


class ExcelExporter:
    """Writes one worksheet with the abstract rows; summary rows in bold."""

    COLORS = {
        'header_bg': '#1e293b',
        'header_text': '#ffffff',
        'zebra': '#f8fafc',
        'summary_bg': '#cbd5e1',
        'accent': '#6366f1',
    }

    # Indian grouping: 1,23,45,678.00
    NUM_FORMAT = '[>=10000000]##\\,##\\,##\\,##0.00;[>=100000]##\\,##\\,##0.00;##,##0.00'

    def __init__(self, result: ParseResult, branch_name: str = ""):
        self.result = result
        self.branch_name = branch_name
        self.buffer = BytesIO()
        self.workbook = None
        self.formats = {}

    def _create_formats(self):
        self.formats['title'] = self.workbook.add_format({
            'bold': True, 'font_size': 16, 'font_color': self.COLORS['accent'],
        })
        self.formats['subtitle'] = self.workbook.add_format({
            'italic': True, 'font_color': '#64748b',
        })
        self.formats['header'] = self.workbook.add_format({
            'bold': True,
            'font_color': self.COLORS['header_text'],
            'bg_color': self.COLORS['header_bg'],
            'border': 1,
            'align': 'center',
            'valign': 'vcenter',
            'text_wrap': True,
        })
        base = {'border': 1, 'border_color': '#e2e8f0'}
        self.formats['cell'] = self.workbook.add_format(base)
        self.formats['cell_zebra'] = self.workbook.add_format({**base, 'bg_color': self.COLORS['zebra']})
        self.formats['amount'] = self.workbook.add_format({**base, 'num_format': self.NUM_FORMAT})
        self.formats['amount_zebra'] = self.workbook.add_format({
            **base, 'num_format': self.NUM_FORMAT, 'bg_color': self.COLORS['zebra'],
        })
        self.formats['dash'] = self.workbook.add_format({**base, 'align': 'center'})
        self.formats['summary'] = self.workbook.add_format({
            **base, 'bold': True, 'bg_color': self.COLORS['summary_bg'],
        })
        self.formats['summary_amount'] = self.workbook.add_format({
            **base, 'bold': True, 'bg_color': self.COLORS['summary_bg'], 'num_format': self.NUM_FORMAT,
        })

    def _write_amount(self, sheet, row, col, value, fmt_name):
        if value is None:
            sheet.write_string(row, col, DASH, self.formats['dash'])
        else:
            sheet.write_number(row, col, value, self.formats[fmt_name])

    def _create_rows_sheet(self):
        sheet = self.workbook.add_worksheet('Abstract')
        sheet.set_column('A:A', 45)
        sheet.set_column('B:D', 22)

        label = self.result.report_date.label
        sheet.write(0, 0, f"Monthly Abstract of Charges as at {label}", self.formats['title'])
        if self.branch_name:
            sheet.write(1, 0, self.branch_name, self.formats['subtitle'])
        sheet.write(2, 0, f"Generated {datetime.now().strftime('%d/%m/%Y %H:%M')}", self.formats['subtitle'])

        header_row = 4
        headers = [HEAD_COLUMN, AMOUNT_COLUMN, PREVIOUS_COLUMN, as_on_column(label)]
        sheet.set_row(header_row, 32)
        for col, text in enumerate(headers):
            sheet.write(header_row, col, text, self.formats['header'])

        for i, row in enumerate(self.result.rows):
            r = header_row + 1 + i
            if is_summary_row(row.label):
                cell_fmt, amount_fmt = 'summary', 'summary_amount'
            elif i % 2:
                cell_fmt, amount_fmt = 'cell_zebra', 'amount_zebra'
            else:
                cell_fmt, amount_fmt = 'cell', 'amount'

            sheet.write_string(r, 0, row.label, self.formats[cell_fmt])
            self._write_amount(sheet, r, 1, row.month_amount, amount_fmt)
            self._write_amount(sheet, r, 2, row.prior_total, amount_fmt)
            sheet.write_number(r, 3, row.as_on_total, self.formats[amount_fmt])

        sheet.freeze_panes(header_row + 1, 1)

    def generate(self) -> bytes:
        """
        Returns:
            bytes of the .xlsx file
        """
        self.workbook = xlsxwriter.Workbook(self.buffer, {'in_memory': True})
        self._create_formats()
        self._create_rows_sheet()
        self.workbook.close()

        self.buffer.seek(0)
        return self.buffer.getvalue()
