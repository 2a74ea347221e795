"""
Printable PDF of a parsed abstract.
"""
from io import BytesIO
from xml.sax.saxutils import escape
from datetime import datetime
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from charges_return.common.models import ParseResult
from charges_return.parsing.aggregator import is_summary_row
from .formatting import format_amount_or_dash, format_indian_currency


class PrintExporter:
    """Renders the abstract as an A4 table; summary rows shaded at the bottom."""

    COLORS = {
        'dark': colors.HexColor('#1e293b'),
        'text': colors.HexColor('#334155'),
        'light': colors.HexColor('#f8fafc'),
        'border': colors.HexColor('#e2e8f0'),
        'summary': colors.HexColor('#cbd5e1'),
    }

    def __init__(self, result: ParseResult, branch_name: str = ""):
        self.result = result
        self.branch_name = branch_name
        self.buffer = BytesIO()
        self.elements = []
        self.styles = getSampleStyleSheet()
        self._setup_styles()

    def _setup_styles(self):
        if 'AbstractTitle' not in self.styles:
            self.styles.add(ParagraphStyle(
                name='AbstractTitle',
                parent=self.styles['Heading1'],
                fontSize=16,
                textColor=self.COLORS['dark'],
                alignment=TA_CENTER,
                spaceAfter=6,
                fontName='Helvetica-Bold',
            ))
        if 'AbstractSubtitle' not in self.styles:
            self.styles.add(ParagraphStyle(
                name='AbstractSubtitle',
                parent=self.styles['Normal'],
                fontSize=10,
                textColor=colors.grey,
                alignment=TA_CENTER,
                spaceAfter=14,
            ))
        if 'AbstractCell' not in self.styles:
            self.styles.add(ParagraphStyle(
                name='AbstractCell',
                parent=self.styles['Normal'],
                fontSize=8,
                leading=10,
                textColor=self.COLORS['text'],
            ))

    def _create_rows_table(self):
        label = self.result.report_date.label
        header_style = ParagraphStyle('AbstractHeader', parent=self.styles['AbstractCell'],
                                      textColor=colors.whitesmoke, fontName='Helvetica-Bold')
        data = [[
            Paragraph("HEAD", header_style),
            Paragraph("AMOUNT (Rs.)", header_style),
            Paragraph("TOTAL EXPENDITURE TILL END OF PREVIOUS MONTH", header_style),
            Paragraph(escape(f"TOTAL EXPENDITURE TILL {label}"), header_style),
        ]]
        for row in self.result.rows:
            data.append([
                Paragraph(escape(row.label), self.styles['AbstractCell']),
                format_amount_or_dash(row.month_amount),
                format_amount_or_dash(row.prior_total),
                format_indian_currency(row.as_on_total),
            ])

        t = Table(data, colWidths=[7*cm, 3*cm, 3.5*cm, 3.5*cm], repeatRows=1)
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), self.COLORS['dark']),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('ALIGN', (1, 1), (-1, -1), 'RIGHT'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 8),
            ('GRID', (0, 0), (-1, -1), 0.5, self.COLORS['border']),
            ('BOX', (0, 0), (-1, -1), 1, self.COLORS['dark']),
        ]
        for i, row in enumerate(self.result.rows, start=1):
            if is_summary_row(row.label):
                style.append(('BACKGROUND', (0, i), (-1, i), self.COLORS['summary']))
                style.append(('FONTNAME', (1, i), (-1, i), 'Helvetica-Bold'))
            elif i % 2 == 0:
                style.append(('BACKGROUND', (0, i), (-1, i), self.COLORS['light']))
        t.setStyle(TableStyle(style))
        self.elements.append(t)

    def _add_footer(self, canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.grey)
        canvas.drawString(2*cm, 1.5*cm, f"Printed {datetime.now().strftime('%d/%m/%Y %H:%M')}")
        canvas.drawRightString(A4[0] - 2*cm, 1.5*cm, f"Page {doc.page}")
        canvas.restoreState()

    def generate(self) -> bytes:
        """
        Returns:
            bytes of the generated PDF
        """
        self.elements.append(Paragraph("Monthly Abstract of Charges", self.styles['AbstractTitle']))
        subtitle = escape(f"As at {self.result.report_date.label}")
        if self.branch_name:
            subtitle = f"{escape(self.branch_name)} - {subtitle}"
        self.elements.append(Paragraph(subtitle, self.styles['AbstractSubtitle']))
        self.elements.append(Spacer(1, 10))

        if self.result.is_empty:
            self.elements.append(Paragraph("No rows parsed from this report.", self.styles['AbstractCell']))
        else:
            self._create_rows_table()

        doc = SimpleDocTemplate(
            self.buffer,
            pagesize=A4,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2.5*cm,
            title="Monthly Abstract of Charges",
        )
        doc.build(self.elements, onFirstPage=self._add_footer, onLaterPages=self._add_footer)

        self.buffer.seek(0)
        return self.buffer.getvalue()
