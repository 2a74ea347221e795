from .formatting import format_indian_currency, format_amount_or_dash
from .csv_exporter import rows_to_dataframe, export_csv, csv_filename
from .excel_exporter import ExcelExporter
from .print_renderer import PrintExporter

__all__ = [
    'format_indian_currency',
    'format_amount_or_dash',
    'rows_to_dataframe',
    'export_csv',
    'csv_filename',
    'ExcelExporter',
    'PrintExporter',
]
