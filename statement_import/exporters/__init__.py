"""Export modules."""
from .excel_exporter import ExcelExporter, generate_output_filename

__all__ = ['ExcelExporter', 'generate_output_filename']
