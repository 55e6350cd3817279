"""
Excel exporter for imported statement transactions.

Generates Excel workbook with 2 sheets:
1. Transactions - Normalized transactions with totals
2. Import Log - Profile, strategy, counts and warnings
"""
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from ..models import ImportResult, TransactionType

logger = logging.getLogger(__name__)

CURRENCY_FORMATS = {
    'BRL': 'R$ #,##0.00',
    'USD': '$#,##0.00',
    'EUR': '€#,##0.00',
}


class ExcelExporter:
    """Export import results to formatted Excel workbook."""

    # Colors
    HEADER_COLOR = "366092"  # Dark blue
    WARNING_COLOR = "FFC7CE"  # Light red
    SUCCESS_COLOR = "C6EFCE"  # Light green
    INFO_COLOR = "FFEB9C"  # Light yellow

    HEADERS = ["Date", "Description", "Income", "Expense", "Type", "Status", "Due Date"]

    def __init__(self, currency: str = "BRL"):
        """
        Initialize Excel exporter.

        Args:
            currency: Currency code used for number formats
        """
        self.currency_format = CURRENCY_FORMATS.get(currency.upper(), f'"{currency}" #,##0.00')

    def export(self, result: ImportResult, output_path: Path) -> Path:
        """
        Export import result to Excel.

        Args:
            result: Import result to export
            output_path: Path for output Excel file

        Returns:
            Path to created Excel file
        """
        output_path = Path(output_path)
        logger.info(f"Exporting to Excel: {output_path}")

        wb = openpyxl.Workbook()

        # Remove default sheet
        if "Sheet" in wb.sheetnames:
            wb.remove(wb["Sheet"])

        self._create_transactions_sheet(wb, result)
        self._create_import_log_sheet(wb, result)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel export complete: {output_path}")

        return output_path

    def _create_transactions_sheet(self, wb: openpyxl.Workbook, result: ImportResult) -> None:
        """Create transactions sheet with formatted data."""
        ws = wb.create_sheet("Transactions", 0)

        for col, header in enumerate(self.HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=self.HEADER_COLOR, fill_type="solid")
            cell.alignment = Alignment(horizontal="center", vertical="center")

        for row, txn in enumerate(result.transactions, 2):
            is_income = txn.type is TransactionType.INCOME

            ws.cell(row=row, column=1, value=txn.iso_date)
            ws.cell(row=row, column=2, value=txn.description)
            ws.cell(row=row, column=3, value=txn.value if is_income else None)
            ws.cell(row=row, column=4, value=None if is_income else txn.value)
            ws.cell(row=row, column=5, value=txn.type.value)
            ws.cell(row=row, column=6, value=txn.status.value)
            ws.cell(row=row, column=7, value=txn.due_date.isoformat() if txn.due_date else "")

            for col in (3, 4):
                ws.cell(row=row, column=col).number_format = self.currency_format

            # Pending rows need attention before reconciliation
            if txn.is_pending:
                for col in range(1, len(self.HEADERS) + 1):
                    ws.cell(row=row, column=col).fill = PatternFill(
                        start_color=self.INFO_COLOR,
                        fill_type="solid"
                    )

        for col in range(1, len(self.HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 15
        ws.column_dimensions['B'].width = 50

        total_row = len(result.transactions) + 3
        ws.cell(row=total_row, column=1, value="TOTALS")
        ws.cell(row=total_row, column=1).font = Font(bold=True)
        ws.cell(row=total_row, column=3, value=round(result.total_income, 2))
        ws.cell(row=total_row, column=4, value=round(result.total_expense, 2))

        for col in (3, 4):
            cell = ws.cell(row=total_row, column=col)
            cell.font = Font(bold=True)
            cell.number_format = self.currency_format
            cell.fill = PatternFill(start_color=self.INFO_COLOR, fill_type="solid")

        ws.freeze_panes = "A2"

    def _create_import_log_sheet(self, wb: openpyxl.Workbook, result: ImportResult) -> None:
        """Create import log sheet."""
        ws = wb.create_sheet("Import Log", 1)

        ws.cell(row=1, column=1, value="Statement Import Log")
        ws.cell(row=1, column=1).font = Font(bold=True, size=14)

        row = 3
        ws.cell(row=row, column=1, value="Status:")
        ws.cell(row=row, column=2, value="SUCCESS" if result.success else "FAILED")
        ws.cell(row=row, column=2).font = Font(bold=True)
        ws.cell(row=row, column=2).fill = PatternFill(
            start_color=self.SUCCESS_COLOR if result.success else self.WARNING_COLOR,
            fill_type="solid"
        )
        row += 2

        details = [
            ("File", result.file_name or "-"),
            ("Source Type", result.source_type),
            ("Profile", result.profile_name or "-"),
            ("Strategy", result.strategy or "-"),
            ("Statement Year", result.statement_year or "-"),
            ("Pages", result.page_count),
            ("Candidates", result.candidate_count),
            ("Duplicates Removed", result.duplicates_removed),
            ("Transactions", result.transaction_count),
            ("Pending", len(result.pending_transactions)),
            ("Processing Time", f"{result.processing_time:.2f} seconds"),
            ("Imported At", result.imported_at.strftime("%Y-%m-%d %H:%M:%S")),
        ]
        for label, value in details:
            ws.cell(row=row, column=1, value=f"{label}:")
            ws.cell(row=row, column=2, value=value)
            row += 1
        row += 1

        if result.warnings:
            ws.cell(row=row, column=1, value="Warnings:")
            ws.cell(row=row, column=1).font = Font(bold=True)
            row += 1

            for warning in result.warnings:
                ws.cell(row=row, column=2, value=warning)
                ws.cell(row=row, column=2).fill = PatternFill(
                    start_color=self.INFO_COLOR,
                    fill_type="solid"
                )
                row += 1
            row += 1

        if result.error_message:
            ws.cell(row=row, column=1, value="Error:")
            ws.cell(row=row, column=1).font = Font(bold=True)
            ws.cell(row=row, column=2, value=result.error_message)
            ws.cell(row=row, column=2).fill = PatternFill(
                start_color=self.WARNING_COLOR,
                fill_type="solid"
            )

        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 60


def generate_output_filename(source_name: str, output_dir: Optional[Path] = None) -> Path:
    """
    Generate standardized output filename.

    Format: {source stem}_{YYYY-MM-DD}_{timestamp}.xlsx

    Args:
        source_name: Imported file name
        output_dir: Output directory (default: OUTPUT_DIR)

    Returns:
        Path for output file
    """
    from ..config.settings import OUTPUT_DIR

    if output_dir is None:
        output_dir = OUTPUT_DIR

    now = datetime.now()
    stem = Path(source_name).stem.lower().replace(' ', '_')
    filename = f"{stem}_{now.strftime('%Y-%m-%d')}_{now.strftime('%H%M%S')}.xlsx"

    return Path(output_dir) / filename
