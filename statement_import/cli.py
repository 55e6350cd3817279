"""Command-line interface for statement import."""
import json
import sys
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .utils.logger import setup_logger
from .utils import format_currency
from .config import get_profile_loader
from .config.settings import PARSE_STRATEGIES
from .errors import ProfileNotFoundError
from .models import TransactionType

console = Console()
logger = setup_logger()


def _parse_today(ctx, param, value):
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter("expected YYYY-MM-DD")


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Statement Import - Read transactions from bank statement PDFs and CSV exports."""
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--profile', '-p', help='Statement profile (auto-detect if not specified)')
@click.option('--strategy', '-s', type=click.Choice(PARSE_STRATEGIES), help='Parsing strategy override')
@click.option('--backend', type=click.Choice(['pdfplumber', 'pymupdf']), default='pdfplumber', show_default=True,
              help='PDF text-layer backend')
@click.option('--today', callback=_parse_today, help='Processing date (YYYY-MM-DD), defaults to today')
@click.option('--json', 'json_path', type=click.Path(), help='Write the new-transaction payload as JSON')
@click.option('--output', '-o', type=click.Path(), help='Write an Excel workbook (file or existing directory)')
@click.option('--excel', is_flag=True, help='Write an Excel workbook to OUTPUT_DIR')
@click.option('--limit', type=int, default=50, show_default=True, help='Rows shown in the preview table')
def preview(file_path, profile, strategy, backend, today, json_path, output, excel, limit):
    """
    Preview the transactions found in a statement.

    FILE_PATH: Path to the statement (PDF, CSV or TXT)
    """
    from .pipeline import ImportPipeline

    file_path = Path(file_path)
    console.print(f"\n[bold blue]Statement Import[/bold blue]\n")
    console.print(f"[cyan]Processing:[/cyan] {file_path.name}")

    pipeline = ImportPipeline(today=today, pdf_backend=backend)

    try:
        result = pipeline.process(file_path, profile_name=profile, strategy=strategy)
    except ProfileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)

    if not result.success:
        console.print(f"\n[red]✗ Import failed ({result.error_kind})[/red]")
        console.print(f"  Error: {result.error_message}")
        sys.exit(1)

    _print_preview(result, limit)

    if json_path:
        payload = {'summary': result.to_dict(), 'transactions': result.to_new_transactions()}
        payload['summary'].pop('transactions', None)
        Path(json_path).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding='utf-8')
        console.print(f"[green]JSON saved to {json_path}[/green]")

    if output or excel:
        from .exporters import ExcelExporter, generate_output_filename

        output_path = Path(output) if output else None
        if output_path is None or output_path.is_dir():
            output_path = generate_output_filename(file_path.name, output_path)

        ExcelExporter(currency=result.currency).export(result, output_path)
        console.print(f"[green]Excel saved to {output_path}[/green]")


def _print_preview(result, limit: int) -> None:
    """Render the confirmation table shown before committing an import."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Description")
    table.add_column("Value", justify="right")
    table.add_column("Type")
    table.add_column("Status")

    for txn in result.transactions[:limit]:
        is_income = txn.type is TransactionType.INCOME
        value = format_currency(txn.value if is_income else -txn.value, result.currency)
        table.add_row(
            txn.iso_date,
            txn.description,
            f"[green]{value}[/green]" if is_income else f"[red]{value}[/red]",
            txn.type.value,
            "[yellow]pending[/yellow]" if txn.is_pending else txn.status.value,
        )

    console.print(table)

    if result.transaction_count > limit:
        console.print(f"  ... {result.transaction_count - limit} more")

    console.print(f"\n[green]✓ {result.transaction_count} transactions found[/green]")
    if result.profile_name:
        console.print(f"  Profile: {result.profile_name} / strategy: {result.strategy}")
    if result.statement_year:
        console.print(f"  Statement year: {result.statement_year}")
    if result.duplicates_removed:
        console.print(f"  Duplicates removed: {result.duplicates_removed}")
    console.print(f"  Income: {format_currency(result.total_income, result.currency)}")
    console.print(f"  Expense: {format_currency(result.total_expense, result.currency)}")
    console.print(f"  Pending: {len(result.pending_transactions)}")

    if result.warnings:
        console.print(f"\n[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  ⚠ {warning}")


@cli.command()
def profiles():
    """List statement profiles."""
    console.print("\n[bold blue]Statement Profiles[/bold blue]\n")

    loader = get_profile_loader()

    if loader.profiles_count == 0:
        console.print("[yellow]No statement profiles found, built-in defaults will be used[/yellow]")
        console.print(f"[yellow]Add YAML files to: {loader.profiles_dir}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Profile", style="cyan")
    table.add_column("Identifiers", style="green")
    table.add_column("Strategy")
    table.add_column("Y tolerance", justify="right")

    for name in loader.get_all_profiles():
        profile = loader.get_profile(name)
        identifiers = ", ".join(profile.identifiers[:3]) or "-"
        if len(profile.identifiers) > 3:
            identifiers += f" (+{len(profile.identifiers) - 3} more)"
        table.add_row(name, identifiers, profile.strategy, f"{profile.y_tolerance:g}")

    console.print(table)
    console.print(f"\n[cyan]Total profiles:[/cyan] {loader.profiles_count}")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == '__main__':
    main()
