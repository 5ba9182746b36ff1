#!/usr/bin/env python3
"""
Command line interface for the procurement comparison engine.
Segments indents, parses vendor quotes and prints the comparison matrix.
"""

import json
import logging
from datetime import date
from typing import Any, List, Optional, Sequence, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .comparison import build_comparison, comparison_to_dict, summarize_vendors
from .config import EngineConfig
from .engine import HeuristicEngine
from .file_reader import read_text
from .landed_cost import format_currency
from .models import ComparisonRow, VendorQuote
from .rfq_email import RFQ, MailLog, generate_rfq_email

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()


def _emit_json(payload: Any, output: Optional[str]):
    json_str = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(json_str)
        logger.info(f"Results saved to: {output}")
    else:
        click.echo(json_str)


def _parse_vendor_option(value: str) -> Tuple[str, str]:
    vendor, sep, path = value.partition('=')
    if not sep or not vendor.strip() or not path.strip():
        raise click.BadParameter(f"expected VENDOR=FILE, got {value!r}", param_hint='--quote')
    return vendor.strip(), path.strip()


def render_comparison_table(rows: Sequence[ComparisonRow], currency: str) -> Table:
    """Rich table: one column per vendor, lowest cost in green, shortest lead time flagged."""
    vendor_names = {}
    for row in rows:
        for vendor_id, offer in row.vendors.items():
            vendor_names.setdefault(vendor_id, offer.vendor_name)

    table = Table(title="Quote Comparison", show_lines=True)
    table.add_column("Line #", justify="right")
    table.add_column("Description")
    table.add_column("Qty", justify="right")
    for vendor_name in vendor_names.values():
        table.add_column(escape(vendor_name), justify="right")

    for row in rows:
        cells: List[str] = [str(row.line_number), escape(row.description), f"{row.quantity} {row.unit}"]
        for vendor_id in vendor_names:
            offer = row.vendors.get(vendor_id)
            if offer is None:
                cells.append("[dim]no quote[/dim]")
                continue
            cell = format_currency(offer.landed_cost, currency) if offer.landed_cost is not None else "n/a"
            if offer.lead_time_days is not None:
                cell += f"\n{offer.lead_time_days} days"
            if vendor_id == row.lowest_lead_time_vendor:
                cell += " [blue]*[/blue]"
            if vendor_id == row.lowest_cost_vendor:
                cell = f"[bold green]{cell}[/bold green]"
            cells.append(cell)
        table.add_row(*cells)
    return table


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose: bool):
    """Normalize indents, parse vendor quotes and compare offers."""
    config = EngineConfig.from_env()
    logging.getLogger().setLevel(logging.DEBUG if verbose else config.log_level)
    ctx.obj = HeuristicEngine(config)


@cli.command()
@click.argument('indent_path', type=click.Path(exists=True))
@click.option('--normalize/--no-normalize', default=True, help='Attach normalized items')
@click.option('--output', '-o', type=click.Path(), help='Output JSON file path')
@click.pass_obj
def segment(engine: HeuristicEngine, indent_path: str, normalize: bool, output: Optional[str]):
    """Split an indent file into line items."""
    try:
        lines = engine.build_indent_lines(read_text(indent_path), normalize=normalize)
        _emit_json([line.to_dict() for line in lines], output)
    except Exception as e:
        click.echo(f"Error segmenting indent: {e}", err=True)
        raise click.Abort()


@cli.command('parse-quote')
@click.argument('quote_path', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), help='Output JSON file path')
@click.pass_obj
def parse_quote(engine: HeuristicEngine, quote_path: str, output: Optional[str]):
    """Extract priced lines from a vendor quote file."""
    try:
        quote_lines = engine.parse_quote_text(read_text(quote_path))
        _emit_json([line.to_dict() for line in quote_lines], output)
    except Exception as e:
        click.echo(f"Error parsing quote: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument('indent_path', type=click.Path(exists=True))
@click.option('--quote', '-q', 'quotes', multiple=True, required=True,
              help='Vendor quote as VENDOR=FILE; repeat per vendor')
@click.option('--min-score', type=click.FloatRange(0.0, 1.0), default=None,
              help='Minimum match score for a quote line to count')
@click.option('--format', 'output_format', type=click.Choice(['json', 'table']), default='json')
@click.option('--output', '-o', type=click.Path(), help='Output JSON file path')
@click.pass_obj
def compare(engine: HeuristicEngine, indent_path: str, quotes: Tuple[str, ...],
            min_score: Optional[float], output_format: str, output: Optional[str]):
    """Match vendor quotes to an indent and compare landed costs."""
    vendor_files = [_parse_vendor_option(value) for value in quotes]
    vendor_ids = [vendor for vendor, _ in vendor_files]
    duplicates = sorted({vendor for vendor in vendor_ids if vendor_ids.count(vendor) > 1})
    if duplicates:
        raise click.BadParameter(f"vendor given more than once: {', '.join(duplicates)}",
                                 param_hint='--quote')
    if min_score is not None:
        engine.config.match_min_score = min_score

    try:
        indent_lines = engine.build_indent_lines(read_text(indent_path))
        vendor_quotes = {}
        for vendor, path in vendor_files:
            quote_lines = engine.parse_quote_text(read_text(path))
            vendor_quotes[vendor] = VendorQuote(
                vendor_id=vendor,
                vendor_name=vendor,
                quote_lines=engine.match_quote_lines(quote_lines, indent_lines),
            )
        rows = build_comparison(indent_lines, vendor_quotes, engine.config.currency)
    except Exception as e:
        click.echo(f"Error building comparison: {e}", err=True)
        raise click.Abort()

    if output_format == 'table' and not output:
        console.print(render_comparison_table(rows, engine.config.currency))
        for summary in summarize_vendors(rows):
            console.print(
                f"{escape(summary.vendor_name)}: {summary.items_quoted} quoted, "
                f"{summary.best_price_count} lowest, "
                f"total {format_currency(summary.total_landed_value, engine.config.currency)}"
            )
    else:
        _emit_json(comparison_to_dict(rows), output)


@cli.command('rfq-email')
@click.argument('indent_path', type=click.Path(exists=True))
@click.option('--vendor', required=True, help='Vendor name to address')
@click.option('--to', 'recipient', default=None, help='Vendor email address')
@click.option('--rfq-number', required=True)
@click.option('--title', required=True)
@click.option('--due-date', type=click.DateTime(formats=['%Y-%m-%d']), default=None)
@click.pass_obj
def rfq_email(engine: HeuristicEngine, indent_path: str, vendor: str, recipient: Optional[str],
              rfq_number: str, title: str, due_date):
    """Compose an RFQ email for an indent (logged, never sent)."""
    try:
        indent_lines = engine.build_indent_lines(read_text(indent_path), normalize=False)
    except Exception as e:
        click.echo(f"Error reading indent: {e}", err=True)
        raise click.Abort()

    due: Optional[date] = due_date.date() if due_date else None
    email = generate_rfq_email(RFQ(rfq_number, title, due), vendor, indent_lines)
    mail_log = MailLog()
    mail_log.send(recipient or vendor, email.subject, email.body)
    click.echo(f"Subject: {email.subject}\n\n{email.body}")


if __name__ == "__main__":
    cli()
