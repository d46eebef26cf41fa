"""skucodec CLI.

Commands:
- generate: Compose internal code, barcode and names (optionally a batch)
- checksum: Compute the check digit for a digit payload
- verify: Validate a barcode's trailing check digit
- normalize: Show the canonical text or code form of a string
- extract: Extract the candidate code from text or a filename
- match: Resolve text against a catalog CSV
- tag-images: Match image files to a catalog CSV by filename
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from skucodec.canonical.checksum import InvalidInputError, checksum, verify_check_digit
from skucodec.canonical.normalizer import normalize_code, normalize_text
from skucodec.config import get_config
from skucodec.core.logging import configure_logging
from skucodec.encoding.generator import IdentityGenerator
from skucodec.encoding.loader import ConfigurationError
from skucodec.encoding.schema import SchemaError
from skucodec.matching.bulk import BulkTagger
from skucodec.matching.catalog import load_catalog, load_name_hints
from skucodec.matching.extractor import extract_code, extract_code_from_filename
from skucodec.matching.matcher import CodeMatcher
from skucodec.models import MatchMethod, MatchQuery, ProductAttributes, QuerySource

app = typer.Typer(
    name="skucodec",
    help="skucodec - product codes, check-digit barcodes and catalog matching",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def _setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    config = get_config()
    configure_logging(
        level="DEBUG" if verbose else config.log_level,
        json_logs=config.log_format == "json" and not verbose,
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


@app.command()
def generate(
    category: str = typer.Option(..., "--category", "-c", help="Category code (e.g. BOX)"),
    brand: str = typer.Option(..., "--brand", "-b", help="Brand code"),
    color: str = typer.Option(..., "--color", help="Color code"),
    collection: str | None = typer.Option(None, "--collection", help="Collection code"),
    quantity: str | None = typer.Option(None, "--qty", help="Pack quantity"),
    unit: str | None = typer.Option(None, "--unit", help="Unit code"),
    material: str | None = typer.Option(None, "--material", help="Material code"),
    sequence: str | None = typer.Option(
        None, "--sequence", help="Explicit sequence (default: HHMM); first sequence with --count"
    ),
    product_name: str | None = typer.Option(None, "--name", help="Base product name (Arabic)"),
    product_name_en: str | None = typer.Option(None, "--name-en", help="Base product name (English)"),
    count: int = typer.Option(1, "--count", "-n", help="Batch size; sequences 0001..N by default"),
    at: datetime | None = typer.Option(None, "--at", help="Clock reading (ISO), default now"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Generate internal code, barcode and bilingual names."""
    attrs = ProductAttributes(
        category=category,
        brand=brand,
        color=color,
        collection=collection,
        quantity=quantity,
        unit=unit,
        material=material,
        sequence=sequence,
        product_name=product_name,
        product_name_english=product_name_en,
    )

    try:
        generator = IdentityGenerator.from_config()
        if count > 1:
            start = 1
            if attrs.sequence:
                if not (attrs.sequence.isascii() and attrs.sequence.isdigit()):
                    _fail(f"--sequence must be numeric with --count, got {attrs.sequence!r}")
                start = int(attrs.sequence)
            identities = generator.generate_batch(attrs, count, start=start, now=at)
        else:
            identities = [generator.generate(attrs, now=at)]
    except (ConfigurationError, SchemaError, ValueError) as e:
        _fail(str(e))

    if as_json:
        typer.echo(json.dumps([i.model_dump() for i in identities], ensure_ascii=False, indent=2))
        return

    table = Table(title="Generated Identities")
    table.add_column("Internal Code", style="cyan")
    table.add_column("Barcode", style="green")
    table.add_column("English")
    table.add_column("Arabic")
    for identity in identities:
        table.add_row(
            identity.internal_code, identity.barcode, identity.name_english, identity.name_arabic
        )
    console.print(table)

    if count == 1:
        breakdown = " | ".join(f"{k}={v}" for k, v in identities[0].breakdown.items())
        console.print(f"[dim]{breakdown}[/dim]")


@app.command(name="checksum")
def checksum_cmd(payload: str = typer.Argument(..., help="Digit payload")):
    """Print the check digit for PAYLOAD."""
    try:
        digit = checksum(payload)
    except InvalidInputError as e:
        _fail(str(e))
    typer.echo(digit)


@app.command()
def verify(code: str = typer.Argument(..., help="Full barcode including check digit")):
    """Check that CODE ends with a valid check digit."""
    try:
        ok = verify_check_digit(code)
    except InvalidInputError as e:
        _fail(str(e))

    if ok:
        console.print(f"[bold green]✓[/bold green] {code} is valid")
    else:
        console.print(f"[red]✗[/red] {code} has an invalid check digit")
        raise typer.Exit(1)


@app.command()
def normalize(
    text: str = typer.Argument(..., help="Text to normalize"),
    code: bool = typer.Option(False, "--code", help="Normalize as a product code"),
):
    """Print the canonical form of TEXT."""
    typer.echo(normalize_code(text) if code else normalize_text(text))


@app.command()
def extract(
    text: str = typer.Argument(..., help="Free text, OCR output or filename"),
    filename: bool = typer.Option(False, "--filename", help="Treat TEXT as a filename"),
):
    """Print the candidate code found in TEXT."""
    found = extract_code_from_filename(text) if filename else extract_code(text)
    if found is None:
        console.print("[yellow]No code found[/yellow]")
        raise typer.Exit(1)
    typer.echo(found)


@app.command(name="match")
def match_cmd(
    text: str = typer.Argument(..., help="Text to resolve"),
    catalog_path: Path = typer.Option(..., "--catalog", help="Catalog CSV (id,code,name)"),
    source: QuerySource = typer.Option(QuerySource.MANUAL, "--source", help="Input source"),
    hints_path: Path | None = typer.Option(None, "--hints", help="code,name hint CSV"),
):
    """Resolve TEXT to a catalog product by code, then by name."""
    if not catalog_path.exists():
        _fail(f"File not found: {catalog_path}")

    catalog = load_catalog(catalog_path)
    hints = load_name_hints(hints_path) if hints_path else None
    result = CodeMatcher(hints).match(MatchQuery(raw_text=text, source=source), catalog)

    if result.method is MatchMethod.NONE:
        console.print(f"[yellow]No match:[/yellow] {result.reason}")
        raise typer.Exit(1)

    console.print(
        f"[bold green]✓[/bold green] {result.matched_product_id} "
        f"(by {result.method.value}, code={result.code or '-'})"
    )


@app.command(name="tag-images")
def tag_images(
    files: list[Path] = typer.Argument(..., help="Image files"),
    catalog_path: Path = typer.Option(..., "--catalog", help="Catalog CSV (id,code,name)"),
    hints_path: Path | None = typer.Option(None, "--hints", help="code,name hint CSV"),
):
    """Match image files to catalog products by filename."""
    if not catalog_path.exists():
        _fail(f"File not found: {catalog_path}")

    catalog = load_catalog(catalog_path)
    hints = load_name_hints(hints_path) if hints_path else None
    tagger = BulkTagger(catalog, matcher=CodeMatcher(hints))
    report = asyncio.run(tagger.tag(files))

    table = Table(title="Image Matches")
    table.add_column("File", style="cyan")
    table.add_column("Product", style="green")
    table.add_column("Method")
    table.add_column("Reason", style="yellow")
    for outcome in report.outcomes:
        table.add_row(
            outcome.path.name,
            outcome.result.matched_product_id or "-",
            outcome.result.method.value,
            outcome.result.reason or "",
        )
    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {report.stats['matched']}/{report.stats['attempted']} matched "
        f"({report.stats['unsupported']} unsupported)"
    )


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
