"""Command-line interface for qrsign."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from qrsign import (
    Message,
    StaticPageReader,
    Validator,
    ValidatorConfig,
    VerificationStatus,
    __version__,
    check_key_pair,
    parse_message,
    save_json,
    sign_message,
    to_json,
)
from qrsign.config import LogFormat
from qrsign.core.parser import DATE_PATTERN, classify_key_location
from qrsign.exceptions import KeyNotFoundError, MalformedMessageError
from qrsign.logging import configure_logging

app = typer.Typer(
    name="qrsign",
    help="Signed QR claim verifier",
    add_completion=False,
)
console = Console()

STATUS_LABELS = {
    VerificationStatus.VERIFIED: "[green]verified[/green]",
    VerificationStatus.UNVERIFIED: "[yellow]not verified[/yellow]",
    VerificationStatus.UNKNOWN: "[dim]unknown[/dim]",
}


def version_callback(value: bool):
    if value:
        console.print(f"qrsign version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """qrsign - signed QR claim verifier."""
    configure_logging(ValidatorConfig())


def _read_payload(source: str) -> str:
    """Read QR text from a file or stdin ("-"), dropping one trailing newline."""
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            console.print(f"[red]No such file: {source}[/red]")
            raise typer.Exit(2)
        text = path.read_text(encoding="utf-8")
    return text.removesuffix("\n")


@app.command()
def parse(
    payload: str = typer.Argument(..., help="File with the scanned QR text, or - for stdin"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed message as JSON"),
):
    """Parse and check the format of a signed message."""
    try:
        signed = parse_message(_read_payload(payload))
    except MalformedMessageError as e:
        console.print(f"[red]✗[/red] Malformed message: {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(signed.model_dump_json(indent=2))
        return

    table = Table(title="Signed message", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Name", signed.message.name)
    table.add_row("Date", signed.message.date)
    table.add_row("Key type", signed.message.key_type.value)
    table.add_row("Key location", signed.message.key_location)
    table.add_row("Signature", signed.signature)
    console.print(table)


@app.command()
def verify(
    payload: str = typer.Argument(..., help="File with the scanned QR text, or - for stdin"),
    page: Optional[Path] = typer.Option(
        None, "--page", "-p", help="Use this saved page content instead of fetching"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Save the full report as JSON"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    headless: bool = typer.Option(
        True, "--headless/--no-headless", help="Run browser in headless mode"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only log errors"
    ),
):
    """Verify a signed message against the key at its declared location."""
    config = ValidatorConfig(
        headless=headless,
        log_format=LogFormat.JSON if as_json else LogFormat.CONSOLE,
    )
    if quiet:
        config.log_level = "ERROR"
    configure_logging(config)

    reader = StaticPageReader(page.read_text(encoding="utf-8")) if page else None
    validator = Validator(reader=reader, config=config)

    try:
        report = validator.verify(_read_payload(payload))
    except MalformedMessageError as e:
        console.print(f"[red]✗[/red] Malformed message: {e}")
        raise typer.Exit(1)
    except KeyNotFoundError as e:
        console.print(f"[red]✗[/red] Public key not found: {e}")
        raise typer.Exit(1)

    if output:
        save_json(report, output)
        if not as_json:
            console.print(f"[dim]Saved to {output}[/dim]")

    if as_json:
        typer.echo(to_json(report, include_content=False))
    else:
        _print_report(report)

    if not report.success:
        raise typer.Exit(1)


@app.command("check-keys")
def check_keys(
    public_key: str = typer.Argument(..., help="Base64 public key"),
    private_key: str = typer.Argument(..., help="Base64 private key seed"),
):
    """Check that a public key belongs to a private key."""
    if check_key_pair(public_key, private_key):
        console.print("[green]✓[/green] Key pair matches")
    else:
        console.print("[red]✗[/red] Key pair does not match")
        raise typer.Exit(1)


@app.command()
def sign(
    name: str = typer.Argument(..., help="Claimed identity"),
    date: str = typer.Argument(..., help="Date as YYYY-MM-DD"),
    key_location: str = typer.Argument(..., help="http(s) URL or FB:<page id>"),
    private_key: str = typer.Option(
        ..., "--private-key", "-k", envvar="QRSIGN_PRIVATE_KEY", help="Base64 private key seed"
    ),
):
    """Print the QR text for a claim signed with a private key."""
    try:
        if not DATE_PATTERN.fullmatch(date):
            raise MalformedMessageError("Date format must be YYYY-MM-DD.")
        message = Message(
            name=name,
            date=date,
            key_type=classify_key_location(key_location),
            key_location=key_location,
        )
        signed = sign_message(message, private_key)
        payload = signed.to_payload()
        # Round-trip through the parser so a name with a newline can't slip through
        parse_message(payload)
    except MalformedMessageError as e:
        console.print(f"[red]✗[/red] Malformed message: {e}")
        raise typer.Exit(1)
    except ValueError:
        console.print("[red]✗[/red] Private key must be base64 of 32 bytes")
        raise typer.Exit(1)

    typer.echo(payload)


def _print_report(report):
    """Print verification report as table."""
    m = report.signed_message.message
    v = report.validation

    table = Table(title=m.name, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Date", m.date)
    table.add_row("Key location", m.key_location)
    table.add_row("Public key", report.scrape.key)
    table.add_row("Signature", "[green]✓ valid[/green]" if v.is_well_signed else "[red]✗ invalid[/red]")
    table.add_row("Source", STATUS_LABELS[v.is_verified])
    table.add_row("Checked in", f"{report.duration_ms:.0f} ms")

    console.print(table)


if __name__ == "__main__":
    app()
