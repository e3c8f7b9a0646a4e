"""
mailvet CLI - Command line interface for email validation.

Usage:
    mailvet --help                Show all commands
    mailvet check EMAIL           Validate one address
    mailvet check EMAIL --json    Print the full result as JSON
    mailvet bulk emails.txt       Validate every address in a file
    mailvet serve                 Start the API server
"""

import asyncio
import json
from pathlib import Path

import typer

from mailvet.services.email_validation import (
    Deliverability,
    ValidationResult,
    get_email_validator,
    parse_email_list,
    summarize,
)

app = typer.Typer(
    name="mailvet",
    help="mailvet CLI - validate email addresses from the command line",
    no_args_is_help=True,
)

_DELIVERABILITY_ICONS = {
    Deliverability.DELIVERABLE: "✅",
    Deliverability.RISKY: "⚠️",
    Deliverability.UNDELIVERABLE: "❌",
    Deliverability.UNKNOWN: "❔",
}


# --- Printer helpers ---


def _print_result_line(result: ValidationResult) -> None:
    """Print a one-line verdict."""
    icon = _DELIVERABILITY_ICONS[result.deliverability]
    typer.echo(
        f"{icon} {result.email}  score={result.score}  "
        f"{result.deliverability.value}  ({result.risk.value} risk)"
    )


def _print_details(result: ValidationResult) -> None:
    """Print the checks that explain the verdict."""
    checks = result.checks
    typer.echo(f"  Syntax:      {checks.syntax.message}")
    typer.echo(f"  Domain:      {checks.domain.message}")
    typer.echo(f"  MX:          {checks.mx.message}")
    if checks.mx.records:
        typer.echo(f"               {', '.join(checks.mx.records)}")
    if checks.disposable.is_disposable:
        typer.echo(f"  Disposable:  {checks.disposable.message}")
    if checks.role_based.is_role_based:
        typer.echo(f"  Role:        {checks.role_based.role}")
    if checks.free_provider.is_free:
        typer.echo(f"  Provider:    {checks.free_provider.provider}")
    if checks.typo.has_typo:
        typer.echo(f"  Did you mean {checks.typo.suggested_email}?")
    if checks.blacklisted.is_blacklisted:
        typer.echo(f"  Listed on:   {', '.join(checks.blacklisted.lists)}")
    if checks.catch_all.is_catch_all:
        typer.echo(f"  Catch-all:   {checks.catch_all.message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


@app.command()
def check(
    email: str = typer.Argument(..., help="Email address to validate"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the full result as JSON"),
):
    """Validate a single email address. Exits 1 when it is undeliverable."""
    from mailvet.core.logging import setup_logging

    setup_logging()
    validator = get_email_validator()
    result = asyncio.run(validator.validate(email))

    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, indent=2))
    else:
        _print_result_line(result)
        _print_details(result)

    if not validator.should_allow(result):
        raise typer.Exit(1)


@app.command()
def bulk(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with addresses"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print results as JSON"),
):
    """Validate every address in a file (newline, comma or semicolon separated)."""
    from mailvet.core.logging import setup_logging

    setup_logging()
    emails = parse_email_list(file.read_text(encoding="utf-8"))
    if not emails:
        _print_error(f"No email addresses found in {file}")
        raise typer.Exit(1)

    validator = get_email_validator()
    if len(emails) > validator.max_bulk_emails:
        _print_error(f"{len(emails)} addresses found, the limit is {validator.max_bulk_emails}")
        raise typer.Exit(1)

    results = asyncio.run(validator.validate_bulk(emails))
    summary = summarize(results)

    if as_json:
        payload = {
            "results": [r.model_dump(mode="json", by_alias=True) for r in results],
            "summary": summary.model_dump(mode="json", by_alias=True),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    for result in results:
        _print_result_line(result)
    typer.echo(
        f"\n{summary.total} checked: {summary.deliverable} deliverable, "
        f"{summary.risky} risky, {summary.undeliverable} undeliverable, "
        f"{summary.unknown} unknown"
    )


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import subprocess

    cmd = ["uvicorn", "mailvet.main:app", "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    app()
