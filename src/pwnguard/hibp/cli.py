"""
CLI commands for Pwned Passwords checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pwnguard.hibp.client import HIBPClient
from pwnguard.hibp.config import HIBPSettings
from pwnguard.hibp.integration import describe_client_check
from pwnguard.hibp.models import CheckOutcome

console = Console()


def outcome_color(outcome: CheckOutcome) -> str:
    """Get color for a check outcome."""
    colors = {
        CheckOutcome.FOUND: "bold red",
        CheckOutcome.NOT_FOUND: "green",
        CheckOutcome.INDETERMINATE: "yellow",
    }
    return colors.get(outcome, "white")


@click.group()
@click.pass_context
def hibp(ctx: click.Context) -> None:
    """Have I Been Pwned - password breach checks.

    Passwords are checked with k-anonymity: only the first 5 characters
    of the SHA-1 hash are sent to https://api.pwnedpasswords.com.
    """
    ctx.ensure_object(dict)
    ctx.obj.setdefault("console", console)
    ctx.obj.setdefault("settings", HIBPSettings.from_env())


# =============================================================================
# Password Checking
# =============================================================================

@hibp.command("password")
@click.option("--password", "-p", help="Password to check (or prompts securely)")
@click.option("--hash", "password_hash", help="SHA-1 hash to check instead")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_password(
    ctx: click.Context,
    password: str | None,
    password_hash: str | None,
    json_output: bool,
) -> None:
    """Check if a password has been exposed in data breaches.

    Example:
        pwnguard hibp password
        pwnguard hibp password --hash 5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8
    """
    settings: HIBPSettings = ctx.obj["settings"]
    transport = ctx.obj.get("transport")

    if not password and not password_hash:
        password = click.prompt("Password to check", hide_input=True)

    async def _check():
        async with HIBPClient.from_settings(settings, transport=transport) as client:
            if password_hash:
                return await client.check_password_result(password_hash, already_hashed=True)
            return await client.check_password_result(password)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Checking password...", total=None)
        result = asyncio.run(_check())

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        if result.error:
            raise SystemExit(1)
        return

    if result.error:
        console.print(f"[red]Error: {result.error}[/red]")
        raise SystemExit(1)

    color = outcome_color(result.outcome)

    if not result.is_pwned:
        console.print(Panel(
            f"[green]Good news![/green] {result.description}",
            title="Password Check Result"
        ))
    else:
        console.print(Panel(
            f"[{color}]Warning![/{color}] {result.description}",
            title="Password Check Result"
        ))


@hibp.command("passwords")
@click.argument("passwords_file", type=click.Path(exists=True))
@click.option("--hashes", is_flag=True, help="File contains SHA-1 hashes instead of passwords")
@click.option("--output", "-o", type=click.Path(), help="Output file for results")
@click.pass_context
def check_passwords_batch(
    ctx: click.Context,
    passwords_file: str,
    hashes: bool,
    output: str | None,
) -> None:
    """Check multiple passwords/hashes from a file.

    File should contain one password or SHA-1 hash per line.

    Example:
        pwnguard hibp passwords passwords.txt
        pwnguard hibp passwords hashes.txt --hashes
    """
    settings: HIBPSettings = ctx.obj["settings"]
    transport = ctx.obj.get("transport")

    items = Path(passwords_file).read_text().strip().split("\n")
    items = [i.strip() for i in items if i.strip()]

    if not items:
        console.print("[yellow]No items found in file[/yellow]")
        return

    console.print(f"Checking {len(items)} {'hashes' if hashes else 'passwords'}...")

    async def _check_batch():
        results = []
        async with HIBPClient.from_settings(settings, transport=transport) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=console,
            ) as progress:
                task = progress.add_task("Checking...", total=len(items))

                for item in items:
                    result = await client.check_password_result(item, already_hashed=hashes)
                    # Only the hash prefix ever identifies a plaintext entry
                    results.append((item if hashes else f"{result.hash_prefix}...", result))
                    progress.advance(task)

        return results

    results = asyncio.run(_check_batch())

    counts = {outcome: 0 for outcome in CheckOutcome}
    for _, r in results:
        counts[r.outcome] += 1

    console.print(
        f"\n[bold]Results:[/bold] {counts[CheckOutcome.FOUND]}/{len(results)} found in breaches"
    )

    table = Table(title="Outcome Distribution")
    table.add_column("Outcome", style="cyan")
    table.add_column("Count", justify="right")
    for outcome in CheckOutcome:
        color = outcome_color(outcome)
        table.add_row(f"[{color}]{outcome.value.upper()}[/{color}]", str(counts[outcome]))
    console.print(table)

    if output:
        output_data = [
            {"identifier": ident, "result": result.to_dict()}
            for ident, result in results
        ]
        Path(output).write_text(json.dumps(output_data, indent=2, default=str))
        console.print(f"\n[green]Results saved to {output}[/green]")


# =============================================================================
# Browser Check
# =============================================================================

@hibp.command("client-check")
@click.argument("field_selector")
@click.argument("error_selector")
@click.option("--enable-server", is_flag=True, help="Treat the server-side check as enabled")
@click.option("--enable-js", is_flag=True, help="Treat the browser-side check as enabled")
@click.pass_context
def client_check(
    ctx: click.Context,
    field_selector: str,
    error_selector: str,
    enable_server: bool,
    enable_js: bool,
) -> None:
    """Print the browser-side check description for a password field.

    Example:
        pwnguard hibp client-check '#passwrd1' '#passwrd1'
        pwnguard hibp client-check '#pw' '#pw_err' --enable-server --enable-js
    """
    settings: HIBPSettings = ctx.obj["settings"]
    settings = replace(
        settings,
        server_check_enabled=settings.server_check_enabled or enable_server,
        client_check_enabled=settings.client_check_enabled or enable_js,
    )

    descriptor = describe_client_check(field_selector, error_selector, settings)
    if descriptor is None:
        console.print("[yellow]Browser check is disabled (needs both HIBP flags enabled)[/yellow]")
        raise SystemExit(1)

    click.echo(json.dumps(descriptor.to_dict(), indent=2))


# =============================================================================
# Configuration
# =============================================================================

@hibp.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show breach check configuration."""
    settings: HIBPSettings = ctx.obj["settings"]

    def flag(value: bool) -> str:
        return "[green]Enabled[/green]" if value else "[dim]Disabled[/dim]"

    table = Table(title="HIBP Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Server-side check", flag(settings.server_check_enabled))
    table.add_row("Browser-side check", flag(settings.client_check_enabled))
    table.add_row("Range URL", settings.range_url)
    table.add_row("Timeout", f"{settings.timeout}s")

    console.print(table)

    errors = settings.validate()
    if errors:
        console.print("\n[red]Configuration problems:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise SystemExit(1)


def add_hibp_commands(main_cli):
    """Add HIBP commands to main CLI."""
    main_cli.add_command(hibp)
