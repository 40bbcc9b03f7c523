"""
pwnguard CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from pwnguard import __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="pwnguard")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """pwnguard - Pwned Passwords k-anonymity checks

    Check passwords against the Have I Been Pwned breach corpus without
    sending the password, or enough of its hash to recover it.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# Import and register subcommand groups
from pwnguard.hibp.cli import add_hibp_commands

add_hibp_commands(main)


if __name__ == "__main__":
    main()
