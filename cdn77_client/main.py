"""
CDN77 CLI Application.

Command-line client for the CDN77 API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    cdn77 --help                                  # Show help
    cdn77 billing credit-balance                  # Current credit balance
    cdn77 jobs purge -r 1234 -p "/img/*,/a.css"   # Purge paths
    cdn77 jobs purge-all -r 1234                  # Purge everything
    cdn77 jobs prefetch -r 1234 -p /video.mp4     # Prefetch paths
    cdn77 jobs list -r 1234 -t purge              # Job log
    cdn77 jobs detail -r 1234 -j <job-id>         # Job detail
    cdn77 resources list                          # CDN resources
    cdn77 statistics get traffic --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    cdn77 storage list                            # Storage locations

Options:
    --api-token, -t   API token (prefer the CDN77_API_TOKEN environment variable)
    --verbose, -v     Enable verbose output (INFO level logging)
    --debug, -d       Enable debug mode (DEBUG level logging)

Exit codes:
    0  success
    2  invalid input
    3  expected API error (not found, forbidden, unauthorized)
    4  unexpected API error (undocumented status, malformed response, network failure)
"""

from typing import Optional

import typer
from rich.console import Console

from cdn77_client import __version__
from cdn77_client.commands import billing_app, jobs_app, resources_app, statistics_app, storage_app
from cdn77_client.commands._runner import GlobalOptions
from cdn77_client.core.logging import setup_logging

app = typer.Typer(
    name="cdn77",
    help="Command line client for the CDN77 API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console(stderr=True)

# Register command groups
app.add_typer(billing_app, name="billing")
app.add_typer(jobs_app, name="jobs")
app.add_typer(resources_app, name="resources")
app.add_typer(statistics_app, name="statistics")
app.add_typer(storage_app, name="storage")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cdn77-client {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    api_token: Optional[str] = typer.Option(
        None,
        "--api-token",
        "-t",
        help="Either provide the token (dangerous!) or set the CDN77_API_TOKEN environment variable (preferred)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Command line client for the CDN77 API.

    Billing, purge/prefetch jobs, CDN resources, statistics and storage locations.
    """
    ctx.obj = GlobalOptions(api_token=api_token)

    # Configure logging based on flags
    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
