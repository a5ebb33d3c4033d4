"""
Command Dispatch.

Every command body hands an async handler to run_command. Handlers return a
CommandResult or raise an ApplicationError; run_command is the only place
that prints failures and chooses the process exit code.
"""

import asyncio
import io
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import typer
from rich.console import Console, RenderableType
from rich.json import JSON
from rich.text import Text

from cdn77_client.api.client import APIClient
from cdn77_client.core.config import resolve_api_token
from cdn77_client.core.exceptions import ApplicationError
from cdn77_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)

Handler = Callable[[APIClient], Awaitable["CommandResult"]]


@dataclass
class GlobalOptions:
    """Options given before the command group, stored on the typer context."""

    api_token: str | None = None


@dataclass
class CommandResult:
    """Output of a successful command, printed to stdout. Success always exits 0."""

    renderables: list[RenderableType] = field(default_factory=list)

    @classmethod
    def lines(cls, *lines: str) -> "CommandResult":
        """Plain text lines, printed without markup or highlighting."""
        return cls([Text(line) for line in lines])

    @classmethod
    def notice(cls, message: str) -> "CommandResult":
        """Informational outcome that still exits successfully."""
        return cls([Text(message, style="yellow")])

    @classmethod
    def json(cls, value: Any) -> "CommandResult":
        """Pretty-printed JSON passthrough."""
        return cls([JSON.from_data(value, indent=2)])

    @property
    def plain_text(self) -> str:
        """Text of all renderables, without styling."""
        buffer = io.StringIO()
        plain_console = Console(file=buffer, color_system=None, width=200)
        for renderable in self.renderables:
            plain_console.print(renderable, soft_wrap=True)
        return buffer.getvalue()


def create_api_client(token: str) -> APIClient:
    """Create the client a command talks to the API with."""
    return APIClient(token)


async def _execute(handler: Handler, client: APIClient) -> CommandResult:
    async with client:
        return await handler(client)


def run_command(ctx: typer.Context, handler: Handler) -> None:
    """
    Run one command handler and map its outcome to output and an exit code.

    Args:
        ctx: Typer context carrying GlobalOptions
        handler: Async callable receiving the APIClient

    Raises:
        typer.Exit: With the exit code of the ApplicationError raised
    """
    options = ctx.find_object(GlobalOptions) or GlobalOptions()

    try:
        token = resolve_api_token(options.api_token)
        result = asyncio.run(_execute(handler, create_api_client(token)))
    except ApplicationError as e:
        log_with_source(
            logger,
            "cli",
            "info",
            "Command failed",
            command=ctx.command_path,
            error_code=e.code,
            exit_code=e.exit_code,
        )
        err_console.print(Text(e.message), soft_wrap=True)
        raise typer.Exit(e.exit_code) from e

    for renderable in result.renderables:
        console.print(renderable, soft_wrap=True)

    log_with_source(
        logger,
        "cli",
        "debug",
        "Command finished",
        command=ctx.command_path,
    )
