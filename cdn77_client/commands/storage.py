"""
Storage Location Commands.

Lookups of the CDN77 storage locations available to the account.
"""

import typer

from cdn77_client.api.client import APIClient
from cdn77_client.api.decoding import decode_model, decode_model_list
from cdn77_client.api.status import OutcomeKind, check_status, notice_on, success_on
from cdn77_client.commands._runner import CommandResult, run_command
from cdn77_client.commands.billing import NO_PLAN_MESSAGE
from cdn77_client.params import parse_identifier
from cdn77_client.schemas.storage import StorageLocation

app = typer.Typer(help="Infos about storage locations", no_args_is_help=True)

STORAGE_RULES = (
    success_on(200),
    notice_on(404, NO_PLAN_MESSAGE),
)


@app.command("list")
def list_locations(ctx: typer.Context) -> None:
    """
    List all storage locations.

    Examples:
        cdn77 storage list
    """
    run_command(ctx, list_storage_locations)


@app.command()
def detail(
    ctx: typer.Context,
    storage_id: str = typer.Option(..., "--storage-id", "-s", help="ID of the storage location"),
) -> None:
    """
    Show a single storage location.

    Examples:
        cdn77 storage detail -s push-zone-1
    """
    run_command(ctx, lambda client: get_storage_location(client, storage_id))


async def list_storage_locations(client: APIClient) -> CommandResult:
    """GET /storage-location."""
    response = await client.get("/storage-location")

    outcome = check_status(response, STORAGE_RULES)
    if outcome.kind is OutcomeKind.NOTICE:
        return CommandResult.notice(outcome.message)

    locations = decode_model_list(response, StorageLocation)

    lines = [f"Found {len(locations)} storage locations"]
    for i, location in enumerate(locations):
        lines.extend(["", f"Location #{i}", f"ID={location.id}", f"Location={location.location}"])
    return CommandResult.lines(*lines)


async def get_storage_location(client: APIClient, storage_id: str) -> CommandResult:
    """GET /storage-location/{id}."""
    storage_id = parse_identifier(storage_id, "storage location ID")

    response = await client.get(f"/storage-location/{storage_id}")

    outcome = check_status(response, STORAGE_RULES)
    if outcome.kind is OutcomeKind.NOTICE:
        return CommandResult.notice(outcome.message)

    location = decode_model(response, StorageLocation)
    return CommandResult.lines(f"ID={location.id}", f"Location={location.location}")
