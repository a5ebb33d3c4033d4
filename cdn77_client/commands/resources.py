"""
CDN Resource Commands.

Read-only lookups of the CDN resources (distributions) of the account.
"""

import typer
from rich.table import Table

from cdn77_client.api.client import APIClient
from cdn77_client.api.decoding import decode_model, decode_model_list
from cdn77_client.api.status import check_status, success_on
from cdn77_client.commands._runner import CommandResult, run_command
from cdn77_client.params import parse_resource_id
from cdn77_client.schemas.resources import CdnResource

app = typer.Typer(help="Lookups of CDN resources", no_args_is_help=True)

RESOURCE_RULES = (success_on(200),)


@app.command("list")
def list_resources_command(ctx: typer.Context) -> None:
    """
    List all CDN resources.

    Examples:
        cdn77 resources list
    """
    run_command(ctx, list_resources)


@app.command()
def detail(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource"),
) -> None:
    """
    Show a single CDN resource.

    Examples:
        cdn77 resources detail -r 1234
    """
    run_command(ctx, lambda client: get_resource(client, resource_id))


async def list_resources(client: APIClient) -> CommandResult:
    """GET /cdn."""
    response = await client.get("/cdn")
    check_status(response, RESOURCE_RULES)

    resources = decode_model_list(response, CdnResource)
    if not resources:
        return CommandResult.lines("Found 0 CDN resources")

    table = Table(title=f"Found {len(resources)} CDN resources", show_header=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("CDN URL")
    table.add_column("CNAMEs")

    for resource in resources:
        table.add_row(
            str(resource.id),
            resource.label or "-",
            resource.cdn_url or "-",
            ", ".join(entry.cname for entry in resource.cnames) or "-",
        )

    return CommandResult([table])


async def get_resource(client: APIClient, resource_id: str) -> CommandResult:
    """GET /cdn/{id}."""
    cdn_id = parse_resource_id(resource_id)

    response = await client.get(f"/cdn/{cdn_id}")
    check_status(response, RESOURCE_RULES)

    resource = decode_model(response, CdnResource)
    lines = [
        f"ID={resource.id}",
        f"Label={resource.label or '-'}",
        f"CDN URL={resource.cdn_url or '-'}",
        f"Origin ID={resource.origin_id or '-'}",
        f"CNAMEs={', '.join(entry.cname for entry in resource.cnames) or '-'}",
    ]
    return CommandResult.lines(*lines)
