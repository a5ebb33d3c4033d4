"""
Statistics Commands.

Time series, grouped and summed usage statistics. Time series and grouped
payloads are passed through as pretty-printed JSON; the client does not
model their schema.

All commands take a time window as --from/--to in 'YYYY-MM-DD hh:mm' (UTC)
and optional comma separated --resource-ids and --location-ids filters.
"""

from collections.abc import Callable
from typing import Any, Optional

import httpx
import typer

from cdn77_client.api.client import APIClient
from cdn77_client.api.decoding import decode_json, decode_model
from cdn77_client.api.status import check_status, expected_failure_on, success_on
from cdn77_client.commands._runner import CommandResult, run_command
from cdn77_client.params import parse_location_ids, parse_resource_ids_optional, parse_time_range
from cdn77_client.schemas.statistics import (
    PercentileResponse,
    StatsRequest,
    StatsSumRequest,
    StatType,
    SumResponse,
    SumStatType,
)

app = typer.Typer(help="Get statistics", no_args_is_help=True)

NO_GROUPING_MESSAGE = "Could not get stats for this type without grouping"

FROM_HELP = "Start of the period, 'YYYY-MM-DD hh:mm' (UTC)"
TO_HELP = "End of the period, 'YYYY-MM-DD hh:mm' (UTC)"
RESOURCE_IDS_HELP = "Comma separated list of resource IDs to filter by"
LOCATION_IDS_HELP = "Comma separated list of data center location IDs to filter by"
AGGREGATION_HELP = "Time bucket size of the series, as accepted by the API"


def _build_sum_request(
    start: str,
    end: str,
    resource_ids: str | None,
    location_ids: str | None,
) -> StatsSumRequest:
    time_range = parse_time_range(start, end)
    return StatsSumRequest(
        from_=time_range.start_timestamp,
        to=time_range.end_timestamp,
        cdn_ids=parse_resource_ids_optional(resource_ids),
        location_ids=parse_location_ids(location_ids),
    )


def _build_request(
    start: str,
    end: str,
    resource_ids: str | None,
    location_ids: str | None,
    aggregation: str | None,
) -> StatsRequest:
    base = _build_sum_request(start, end, resource_ids, location_ids)
    aggregation = aggregation.strip() if aggregation else None
    return StatsRequest(**base.model_dump(), aggregation=aggregation or None)


async def _query(
    client: APIClient,
    path: str,
    request: StatsSumRequest,
    not_found_message: str,
    render: Callable[[httpx.Response], CommandResult],
) -> CommandResult:
    response = await client.post(path, json=request.to_payload())
    check_status(
        response,
        (
            success_on(200),
            expected_failure_on(404, not_found_message, include_body=True),
        ),
    )
    return render(response)


def _render_json(response: httpx.Response) -> CommandResult:
    return CommandResult.json(decode_json(response))


def _render_percentile(response: httpx.Response) -> CommandResult:
    return CommandResult.lines(f"Percentile: {decode_model(response, PercentileResponse).percentile}")


def _render_sum(response: httpx.Response) -> CommandResult:
    return CommandResult.lines(f"Sum: {decode_model(response, SumResponse).sum}")


# =============================================================================
# Handlers
# =============================================================================


async def get_stats(
    client: APIClient,
    stat_type: StatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
    aggregation: str | None = None,
) -> CommandResult:
    """POST /stats/{type}."""
    request = _build_request(start, end, resource_ids, location_ids, aggregation)
    return await _query(
        client, f"/stats/{StatType(stat_type).value}", request, NO_GROUPING_MESSAGE, _render_json,
    )


async def get_bandwidth_percentile(
    client: APIClient,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
) -> CommandResult:
    """POST /stats/bandwidth/percentile."""
    request = _build_sum_request(start, end, resource_ids, location_ids)
    return await _query(
        client, "/stats/bandwidth/percentile", request, NO_GROUPING_MESSAGE, _render_percentile,
    )


async def get_stats_by_resource(
    client: APIClient,
    stat_type: StatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
    aggregation: str | None = None,
) -> CommandResult:
    """POST /stats/cdns/{type}."""
    request = _build_request(start, end, resource_ids, location_ids, aggregation)
    return await _query(
        client,
        f"/stats/cdns/{StatType(stat_type).value}",
        request,
        "Couldn't get stat type grouped by resource",
        _render_json,
    )


async def get_stats_sum_by_resource(
    client: APIClient,
    stat_type: SumStatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
) -> CommandResult:
    """POST /stats/cdns/sum/{type}."""
    request = _build_sum_request(start, end, resource_ids, location_ids)
    return await _query(
        client,
        f"/stats/cdns/sum/{SumStatType(stat_type).value}",
        request,
        "Couldn't get stat sum by resource",
        _render_json,
    )


async def get_stats_by_datacenter(
    client: APIClient,
    stat_type: StatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
    aggregation: str | None = None,
) -> CommandResult:
    """POST /stats/datacenters/{type}."""
    request = _build_request(start, end, resource_ids, location_ids, aggregation)
    return await _query(
        client,
        f"/stats/datacenters/{StatType(stat_type).value}",
        request,
        "Couldn't get stat type grouped by datacenter",
        _render_json,
    )


async def get_stats_sum_by_datacenter(
    client: APIClient,
    stat_type: SumStatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
) -> CommandResult:
    """POST /stats/datacenters/sum/{type}."""
    request = _build_sum_request(start, end, resource_ids, location_ids)
    return await _query(
        client,
        f"/stats/datacenters/sum/{SumStatType(stat_type).value}",
        request,
        "Couldn't get stat sum by data center",
        _render_json,
    )


async def get_stats_sum(
    client: APIClient,
    stat_type: SumStatType,
    start: str,
    end: str,
    resource_ids: str | None = None,
    location_ids: str | None = None,
) -> CommandResult:
    """POST /stats/sum/{type}."""
    request = _build_sum_request(start, end, resource_ids, location_ids)
    return await _query(
        client,
        f"/stats/sum/{SumStatType(stat_type).value}",
        request,
        "Couldn't get stats sum",
        _render_sum,
    )


# =============================================================================
# Commands
# =============================================================================


def _run(ctx: typer.Context, handler: Callable[..., Any], *args: Any) -> None:
    run_command(ctx, lambda client: handler(client, *args))


@app.command("get")
def get_command(
    ctx: typer.Context,
    stat_type: StatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
    aggregation: Optional[str] = typer.Option(None, "--aggregation", "-a", help=AGGREGATION_HELP),
) -> None:
    """
    Get a statistic as a time series.

    Examples:
        cdn77 statistics get traffic --from "2024-01-01 00:00" --to "2024-01-31 23:59"
    """
    _run(ctx, get_stats, stat_type, start, end, resource_ids, location_ids, aggregation)


@app.command("percentile")
def percentile_command(
    ctx: typer.Context,
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
) -> None:
    """
    Get the 95th percentile of bandwidth.

    Examples:
        cdn77 statistics percentile --from "2024-01-01 00:00" --to "2024-01-31 23:59" -r 1234
    """
    _run(ctx, get_bandwidth_percentile, start, end, resource_ids, location_ids)


@app.command("by-resource")
def by_resource_command(
    ctx: typer.Context,
    stat_type: StatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
    aggregation: Optional[str] = typer.Option(None, "--aggregation", "-a", help=AGGREGATION_HELP),
) -> None:
    """
    Get a statistic grouped by resource.

    Examples:
        cdn77 statistics by-resource bandwidth --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    """
    _run(ctx, get_stats_by_resource, stat_type, start, end, resource_ids, location_ids, aggregation)


@app.command("sum-by-resource")
def sum_by_resource_command(
    ctx: typer.Context,
    stat_type: SumStatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
) -> None:
    """
    Get the sum of a statistic per resource.

    Examples:
        cdn77 statistics sum-by-resource traffic --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    """
    _run(ctx, get_stats_sum_by_resource, stat_type, start, end, resource_ids, location_ids)


@app.command("by-datacenter")
def by_datacenter_command(
    ctx: typer.Context,
    stat_type: StatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
    aggregation: Optional[str] = typer.Option(None, "--aggregation", "-a", help=AGGREGATION_HELP),
) -> None:
    """
    Get a statistic grouped by data center.

    Examples:
        cdn77 statistics by-datacenter traffic --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    """
    _run(ctx, get_stats_by_datacenter, stat_type, start, end, resource_ids, location_ids, aggregation)


@app.command("sum-by-datacenter")
def sum_by_datacenter_command(
    ctx: typer.Context,
    stat_type: SumStatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
) -> None:
    """
    Get the sum of a statistic per data center.

    Examples:
        cdn77 statistics sum-by-datacenter costs --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    """
    _run(ctx, get_stats_sum_by_datacenter, stat_type, start, end, resource_ids, location_ids)


@app.command("sum")
def sum_command(
    ctx: typer.Context,
    stat_type: SumStatType = typer.Argument(..., help="Statistic type"),
    start: str = typer.Option(..., "--from", "-f", help=FROM_HELP),
    end: str = typer.Option(..., "--to", "-t", help=TO_HELP),
    resource_ids: Optional[str] = typer.Option(None, "--resource-ids", "-r", help=RESOURCE_IDS_HELP),
    location_ids: Optional[str] = typer.Option(None, "--location-ids", "-l", help=LOCATION_IDS_HELP),
) -> None:
    """
    Get the total of a statistic over the period.

    Examples:
        cdn77 statistics sum traffic --from "2024-01-01 00:00" --to "2024-01-02 00:00"
    """
    _run(ctx, get_stats_sum, stat_type, start, end, resource_ids, location_ids)
