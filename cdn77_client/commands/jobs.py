"""
Job Commands.

Purging and prefetching files of a CDN resource, and the job log.
Jobs are processed asynchronously by CDN77; the mutation commands report the
queued job, use `jobs detail` to follow it.
"""

from typing import Optional

import typer
from rich.table import Table

from cdn77_client.api.client import APIClient
from cdn77_client.api.decoding import decode_model, decode_model_list
from cdn77_client.api.status import StatusRule, check_status, expected_failure_on, success_on
from cdn77_client.commands._runner import CommandResult, run_command
from cdn77_client.params import parse_identifier, parse_paths, parse_resource_id
from cdn77_client.schemas.jobs import Job, JobSummary, JobType, PrefetchRequest, PurgeRequest

app = typer.Typer(help="Status and commands for/of purging and prefetching", no_args_is_help=True)


def _resource_not_found(resource_id: int) -> StatusRule:
    return expected_failure_on(404, f"Didn't find resource={resource_id}", include_body=True)


def _job_mutation_rules(resource_id: int) -> tuple[StatusRule, ...]:
    return (success_on(200, 202), _resource_not_found(resource_id))


def _purge_all_rules(resource_id: int) -> tuple[StatusRule, ...]:
    # 403 here means the feature is disabled for the resource, not bad credentials.
    return (
        success_on(200, 202),
        expected_failure_on(403, f"Purging all files is disabled for resource={resource_id}"),
        _resource_not_found(resource_id),
    )


def _describe_job(job: Job) -> list[str]:
    lines = [f"Job {job.id} ({job.type}) {job.state}, queued at {job.queued_at}"]
    if job.paths_count is not None:
        lines.append(f"Paths: {job.paths_count}")
    return lines


# =============================================================================
# Commands
# =============================================================================


@app.command()
def purge(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource which you'd like to purge files from"),
    paths: str = typer.Option(..., "--paths", "-p", help="A comma separated list of paths you'd like to clear. Can contain wildcards (*)"),
) -> None:
    """
    Purge a list of files/paths from a resource.

    Examples:
        cdn77 jobs purge -r 1234 -p "/images/*,/index.html"
    """
    run_command(ctx, lambda client: purge_paths(client, resource_id, paths))


@app.command("purge-all")
def purge_all(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource which you'd like to purge all files from"),
) -> None:
    """
    Purge all files from a specific CDN resource.

    Examples:
        cdn77 jobs purge-all -r 1234
    """
    run_command(ctx, lambda client: purge_all_paths(client, resource_id))


@app.command()
def prefetch(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource to prefetch files into"),
    paths: str = typer.Option(..., "--paths", "-p", help="A comma separated list of paths to prefetch"),
    upstream_host: Optional[str] = typer.Option(None, "--upstream-host", "-u", help="Host header sent to the origin"),
) -> None:
    """
    Prefetch a list of files from the origin into the CDN cache.

    Examples:
        cdn77 jobs prefetch -r 1234 -p "/video/intro.mp4"
    """
    run_command(ctx, lambda client: prefetch_paths(client, resource_id, paths, upstream_host))


@app.command("list")
def list_jobs_command(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource"),
    job_type: JobType = typer.Option(..., "--type", "-t", help="Type of jobs to list"),
) -> None:
    """
    List the job log of a resource.

    Examples:
        cdn77 jobs list -r 1234 -t purge
    """
    run_command(ctx, lambda client: list_jobs(client, resource_id, job_type))


@app.command()
def detail(
    ctx: typer.Context,
    resource_id: str = typer.Option(..., "--resource-id", "-r", help="The ID of the resource"),
    job_id: str = typer.Option(..., "--job-id", "-j", help="The ID of the job"),
) -> None:
    """
    Show a job including all of its paths.

    Examples:
        cdn77 jobs detail -r 1234 -j 9c5b6b3a-0e7e-4c6e-9d1e-6a4bb0f1b6de
    """
    run_command(ctx, lambda client: get_job(client, resource_id, job_id))


# =============================================================================
# Handlers
# =============================================================================


async def purge_paths(client: APIClient, resource_id: str, paths: str) -> CommandResult:
    """POST /cdn/{id}/job/purge."""
    cdn_id = parse_resource_id(resource_id)
    request = PurgeRequest(paths=parse_paths(paths))

    response = await client.post(f"/cdn/{cdn_id}/job/purge", json=request.model_dump())
    check_status(response, _job_mutation_rules(cdn_id))

    job = decode_model(response, Job)
    return CommandResult.lines(*_describe_job(job))


async def purge_all_paths(client: APIClient, resource_id: str) -> CommandResult:
    """POST /cdn/{id}/job/purge-all."""
    cdn_id = parse_resource_id(resource_id)

    response = await client.post(f"/cdn/{cdn_id}/job/purge-all")
    check_status(response, _purge_all_rules(cdn_id))

    job = decode_model(response, Job)
    return CommandResult.lines(*_describe_job(job))


async def prefetch_paths(
    client: APIClient,
    resource_id: str,
    paths: str,
    upstream_host: str | None = None,
) -> CommandResult:
    """POST /cdn/{id}/job/prefetch."""
    cdn_id = parse_resource_id(resource_id)
    request = PrefetchRequest(
        paths=parse_paths(paths),
        upstream_host=upstream_host.strip() if upstream_host and upstream_host.strip() else None,
    )

    response = await client.post(
        f"/cdn/{cdn_id}/job/prefetch",
        json=request.model_dump(exclude_none=True),
    )
    check_status(response, _job_mutation_rules(cdn_id))

    job = decode_model(response, Job)
    return CommandResult.lines(*_describe_job(job))


async def list_jobs(client: APIClient, resource_id: str, job_type: JobType) -> CommandResult:
    """GET /cdn/{id}/job-log/{type}."""
    cdn_id = parse_resource_id(resource_id)
    job_type = JobType(job_type)

    response = await client.get(f"/cdn/{cdn_id}/job-log/{job_type.value}")
    check_status(
        response,
        (
            success_on(200),
            expected_failure_on(
                404,
                f"Couldn't list {job_type.value} jobs of resource={cdn_id}",
                include_body=True,
            ),
        ),
    )

    jobs = decode_model_list(response, JobSummary)
    if not jobs:
        return CommandResult.lines(f"No {job_type.value} jobs found for resource={cdn_id}")

    table = Table(title=f"{job_type.value} jobs of resource {cdn_id}", show_header=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("State")
    table.add_column("Paths")
    table.add_column("Queued at")
    table.add_column("Done at")

    for job in jobs:
        table.add_row(
            job.id,
            job.type,
            job.state,
            str(job.paths_count) if job.paths_count is not None else "-",
            job.queued_at,
            job.done_at or "-",
        )

    return CommandResult([table])


async def get_job(client: APIClient, resource_id: str, job_id: str) -> CommandResult:
    """GET /cdn/{id}/job/{job_id}."""
    cdn_id = parse_resource_id(resource_id)
    job_id = parse_identifier(job_id, "job ID")

    response = await client.get(f"/cdn/{cdn_id}/job/{job_id}")
    check_status(
        response,
        (
            success_on(200),
            expected_failure_on(404, f"Didn't find job={job_id} of resource={cdn_id}", include_body=True),
        ),
    )

    job = decode_model(response, Job)
    lines = [
        f"ID={job.id}",
        f"Type={job.type}",
        f"Resource={', '.join(f'{key}={value}' for key, value in job.cdn.items())}",
        f"State={job.state}",
        f"Queued at={job.queued_at}",
        f"Done at={job.done_at or '-'}",
    ]
    if job.upstream_host:
        lines.append(f"Upstream host={job.upstream_host}")

    paths = job.paths or []
    lines.append(f"Paths ({job.paths_count if job.paths_count is not None else len(paths)}):")
    lines.extend(f"  {path}" for path in paths)
    return CommandResult.lines(*lines)
