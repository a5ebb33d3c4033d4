"""
Job Schemas.

Jobs are asynchronous purge, purge-all and prefetch tasks tracked by the API.
"""

from enum import Enum

from pydantic import BaseModel, Field


class JobType(str, Enum):
    """Job types; values are the path segments used by the job-log endpoint."""

    PREFETCH = "prefetch"
    PURGE = "purge"
    PURGE_ALL = "purge-all"


class PurgeRequest(BaseModel):
    """Body of POST /cdn/{id}/job/purge."""

    paths: list[str] = Field(min_length=1)


class PrefetchRequest(BaseModel):
    """Body of POST /cdn/{id}/job/prefetch."""

    paths: list[str] = Field(min_length=1)
    upstream_host: str | None = None


class Job(BaseModel):
    """A job record, as returned by the job mutation and detail endpoints."""

    id: str
    type: str
    cdn: dict[str, int] = Field(description="Resource the job belongs to, e.g. {'id': 1234}")
    state: str
    queued_at: str
    done_at: str | None = None
    paths: list[str] | None = None
    paths_count: int | None = None
    upstream_host: str | None = None


class JobSummary(BaseModel):
    """A job entry of the job log."""

    id: str
    type: str
    state: str
    queued_at: str
    done_at: str | None = None
    paths_count: int | None = None
