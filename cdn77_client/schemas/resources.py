"""
CDN Resource Schemas.

Only the fields this client displays are modelled; unknown fields are ignored.
"""

from pydantic import BaseModel, Field


class Cname(BaseModel):
    """A CNAME attached to a CDN resource."""

    cname: str


class CdnResource(BaseModel):
    """A CDN resource (distribution), as returned by GET /cdn and GET /cdn/{id}."""

    id: int = Field(description="Resource ID")
    label: str | None = Field(default=None, description="Resource label")
    cdn_url: str | None = Field(default=None, description="CDN77 hostname of the resource")
    origin_id: str | None = Field(default=None, description="Origin the resource pulls from")
    cnames: list[Cname] = Field(default_factory=list, description="Custom hostnames")
