"""
Storage Location Schemas.
"""

from pydantic import BaseModel, Field


class StorageLocation(BaseModel):
    """A CDN77 storage location, as returned by list and detail endpoints."""

    id: str = Field(description="Storage location identifier")
    location: str = Field(description="Human readable location name")
