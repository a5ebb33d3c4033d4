"""
Billing Schemas.
"""

from pydantic import BaseModel, Field


class CreditBalance(BaseModel):
    """Response of GET /credit-balance."""

    current_credit: int | float = Field(description="Remaining credit in USD")
    credit_expires_at: int = Field(description="Expiration as epoch seconds")
    credit_spent_in_30_days: int | float = Field(description="Credit spent over the last 30 days in USD")
