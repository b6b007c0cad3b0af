"""
Pricing Schemas
===============
Pydantic models for catalog entries and pricing table rows.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cost_estimator.formatting import format_context_window, parse_context_window


class ModelPricing(BaseModel):
    """Pricing information for a model, in USD per 1K tokens."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    provider: str = Field(..., min_length=1)
    input_price_per_1k: Decimal = Field(..., ge=0)
    output_price_per_1k: Decimal = Field(..., ge=0)
    context_window: int = Field(..., gt=0)

    @field_validator("input_price_per_1k", "output_price_per_1k", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Any:
        # Go through str so 0.00015 stays 0.00015 rather than its binary expansion
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("context_window", mode="before")
    @classmethod
    def parse_context(cls, v: Any) -> Any:
        return parse_context_window(v)

    @property
    def context_label(self) -> str:
        return format_context_window(self.context_window)


class PricingRow(BaseModel):
    """Display row of the pricing table."""

    model_config = ConfigDict(frozen=True)

    model: str
    provider: str
    input_price: str
    output_price: str
    context_window: str
