"""
Estimate Schemas
================
Derived cost estimate returned to the presentation layer.
"""

from decimal import Decimal

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cost_estimator.config import settings
from cost_estimator.formatting import format_context_window, format_usd


class DerivedEstimate(BaseModel):
    """
    Cost estimate computed from the current session state.

    All amounts are kept at full precision. Use :meth:`display` for the
    rounded dollar figure.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    provider: str
    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)
    user_count: int = Field(ge=0)
    input_cost_per_user: Decimal = Field(ge=0)
    output_cost_per_user: Decimal = Field(ge=0)
    cost_per_user: Decimal = Field(ge=0)
    total_cost: Decimal = Field(ge=0)
    context_window: int = Field(gt=0)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def fits_context_window(self) -> bool:
        """True if one request with these token counts fits the model."""
        return self.total_tokens <= self.context_window

    def display(self, places: Optional[int] = None) -> str:
        """Total cost rounded to the configured number of places unless given."""
        if places is None:
            places = settings.display_decimal_places
        return format_usd(self.total_cost, places)

    def summary_lines(self, places: Optional[int] = None) -> list[str]:
        """Human-readable breakdown of the estimate."""
        return [
            self.display(places),
            f"Based on {self.user_count} users",
            f"{self.input_tokens} input tokens",
            f"{self.output_tokens} output tokens",
            f"Selected Model: {self.model}",
            f"Provider: {self.provider}",
            f"Context: {format_context_window(self.context_window)} tokens",
        ]
