"""
Estimation State
================
Per-session inputs, input coercion, and the cost formula.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from cost_estimator.schemas.estimate import DerivedEstimate
from cost_estimator.schemas.pricing import ModelPricing

_TOKENS_PER_PRICE_UNIT = Decimal("1000")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TokenKind(str, Enum):
    """Which side of a request a token count belongs to."""

    INPUT = "input"
    OUTPUT = "output"


class CountSource(str, Enum):
    """What last determined a token count."""

    TEXT = "text"
    MANUAL = "manual"


def coerce_count(value: Any) -> int:
    """
    Normalize user-supplied numbers to a non-negative integer.

    Strings are read like a number field: the leading integer is used
    (``"12 users"`` -> 12, ``"3.9"`` -> 3). Floats are truncated. Anything
    unparseable or negative becomes 0.
    """
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value) if math.isfinite(value) else 0
    elif isinstance(value, Decimal):
        number = int(value) if value.is_finite() else 0
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        number = int(match.group(1)) if match else 0
    else:
        number = 0
    return max(0, number)


@dataclass
class EstimationInputs:
    """Mutable state owned by one estimation session."""

    selected_model: str
    example_input_text: str = ""
    example_output_text: str = ""
    input_token_count: int = 0
    output_token_count: int = 0
    user_count: int = 0
    input_count_source: CountSource = CountSource.TEXT
    output_count_source: CountSource = CountSource.TEXT

    def text(self, kind: TokenKind) -> str:
        if kind is TokenKind.INPUT:
            return self.example_input_text
        return self.example_output_text

    def token_count(self, kind: TokenKind) -> int:
        if kind is TokenKind.INPUT:
            return self.input_token_count
        return self.output_token_count

    def count_source(self, kind: TokenKind) -> CountSource:
        if kind is TokenKind.INPUT:
            return self.input_count_source
        return self.output_count_source

    def set_text(self, kind: TokenKind, text: str) -> None:
        if kind is TokenKind.INPUT:
            self.example_input_text = text
        else:
            self.example_output_text = text

    def set_token_count(self, kind: TokenKind, count: int, source: CountSource) -> None:
        if kind is TokenKind.INPUT:
            self.input_token_count = count
            self.input_count_source = source
        else:
            self.output_token_count = count
            self.output_count_source = source


def compute_estimate(pricing: ModelPricing, inputs: EstimationInputs) -> DerivedEstimate:
    """
    Calculate the cost estimate for the current inputs.

    Cost per user is computed first at full precision and then multiplied
    by the user count. Nothing is rounded here.
    """
    input_cost = (
        Decimal(inputs.input_token_count) / _TOKENS_PER_PRICE_UNIT
    ) * pricing.input_price_per_1k
    output_cost = (
        Decimal(inputs.output_token_count) / _TOKENS_PER_PRICE_UNIT
    ) * pricing.output_price_per_1k
    cost_per_user = input_cost + output_cost

    return DerivedEstimate(
        model=pricing.name,
        provider=pricing.provider,
        input_tokens=inputs.input_token_count,
        output_tokens=inputs.output_token_count,
        user_count=inputs.user_count,
        input_cost_per_user=input_cost,
        output_cost_per_user=output_cost,
        cost_per_user=cost_per_user,
        total_cost=cost_per_user * inputs.user_count,
        context_window=pricing.context_window,
    )
