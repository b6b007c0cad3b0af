"""
Pydantic Schemas
================
Pricing records and derived estimates.
"""

from cost_estimator.schemas.estimate import DerivedEstimate
from cost_estimator.schemas.pricing import ModelPricing, PricingRow

__all__ = [
    "DerivedEstimate",
    "ModelPricing",
    "PricingRow",
]
