"""
LLM Cost Estimator
==================
Estimate the cost of running an LLM-backed application from model pricing,
example input/output text and an expected number of users.
"""

from cost_estimator.core import (
    EstimationSession,
    PricingCatalog,
    TokenizerAdapter,
    TokenKind,
    get_pricing_catalog,
)
from cost_estimator.exceptions import (
    CatalogError,
    EstimatorError,
    TokenizationError,
    UnknownModelError,
)
from cost_estimator.schemas import DerivedEstimate, ModelPricing

__version__ = "1.0.0"

__all__ = [
    "EstimationSession",
    "PricingCatalog",
    "TokenizerAdapter",
    "TokenKind",
    "get_pricing_catalog",
    "DerivedEstimate",
    "ModelPricing",
    "EstimatorError",
    "UnknownModelError",
    "TokenizationError",
    "CatalogError",
]
