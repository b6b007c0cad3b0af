"""
Core Business Logic
====================
Pricing catalog, tokenizer adapter and the estimation engine.
"""

from cost_estimator.core.catalog import PricingCatalog, get_pricing_catalog, load_catalog
from cost_estimator.core.controller import RecomputeController
from cost_estimator.core.session import EstimationSession
from cost_estimator.core.state import (
    CountSource,
    EstimationInputs,
    TokenKind,
    coerce_count,
    compute_estimate,
)
from cost_estimator.core.tokenizer import TokenizerAdapter, get_tokenizer, tiktoken_tokenizer

__all__ = [
    "PricingCatalog",
    "get_pricing_catalog",
    "load_catalog",
    "RecomputeController",
    "EstimationSession",
    "CountSource",
    "EstimationInputs",
    "TokenKind",
    "coerce_count",
    "compute_estimate",
    "TokenizerAdapter",
    "get_tokenizer",
    "tiktoken_tokenizer",
]
