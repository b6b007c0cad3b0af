"""
Estimator Errors
================
Exception hierarchy for the cost estimation engine.
"""


class EstimatorError(Exception):
    """Base class for all cost estimator errors."""


class UnknownModelError(EstimatorError, LookupError):
    """Raised when a model name is not present in the pricing catalog."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"Unknown model: {model!r}")


class TokenizationError(EstimatorError):
    """Raised inside the tokenizer adapter when the tokenizer fails."""


class CatalogError(EstimatorError):
    """Raised when pricing catalog data is empty or malformed."""
