"""
Estimation Session
==================
Command surface used by the presentation layer to drive one estimate.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Optional

import structlog

from cost_estimator.config import Settings, settings as default_settings
from cost_estimator.core.catalog import PricingCatalog, get_pricing_catalog
from cost_estimator.core.controller import Listener, RecomputeController
from cost_estimator.core.state import (
    CountSource,
    EstimationInputs,
    TokenKind,
    coerce_count,
    compute_estimate,
)
from cost_estimator.core.tokenizer import TokenizerAdapter, get_tokenizer
from cost_estimator.schemas.estimate import DerivedEstimate
from cost_estimator.schemas.pricing import ModelPricing

logger = structlog.get_logger()


def _token_kind(kind: TokenKind | str) -> TokenKind:
    if isinstance(kind, TokenKind):
        return kind
    return TokenKind(kind.lower())


class EstimationSession:
    """
    One user's cost estimate.

    Holds the selected model, example texts, token counts and user count,
    and derives the cost from them on every :meth:`estimate` call.

    Usage:
        session = EstimationSession()
        session.set_model("GPT-4o mini")
        session.set_example_input("Summarize this article ...")
        session.set_user_count(1000)
        print(session.estimate().display())
    """

    def __init__(
        self,
        catalog: Optional[PricingCatalog] = None,
        tokenizer: Optional[TokenizerAdapter] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the session.

        Args:
            catalog: Pricing catalog (uses the shared catalog if not provided)
            tokenizer: Tokenizer adapter (uses the configured one if not provided)
            settings: Settings for defaults (uses global settings if not provided)
        """
        self.catalog = catalog or get_pricing_catalog()
        self.settings = settings or default_settings

        model = self.settings.default_model
        if model not in self.catalog:
            fallback = self.catalog.list_models()[0]
            logger.warning("Default model not in catalog", model=model, fallback=fallback)
            model = fallback

        self._inputs = EstimationInputs(
            selected_model=model,
            user_count=self.settings.default_user_count,
        )
        self._controller = RecomputeController(
            self._inputs,
            tokenizer or get_tokenizer(),
            self.estimate,
        )

    # Catalog reads

    def list_models(self) -> tuple[str, ...]:
        return self.catalog.list_models()

    def lookup(self, model_name: str) -> ModelPricing:
        return self.catalog.lookup(model_name)

    # Commands

    def set_model(self, name: str) -> None:
        """
        Select the model to price with. Token counts are left as they are.

        Raises:
            UnknownModelError: if the model is not in the catalog
        """
        self.catalog.lookup(name)
        self._inputs.selected_model = name
        self._controller.notify()

    def set_example_input(self, text: str) -> int:
        """Replace the example input text and recount its tokens."""
        return self._controller.text_changed(TokenKind.INPUT, text)

    def set_example_output(self, text: str) -> int:
        """Replace the example output text and recount its tokens."""
        return self._controller.text_changed(TokenKind.OUTPUT, text)

    def set_token_count_directly(self, kind: TokenKind | str, value: Any) -> int:
        """
        Override a token count, e.g. from a slider.

        The override holds until the matching example text is edited again.
        Negative or non-numeric values become 0.
        """
        return self._controller.count_overridden(_token_kind(kind), value)

    def set_user_count(self, value: Any) -> int:
        """Set the expected number of users; unparseable or negative input becomes 0."""
        self._inputs.user_count = coerce_count(value)
        self._controller.notify()
        return self._inputs.user_count

    # Derived values

    def estimate(self) -> DerivedEstimate:
        """Compute the cost estimate for the current state without changing it."""
        pricing = self.catalog.lookup(self._inputs.selected_model)
        return compute_estimate(pricing, self._inputs)

    def slider_max(self, kind: TokenKind | str) -> int:
        """Upper bound for a token count slider, never below the current count."""
        return max(self.settings.slider_floor, self._inputs.token_count(_token_kind(kind)))

    # Observation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._controller.subscribe(listener)

    @contextmanager
    def batch(self) -> Iterator["EstimationSession"]:
        with self._controller.batch():
            yield self

    # State reads

    @property
    def selected_model(self) -> str:
        return self._inputs.selected_model

    @property
    def example_input_text(self) -> str:
        return self._inputs.example_input_text

    @property
    def example_output_text(self) -> str:
        return self._inputs.example_output_text

    @property
    def input_token_count(self) -> int:
        return self._inputs.input_token_count

    @property
    def output_token_count(self) -> int:
        return self._inputs.output_token_count

    @property
    def user_count(self) -> int:
        return self._inputs.user_count

    def count_source(self, kind: TokenKind | str) -> CountSource:
        return self._inputs.count_source(_token_kind(kind))
