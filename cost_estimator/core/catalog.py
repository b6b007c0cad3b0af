"""
Pricing Catalog
===============
Read-only catalog of per-1K-token pricing for supported models.
"""

from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

import structlog
import yaml
from pydantic import ValidationError

from cost_estimator.config import settings
from cost_estimator.exceptions import CatalogError, UnknownModelError
from cost_estimator.formatting import format_usd
from cost_estimator.schemas.pricing import ModelPricing, PricingRow

logger = structlog.get_logger()

# Display order of the built-in catalog follows this list.
DEFAULT_MODELS: tuple[dict[str, Any], ...] = (
    {"name": "GPT-4o mini", "provider": "OpenAI", "input_per_1k": "0.00015", "output_per_1k": "0.0006", "context_window": "128k"},
    {"name": "GPT-4o", "provider": "OpenAI", "input_per_1k": "0.005", "output_per_1k": "0.015", "context_window": "128k"},
    {"name": "GPT-4 Turbo", "provider": "OpenAI", "input_per_1k": "0.01", "output_per_1k": "0.03", "context_window": "128k"},
    {"name": "GPT-4 32k", "provider": "OpenAI", "input_per_1k": "0.06", "output_per_1k": "0.12", "context_window": "32k"},
    {"name": "GPT-4 8k", "provider": "OpenAI", "input_per_1k": "0.03", "output_per_1k": "0.06", "context_window": "8k"},
    {"name": "GPT-3.5 Turbo", "provider": "OpenAI", "input_per_1k": "0.0015", "output_per_1k": "0.002", "context_window": "4k"},
    {"name": "Claude 3 Opus", "provider": "Anthropic", "input_per_1k": "0.015", "output_per_1k": "0.075", "context_window": "200k"},
    {"name": "Claude 3 Sonnet", "provider": "Anthropic", "input_per_1k": "0.003", "output_per_1k": "0.015", "context_window": "200k"},
    {"name": "Claude 3 Haiku", "provider": "Anthropic", "input_per_1k": "0.00025", "output_per_1k": "0.00125", "context_window": "200k"},
    {"name": "Gemini 1.5 Pro", "provider": "Google", "input_per_1k": "0.007", "output_per_1k": "0.021", "context_window": "1m"},
    {"name": "Gemini 1.0 Pro", "provider": "Google", "input_per_1k": "0.0005", "output_per_1k": "0.0015", "context_window": "32k"},
    {"name": "Gemini 1.5 Flash", "provider": "Google", "input_per_1k": "0.0007", "output_per_1k": "0.0021", "context_window": "1m"},
    {"name": "Llama 3.1 405b", "provider": "Google", "input_per_1k": "0.003", "output_per_1k": "0.005", "context_window": "128k"},
    {"name": "Llama 2 70b", "provider": "Google", "input_per_1k": "0.001", "output_per_1k": "0.001", "context_window": "4k"},
)


def _parse_entry(entry: Any) -> ModelPricing:
    """Build a pricing record from one catalog entry."""
    if not isinstance(entry, dict):
        raise CatalogError(f"Catalog entry must be a mapping, got {type(entry).__name__}")

    try:
        return ModelPricing(
            name=entry.get("name"),
            provider=entry.get("provider"),
            input_price_per_1k=entry.get("input_per_1k"),
            output_price_per_1k=entry.get("output_per_1k"),
            context_window=entry.get("context_window"),
        )
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog entry {entry.get('name')!r}: {e}") from e


class PricingCatalog:
    """
    Immutable mapping from model name to pricing.

    Models keep the order they were given in, which is the order used for
    display.
    """

    def __init__(self, models: Iterable[ModelPricing]):
        entries: dict[str, ModelPricing] = {}
        for pricing in models:
            if pricing.name in entries:
                raise CatalogError(f"Duplicate model in catalog: {pricing.name!r}")
            entries[pricing.name] = pricing

        if not entries:
            raise CatalogError("Pricing catalog must contain at least one model")

        self._models = MappingProxyType(entries)

    @classmethod
    def from_entries(cls, entries: Iterable[Any]) -> "PricingCatalog":
        """Build a catalog from raw mappings (``input_per_1k`` style keys)."""
        return cls(_parse_entry(entry) for entry in entries)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PricingCatalog":
        """
        Load a catalog from a YAML file.

        The document must have a top-level ``models`` list whose entries
        carry ``name``, ``provider``, ``input_per_1k``, ``output_per_1k`` and
        ``context_window``.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get("models"), list):
            raise CatalogError(f"Pricing file {path} has no 'models' list")

        return cls.from_entries(data["models"])

    @classmethod
    def default(cls) -> "PricingCatalog":
        """Return the built-in catalog."""
        return cls.from_entries(DEFAULT_MODELS)

    def lookup(self, model_name: str) -> ModelPricing:
        """
        Get pricing for a model.

        Raises:
            UnknownModelError: if the model is not in the catalog
        """
        try:
            return self._models[model_name]
        except (KeyError, TypeError):
            raise UnknownModelError(model_name) from None

    def list_models(self) -> tuple[str, ...]:
        """Model names in catalog order."""
        return tuple(self._models)

    def pricing_table(self, places: int = 4) -> list[PricingRow]:
        """Get display rows for every model in catalog order."""
        return [
            PricingRow(
                model=pricing.name,
                provider=pricing.provider,
                input_price=format_usd(pricing.input_price_per_1k, places),
                output_price=format_usd(pricing.output_price_per_1k, places),
                context_window=f"{pricing.context_label} tokens",
            )
            for pricing in self._models.values()
        ]

    def __contains__(self, model_name: object) -> bool:
        return model_name in self._models

    def __iter__(self) -> Iterator[ModelPricing]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"PricingCatalog({len(self)} models)"


def load_catalog(config_path: Optional[str] = None) -> PricingCatalog:
    """
    Load the pricing catalog, falling back to the built-in one.

    A missing or unreadable pricing file is logged and replaced by the
    built-in catalog so estimation keeps working.
    """
    config_path = config_path or settings.pricing_config_path
    if not config_path:
        return PricingCatalog.default()

    if not Path(config_path).exists():
        logger.warning("Pricing config not found, using defaults", path=config_path)
        return PricingCatalog.default()

    try:
        catalog = PricingCatalog.from_yaml(config_path)
    except Exception as e:
        logger.error("Failed to load pricing config", path=config_path, error=str(e))
        return PricingCatalog.default()

    logger.info("Loaded pricing configuration", path=config_path, models=len(catalog))
    return catalog


@lru_cache
def get_pricing_catalog() -> PricingCatalog:
    """Get cached process-wide pricing catalog."""
    return load_catalog()
