"""
Test Configuration
==================
Pytest fixtures for cost estimator tests.
"""

import pytest

from cost_estimator.config import Settings
from cost_estimator.core.catalog import PricingCatalog
from cost_estimator.core.session import EstimationSession
from cost_estimator.core.tokenizer import TokenizerAdapter


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def catalog() -> PricingCatalog:
    """Built-in pricing catalog."""
    return PricingCatalog.default()


@pytest.fixture
def tokenizer() -> TokenizerAdapter:
    """Deterministic tokenizer counting whitespace-separated words."""
    return TokenizerAdapter(str.split)


@pytest.fixture
def session(catalog: PricingCatalog, tokenizer: TokenizerAdapter, test_settings: Settings) -> EstimationSession:
    """Fresh estimation session with the word tokenizer."""
    return EstimationSession(catalog=catalog, tokenizer=tokenizer, settings=test_settings)


@pytest.fixture
def sample_catalog_yaml(tmp_path) -> str:
    """Pricing file with two models in non-alphabetical order."""
    path = tmp_path / "pricing.yaml"
    path.write_text(
        "models:\n"
        "  - name: Zeta Small\n"
        "    provider: Zeta\n"
        "    input_per_1k: 0.00015\n"
        "    output_per_1k: 0.0006\n"
        "    context_window: 16k\n"
        "  - name: Alpha Large\n"
        "    provider: Alpha\n"
        "    input_per_1k: 0.01\n"
        "    output_per_1k: 0.03\n"
        "    context_window: 8192\n",
        encoding="utf-8",
    )
    return str(path)
