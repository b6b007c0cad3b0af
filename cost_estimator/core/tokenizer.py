"""
Tokenizer Adapter
=================
Turns example text into a token count using a pluggable tokenizer.
"""

from collections.abc import Callable, Sequence
from functools import lru_cache
from typing import Any, Optional

import structlog
import tiktoken

from cost_estimator.config import settings
from cost_estimator.exceptions import TokenizationError

logger = structlog.get_logger()

Tokenize = Callable[[str], Sequence[Any]]


def tiktoken_tokenizer(encoding_name: str = "cl100k_base") -> Tokenize:
    """
    Build a tokenize function backed by a tiktoken encoding.

    The encoding is loaded on first use. Special-token markers such as
    ``<|endoftext|>`` in user text are encoded as ordinary text.
    """
    encoding: Optional[tiktoken.Encoding] = None

    def tokenize(text: str) -> list[int]:
        nonlocal encoding
        if encoding is None:
            encoding = tiktoken.get_encoding(encoding_name)
        return encoding.encode(text, disallowed_special=())

    return tokenize


class TokenizerAdapter:
    """
    Counts tokens with an external tokenize function.

    Counting never raises: tokenizer failures are logged and counted as 0,
    since an estimate must stay available on any input.
    """

    def __init__(self, tokenize: Tokenize):
        self._tokenize = tokenize

    def _encode(self, text: str) -> Sequence[Any]:
        if not isinstance(text, str):
            raise TokenizationError(f"Expected text, got {type(text).__name__}")
        try:
            return self._tokenize(text)
        except Exception as e:
            raise TokenizationError(str(e)) from e

    def token_count(self, text: str) -> int:
        """Number of tokens in ``text``; 0 for empty text or on failure."""
        if text == "":
            return 0

        try:
            return len(self._encode(text))
        except TokenizationError as e:
            logger.warning("Tokenization failed, counting 0 tokens", error=str(e))
            return 0


@lru_cache
def get_tokenizer() -> TokenizerAdapter:
    """Get cached tokenizer adapter for the configured encoding."""
    return TokenizerAdapter(tiktoken_tokenizer(settings.tokenizer_encoding))
