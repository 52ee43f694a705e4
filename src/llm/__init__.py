"""LLM providers behind a single error hierarchy."""

from .base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError, LLMTimeoutError
from .factory import PROVIDERS, create_llm_provider

__all__ = [
    "LLMProvider",
    "PROVIDERS",
    "create_llm_provider",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMTimeoutError",
]
