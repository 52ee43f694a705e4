"""Resolve a configured provider name (or "auto") into an LLMProvider."""

import importlib
import os
from dataclasses import dataclass

from .base import LLMError, LLMProvider


@dataclass(frozen=True)
class ProviderSpec:
    env_key: str
    key_prefix: str
    path: str  # "module:Class", relative to llm.providers


# Auto-detection walks this in order; OpenAI first, as the hosted app does
PROVIDERS = {
    "openai": ProviderSpec("OPENAI_API_KEY", "sk-", "openai:OpenAIProvider"),
    "claude": ProviderSpec("ANTHROPIC_API_KEY", "sk-ant-", "claude:ClaudeProvider"),
}


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
    timeout: float | None = None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "openai", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI
        timeout: Per-request SDK timeout in seconds

    Raises:
        LLMError: unknown provider, or no key found during auto-detection
    """
    name = provider or "auto"
    if name == "auto":
        name = _auto_detect_provider(api_key)

    spec = PROVIDERS.get(name)
    if spec is None:
        raise LLMError(f"Unknown provider: {name}. Use: {', '.join(sorted(PROVIDERS))}")

    if not api_key and client is None:
        api_key = os.getenv(spec.env_key)

    module_name, class_name = spec.path.split(":")
    cls = getattr(importlib.import_module(f"{__package__}.providers.{module_name}"), class_name)
    return cls(api_key=api_key, model=model, client=client, timeout=timeout)


def _detect_provider_from_key(api_key: str) -> str | None:
    # Longest prefix first so "sk-ant-" isn't taken for OpenAI's "sk-"
    by_prefix = sorted(PROVIDERS.items(), key=lambda item: len(item[1].key_prefix), reverse=True)
    for name, spec in by_prefix:
        if api_key.startswith(spec.key_prefix):
            return name
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Detect provider from explicit key prefix, then env vars."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name, spec in PROVIDERS.items():
        if os.getenv(spec.env_key):
            return name
    env_keys = ", ".join(spec.env_key for spec in PROVIDERS.values())
    raise LLMError(f"No LLM API key found. Set one of: {env_keys}")
