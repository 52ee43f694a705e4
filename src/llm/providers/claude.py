"""Anthropic Messages API provider."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError, LLMTimeoutError

_JSON_INSTRUCTION = "Responda apenas com um único objeto JSON válido, sem texto adicional."


class ClaudeProvider(LLMProvider):
    provider_name = "claude"
    label = "Claude"
    default_model = "claude-sonnet-4-20250514"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client=None,
        timeout: float | None = None,
    ):
        super().__init__(model, client)
        if self.client is not None:
            return

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError("anthropic package not installed. Run: pip install anthropic")

        # Retries are handled by the caller's tenacity policy
        self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def _error_map(self):
        import anthropic

        return [
            (anthropic.AuthenticationError, LLMAuthError, "auth failed"),
            (anthropic.RateLimitError, LLMRateLimitError, "rate limit"),
            (anthropic.APITimeoutError, LLMTimeoutError, "request timed out"),
            (anthropic.APIError, LLMError, "API error"),
        ]

    def _complete(self, messages, system, max_tokens, temperature, json_mode):
        # No native JSON mode; the instruction rides on the system prompt
        if json_mode:
            system = f"{system}\n\n{_JSON_INSTRUCTION}" if system else _JSON_INSTRUCTION

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        response = self.client.messages.create(**kwargs)
        return "".join(block.text for block in response.content if getattr(block, "text", None))
