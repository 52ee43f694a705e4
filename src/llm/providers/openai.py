"""OpenAI Chat Completions provider."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError, LLMTimeoutError


class OpenAIProvider(LLMProvider):
    provider_name = "openai"
    label = "OpenAI"
    default_model = "gpt-4o"

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
            from openai import OpenAI
        except ImportError:
            raise LLMError("openai package not installed. Run: pip install openai")

        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def _error_map(self):
        import openai

        return [
            (openai.AuthenticationError, LLMAuthError, "auth failed"),
            (openai.RateLimitError, LLMRateLimitError, "rate limit"),
            (openai.APITimeoutError, LLMTimeoutError, "request timed out"),
            (openai.APIError, LLMError, "API error"),
        ]

    def _complete(self, messages, system, max_tokens, temperature, json_mode):
        full_messages = [{"role": "system", "content": system}] if system else []
        full_messages.extend(messages)

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": full_messages,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content
