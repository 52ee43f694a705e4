"""Provider-neutral chat completion interface used by the analysis layer."""

from abc import ABC, abstractmethod

DEFAULT_TEMPERATURE = 0.7


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit hit. The only error worth retrying."""


class LLMAuthError(LLMError):
    """Missing or rejected API key."""


class LLMTimeoutError(LLMError):
    """The SDK gave up waiting for the provider."""


class LLMProvider(ABC):
    """One chat-completion backend.

    Subclasses implement `_complete` and list their SDK exceptions in
    `_error_map`; `generate` wraps every SDK failure into the LLMError
    hierarchy so callers never import a vendor package.
    """

    provider_name: str = "base"
    label: str = "LLM"
    default_model: str = ""

    def __init__(self, model: str | None = None, client=None):
        self.model = model or self.default_model
        self.client = client

    @abstractmethod
    def _complete(
        self,
        messages: list[dict],
        system: str | None,
        max_tokens: int,
        temperature: float,
        json_mode: bool,
    ) -> str:
        """Call the SDK and return the response text."""

    def _error_map(self) -> list[tuple[type, type, str]]:
        """(SDK exception, LLMError subclass, message) triples, most specific first."""
        return []

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float = DEFAULT_TEMPERATURE,
        json_mode: bool = False,
    ) -> str:
        """Generate a response from messages.

        Args:
            messages: List of {"role": ..., "content": ...} dicts
            system: Optional system prompt
            max_tokens: Max response tokens
            temperature: Sampling temperature
            json_mode: Ask the provider for a single JSON object

        Returns:
            Generated text ("" when the provider returned no content)
        """
        if not messages:
            raise LLMError("at least one message is required")
        try:
            text = self._complete(messages, system, max_tokens, temperature, json_mode)
        except LLMError:
            raise
        except Exception as e:
            raise self._translate(e) from e
        return text or ""

    def _translate(self, e: Exception) -> LLMError:
        for sdk_error, error_cls, message in self._error_map():
            if isinstance(e, sdk_error):
                return error_cls(f"{self.label} {message}: {e}")
        return LLMError(f"{self.label} error: {e}")
