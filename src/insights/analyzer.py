"""Analysis capability: structured JSON analysis behind a timeout."""

import asyncio
import json
import re
import threading

import structlog

from cli.retry import llm_retry
from llm import LLMError, LLMRateLimitError

logger = structlog.get_logger()

_TRAILING_COMMA = re.compile(r",\s*([}\]])")


class AnalysisUnavailable(Exception):
    """No backend configured, backend failed, or it didn't answer in time."""


class MalformedAnalysisResult(Exception):
    """Backend answered but the payload isn't a usable JSON object."""


def parse_json_object(text: str | None) -> dict:
    """Parse a model response into a dict, tolerating fences and trailing commas."""
    if not text or not text.strip():
        raise MalformedAnalysisResult("empty response")
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[-1]
    if text.endswith("```"):
        text = text.rsplit("```", 1)[0]
    text = text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = json.loads(_TRAILING_COMMA.sub(r"\1", text))
        except json.JSONDecodeError as e:
            logger.warning("analysis_parse_failed", response=text[:200])
            raise MalformedAnalysisResult(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedAnalysisResult(f"expected JSON object, got {type(data).__name__}")
    return data


class Analyzer:
    """Default analysis capability: always unavailable.

    Deployments without a backend use this directly; the insight engine
    then falls back to heuristics.
    """

    async def analyze(self, system: str, prompt: str) -> dict:
        raise AnalysisUnavailable("no analysis backend configured")


class LLMAnalyzer(Analyzer):
    """Analysis via an LLM provider in JSON mode.

    The provider is resolved lazily so a missing API key only surfaces as
    `AnalysisUnavailable` when an analysis is actually requested.
    """

    def __init__(
        self,
        provider=None,
        provider_name: str = "auto",
        model: str | None = None,
        api_key: str | None = None,
        timeout: float = 30.0,
        max_tokens: int = 2000,
        retry_attempts: int = 3,
        retry_min_wait: float = 2.0,
        retry_max_wait: float = 30.0,
    ):
        self._provider = provider
        self._provider_name = provider_name
        self._model = model
        self._api_key = api_key
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.retry_attempts = retry_attempts
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait

    def _get_provider(self):
        if self._provider is None:
            from llm import create_llm_provider

            try:
                self._provider = create_llm_provider(
                    provider=self._provider_name,
                    api_key=self._api_key,
                    model=self._model,
                    timeout=self.timeout,
                )
            except LLMError as e:
                raise AnalysisUnavailable(str(e)) from e
        return self._provider

    def _generate(self, system: str, prompt: str, abandoned: threading.Event) -> str:
        """Run the retried provider call; runs in a worker thread.

        Retries stop at the analysis deadline, and backoff sleeps wake as
        soon as `abandoned` is set so a timed-out analysis makes no further
        provider calls.
        """
        provider = self._get_provider()

        @llm_retry(
            max_attempts=self.retry_attempts,
            min_wait=self.retry_min_wait,
            max_wait=self.retry_max_wait,
            exceptions=(LLMRateLimitError,),
            max_delay=self.timeout,
            sleep=abandoned.wait,
        )
        def attempt():
            if abandoned.is_set():
                raise AnalysisUnavailable("analysis abandoned after timeout")
            return provider.generate(
                messages=[{"role": "user", "content": prompt}],
                system=system,
                max_tokens=self.max_tokens,
                json_mode=True,
            )

        return attempt()

    async def analyze(self, system: str, prompt: str) -> dict:
        abandoned = threading.Event()
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._generate, system, prompt, abandoned), timeout=self.timeout
            )
        except TimeoutError as e:
            abandoned.set()
            raise AnalysisUnavailable(f"analysis timed out after {self.timeout}s") from e
        except LLMError as e:
            raise AnalysisUnavailable(str(e)) from e
        return parse_json_object(text)
