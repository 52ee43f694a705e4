"""Tests for LLM factory and auto-detection."""

from unittest.mock import MagicMock, patch

import pytest

from llm import LLMError, create_llm_provider
from llm.factory import _auto_detect_provider


@pytest.fixture
def no_keys(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


class TestAutoDetection:
    def test_detects_anthropic_key(self, no_keys, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert _auto_detect_provider() == "claude"

    def test_detects_openai_key(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert _auto_detect_provider() == "openai"

    def test_prefers_openai_when_multiple(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert _auto_detect_provider() == "openai"

    def test_explicit_key_prefix_wins(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert _auto_detect_provider("sk-ant-explicit") == "claude"

    def test_unrecognized_key_falls_back_to_env(self, no_keys, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert _auto_detect_provider("opaque-token") == "claude"

    def test_no_keys_raises(self, no_keys):
        with pytest.raises(LLMError, match="No LLM API key found"):
            _auto_detect_provider()


class TestCreateProvider:
    @pytest.mark.parametrize("name", ["claude", "openai"])
    def test_explicit_provider_with_client(self, name):
        mock_client = MagicMock()
        provider = create_llm_provider(provider=name, client=mock_client)
        assert provider.provider_name == name
        assert provider.client is mock_client

    def test_gemini_not_supported(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            create_llm_provider(provider="gemini", client=MagicMock())

    def test_auto_with_anthropic_key(self, no_keys, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        # Mock Anthropic client to avoid real init
        with patch("anthropic.Anthropic") as anthropic_cls:
            provider = create_llm_provider()
        assert provider.provider_name == "claude"
        anthropic_cls.assert_called_once_with(api_key="sk-ant-test", timeout=None, max_retries=0)

    def test_auto_with_no_keys_raises(self, no_keys):
        with pytest.raises(LLMError):
            create_llm_provider(provider="auto")

    def test_custom_model(self):
        provider = create_llm_provider(provider="openai", client=MagicMock(), model="gpt-4o-mini")
        assert provider.model == "gpt-4o-mini"

    def test_default_models(self):
        mock_client = MagicMock()
        assert (
            create_llm_provider(provider="claude", client=mock_client).model
            == "claude-sonnet-4-20250514"
        )
        assert create_llm_provider(provider="openai", client=mock_client).model == "gpt-4o"

    def test_timeout_forwarded_to_sdk_client(self, no_keys):
        with patch("openai.OpenAI") as openai_cls:
            create_llm_provider(provider="openai", api_key="sk-test", timeout=12.5)
        openai_cls.assert_called_once_with(api_key="sk-test", timeout=12.5, max_retries=0)
