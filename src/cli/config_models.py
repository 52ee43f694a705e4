"""Pydantic configuration models for moodsync."""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import Artifact

VALID_LLM_PROVIDERS = {"auto", "claude", "openai", "none"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

HOUR = 3600.0


def _positive(name: str, v: float) -> float:
    if v <= 0:
        raise ValueError(f"{name} must be positive, got {v}")
    return v


class LLMConfig(BaseModel):
    """Analysis backend configuration. provider "none" disables it."""

    provider: str = "auto"
    model: Optional[str] = None  # None = provider default
    api_key: Optional[str] = None
    max_tokens: int = 2000
    timeout_seconds: float = 30.0

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        return _positive("timeout_seconds", v)


class CacheConfig(BaseModel):
    default_ttl_seconds: float = 300.0

    @field_validator("default_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        return _positive("default_ttl_seconds", v)


class InsightsConfig(BaseModel):
    """Insight freshness and retention.

    `freshness_hours` decides when an insight is recomputed; `ttl_hours`
    only bounds how long it stays in memory.
    """

    freshness_hours: float = 4.0
    ttl_hours: float = 6.0
    chat_history_limit: int = 50

    @model_validator(mode="after")
    def validate_windows(self):
        _positive("freshness_hours", self.freshness_hours)
        _positive("ttl_hours", self.ttl_hours)
        if self.freshness_hours > self.ttl_hours:
            raise ValueError(
                f"freshness_hours ({self.freshness_hours}) cannot exceed ttl_hours ({self.ttl_hours})"
            )
        return self


class SyncConfig(BaseModel):
    """Per-artifact TTLs and which artifacts get regenerated on a signal."""

    emotional_state_ttl_hours: float = 2.0
    daily_tip_ttl_hours: float = 12.0
    assistant_context_ttl_hours: float = 24.0
    recommendations_ttl_hours: float = 12.0
    neutral_state_ttl_hours: float = 1.0
    enabled_artifacts: list[str] = Field(default_factory=lambda: [str(a) for a in Artifact])
    dual_write_legacy_keys: bool = True

    @field_validator(
        "emotional_state_ttl_hours",
        "daily_tip_ttl_hours",
        "assistant_context_ttl_hours",
        "recommendations_ttl_hours",
        "neutral_state_ttl_hours",
    )
    @classmethod
    def validate_ttls(cls, v: float, info) -> float:
        return _positive(info.field_name, v)

    @field_validator("enabled_artifacts")
    @classmethod
    def validate_artifacts(cls, v: list[str]) -> list[str]:
        valid = {str(a) for a in Artifact}
        unknown = [a for a in v if a not in valid]
        if unknown:
            raise ValueError(f"Unknown artifacts: {unknown}. Must be among {sorted(valid)}")
        return v

    def enabled(self) -> set[Artifact]:
        return {Artifact(a) for a in self.enabled_artifacts}


class RetryConfig(BaseModel):
    """Retry/backoff configuration for rate-limited LLM calls."""

    max_attempts: int = 3
    min_wait: float = 2.0
    llm_max_wait: float = 30.0


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class MoodsyncConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand a ${VAR} API key reference."""
        key = self.llm.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.llm.api_key = os.getenv(key[2:-1], "") or None
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "MoodsyncConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
