"""Assertion-enrichment error hierarchy."""
from __future__ import annotations


class AIError(Exception):
    """Base for all enrichment errors."""


class ProviderNotConfiguredError(AIError):
    """Raised when a provider's API key is not set."""

    def __init__(self, provider: str, env_var: str) -> None:
        self.provider = provider
        self.env_var = env_var
        super().__init__(f"{provider} is not configured ({env_var} not set)")


class ProviderError(AIError):
    """Raised when a provider call fails or returns an error."""

    def __init__(self, provider: str, status: int, detail: str) -> None:
        self.provider = provider
        self.status = status
        self.detail = detail
        super().__init__(f"{provider} returned {status}: {detail}")
