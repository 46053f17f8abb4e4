"""Assertion providers.

Each provider sends the same prompt over raw HTTP (httpx, no SDKs) and keeps
only the reply lines that start with ``await``. A provider without an API key
raises ``ProviderNotConfiguredError`` so the fallback chain moves on.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List

import httpx

from .errors import ProviderError, ProviderNotConfiguredError

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"
HUGGINGFACE_URL = "https://api-inference.huggingface.co/models/{model}"

DEFAULT_ANTHROPIC_MODEL = "claude-3-7-sonnet-latest"
DEFAULT_OPENAI_MODEL = "o4-mini"
DEFAULT_HF_MODEL = "google/flan-t5-small"

MAX_TOKENS = 120
TIMEOUT_SECONDS = 60.0


def build_prompt(source: str) -> str:
    return (
        "Here is a React/Vue component.\n"
        "Return 2 Playwright assertion lines that would verify it works.\n"
        f"Only code, no prose:\n\n{source}"
    )


def assertion_lines(raw: str) -> List[str]:
    lines = (line.strip() for line in raw.split("\n"))
    return [line for line in lines if line.startswith("await")]


def require_key(provider: str, env_var: str) -> str:
    key = os.environ.get(env_var, "").strip()
    if not key:
        raise ProviderNotConfiguredError(provider, env_var)
    return key


def post_json(provider: str, url: str, body: Dict[str, Any], headers: Dict[str, str]) -> Any:
    try:
        with httpx.Client(timeout=TIMEOUT_SECONDS) as client:
            response = client.post(url, json=body, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        raise ProviderError(provider, 0, str(exc)) from exc
    if response.status_code != 200:
        raise ProviderError(provider, response.status_code, response.text)
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(provider, response.status_code, f"invalid JSON: {exc}") from exc


def enrich_claude(source: str) -> List[str]:
    key = require_key("anthropic", "ANTHROPIC_API_KEY")
    body = {
        "model": os.environ.get("ANTHROPIC_MODEL") or DEFAULT_ANTHROPIC_MODEL,
        "max_tokens": MAX_TOKENS,
        "messages": [{"role": "user", "content": build_prompt(source)}],
    }
    data = post_json(
        "anthropic",
        ANTHROPIC_URL,
        body,
        {
            "x-api-key": key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        },
    )
    try:
        text = "".join(
            block.get("text", "") for block in data["content"] if block.get("type") == "text"
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ProviderError("anthropic", 200, f"unexpected response: {exc}") from exc
    return assertion_lines(text)


def enrich_openai(source: str) -> List[str]:
    key = require_key("openai", "OPENAI_API_KEY")
    body = {
        "model": os.environ.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        "messages": [{"role": "user", "content": build_prompt(source)}],
        "max_completion_tokens": MAX_TOKENS,
    }
    data = post_json(
        "openai",
        OPENAI_URL,
        body,
        {"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
    )
    try:
        text = data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
        raise ProviderError("openai", 200, f"unexpected response: {exc}") from exc
    return assertion_lines(text)


def enrich_huggingface(source: str) -> List[str]:
    key = require_key("huggingface", "HUGGINGFACE_API_KEY")
    model = os.environ.get("HF_MODEL") or DEFAULT_HF_MODEL
    body = {"inputs": build_prompt(source), "parameters": {"max_new_tokens": MAX_TOKENS}}
    data = post_json(
        "huggingface",
        HUGGINGFACE_URL.format(model=model),
        body,
        {"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
    )
    # text-generation pipelines answer with [{"generated_text": ...}]
    text = ""
    if isinstance(data, list) and data and isinstance(data[0], dict):
        text = str(data[0].get("generated_text") or "")
    return assertion_lines(text)
