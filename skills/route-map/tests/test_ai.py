import unittest
from unittest.mock import MagicMock, patch
import sys
import os

import httpx

# Add scripts/ to path to import modules
sys.path.append(os.path.join(os.path.dirname(__file__), "../scripts"))

from ai import ProviderError, ProviderNotConfiguredError, enrich_assertions
from ai.providers import (
    ANTHROPIC_URL,
    OPENAI_URL,
    assertion_lines,
    build_prompt,
    enrich_claude,
    enrich_huggingface,
    enrich_openai,
)

NO_KEYS = {
    "ANTHROPIC_API_KEY": "",
    "OPENAI_API_KEY": "",
    "HUGGINGFACE_API_KEY": "",
    "ANTHROPIC_MODEL": "",
    "OPENAI_MODEL": "",
    "HF_MODEL": "",
}

REPLY = "Sure:\nawait expect(page).toHaveTitle(/Home/);\n  await expect(page.locator('h1')).toBeVisible();\nconsole.log('x')"
EXPECTED = [
    "await expect(page).toHaveTitle(/Home/);",
    "await expect(page.locator('h1')).toBeVisible();",
]


def mock_client(client_cls: MagicMock, status: int, payload) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = "error body"
    response.json.return_value = payload
    client = client_cls.return_value.__enter__.return_value
    client.post.return_value = response
    return client


class TestProviders(unittest.TestCase):
    def test_assertion_lines(self):
        self.assertEqual(assertion_lines(REPLY), EXPECTED)
        self.assertEqual(assertion_lines(""), [])

    def test_prompt_mentions_source(self):
        prompt = build_prompt("/about")
        self.assertIn("Return 2 Playwright assertion lines", prompt)
        self.assertTrue(prompt.endswith("/about"))

    @patch.dict(os.environ, NO_KEYS)
    def test_missing_keys_raise(self):
        for provider in (enrich_claude, enrich_openai, enrich_huggingface):
            with self.assertRaises(ProviderNotConfiguredError):
                provider("/")

    @patch("ai.providers.httpx.Client")
    def test_claude(self, client_cls):
        client = mock_client(client_cls, 200, {"content": [{"type": "text", "text": REPLY}]})
        with patch.dict(os.environ, dict(NO_KEYS, ANTHROPIC_API_KEY="secret")):
            self.assertEqual(enrich_claude("/"), EXPECTED)
        args, kwargs = client.post.call_args
        self.assertEqual(args[0], ANTHROPIC_URL)
        self.assertEqual(kwargs["headers"]["x-api-key"], "secret")
        self.assertEqual(kwargs["json"]["messages"][0]["role"], "user")

    @patch("ai.providers.httpx.Client")
    def test_openai_uses_model_env(self, client_cls):
        client = mock_client(client_cls, 200, {"choices": [{"message": {"content": REPLY}}]})
        with patch.dict(os.environ, dict(NO_KEYS, OPENAI_API_KEY="secret", OPENAI_MODEL="gpt-test")):
            self.assertEqual(enrich_openai("/"), EXPECTED)
        args, kwargs = client.post.call_args
        self.assertEqual(args[0], OPENAI_URL)
        self.assertEqual(kwargs["json"]["model"], "gpt-test")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer secret")

    @patch("ai.providers.httpx.Client")
    def test_huggingface(self, client_cls):
        client = mock_client(client_cls, 200, [{"generated_text": REPLY}])
        with patch.dict(os.environ, dict(NO_KEYS, HUGGINGFACE_API_KEY="secret")):
            self.assertEqual(enrich_huggingface("/"), EXPECTED)
        args, _ = client.post.call_args
        self.assertTrue(args[0].endswith("/models/google/flan-t5-small"))

    @patch("ai.providers.httpx.Client")
    def test_error_status_raises(self, client_cls):
        mock_client(client_cls, 500, {})
        with patch.dict(os.environ, dict(NO_KEYS, OPENAI_API_KEY="secret")):
            with self.assertRaises(ProviderError) as ctx:
                enrich_openai("/")
        self.assertEqual(ctx.exception.status, 500)
        self.assertEqual(ctx.exception.provider, "openai")

    @patch("ai.providers.httpx.Client")
    def test_transport_error_raises(self, client_cls):
        client = client_cls.return_value.__enter__.return_value
        client.post.side_effect = httpx.ConnectError("boom")
        with patch.dict(os.environ, dict(NO_KEYS, ANTHROPIC_API_KEY="secret")):
            with self.assertRaises(ProviderError):
                enrich_claude("/")

    @patch("ai.providers.httpx.Client")
    def test_malformed_reply_raises(self, client_cls):
        mock_client(client_cls, 200, {"choices": []})
        with patch.dict(os.environ, dict(NO_KEYS, OPENAI_API_KEY="secret")):
            with self.assertRaises(ProviderError):
                enrich_openai("/")


class TestChain(unittest.TestCase):
    def test_first_success_wins(self):
        calls = []

        def failing(source):
            calls.append("failing")
            raise ProviderError("first", 503, "down")

        def empty(source):
            calls.append("empty")
            return []

        def unused(source):
            calls.append("unused")
            return ["await never();"]

        warnings = []
        result = enrich_assertions(
            "/", providers=[("first", failing), ("second", empty), ("third", unused)], warnings=warnings
        )
        self.assertEqual(result, [])
        self.assertEqual(calls, ["failing", "empty"])
        self.assertEqual(len(warnings), 1)
        self.assertIn("first enrichment failed", warnings[0])

    def test_fallback_to_last_provider(self):
        def not_configured(source):
            raise ProviderNotConfiguredError("x", "X_KEY")

        def last(source):
            return ["await expect(page).toHaveURL('/');"]

        result = enrich_assertions(
            "/", providers=[("a", not_configured), ("b", not_configured), ("c", last)]
        )
        self.assertEqual(result, ["await expect(page).toHaveURL('/');"])

    def test_all_fail_returns_empty(self):
        def failing(source):
            raise ProviderError("p", 0, "offline")

        warnings = []
        self.assertEqual(enrich_assertions("/", providers=[("a", failing)] * 3, warnings=warnings), [])
        self.assertEqual(len(warnings), 3)

    def test_unexpected_exception_falls_through(self):
        def broken(source):
            raise RuntimeError("provider blew up")

        warnings = []
        result = enrich_assertions(
            "/", providers=[("a", broken), ("b", lambda source: ["await x();"])], warnings=warnings
        )
        self.assertEqual(result, ["await x();"])
        self.assertEqual(len(warnings), 1)
        self.assertIn("provider blew up", warnings[0])

    @patch("ai.providers.httpx.Client")
    def test_unencodable_key_is_a_provider_error(self, client_cls):
        client = client_cls.return_value.__enter__.return_value
        client.post.side_effect = UnicodeEncodeError("ascii", "sk-é", 3, 4, "ordinal not in range(128)")
        with patch.dict(os.environ, dict(NO_KEYS, ANTHROPIC_API_KEY="sk-é")):
            with self.assertRaises(ProviderError):
                enrich_claude("/")
            self.assertEqual(enrich_assertions("/"), [])

    @patch.dict(os.environ, NO_KEYS)
    def test_default_chain_without_keys(self):
        self.assertEqual(enrich_assertions("/"), [])


if __name__ == "__main__":
    unittest.main()
