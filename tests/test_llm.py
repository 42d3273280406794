import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import httpx  # noqa: E402
from openai import APIStatusError  # noqa: E402

from resume_optimizer.services.llm import (  # noqa: E402
    LLMError,
    json_completion,
    json_completion_required,
    llm_enabled,
    retry_delays,
    text_completion,
)

AI_ENV = {"AI_ENABLED": "1", "OPENAI_API_KEY": "sk-test-key"}


def _status_error(status_code: int) -> APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    return APIStatusError(f"status {status_code}", response=response, body=None)


def _completion(content: str):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client_with(*results):
    client = MagicMock()
    client.chat.completions.create.side_effect = list(results)
    return client


class LLMEnablementTests(unittest.TestCase):
    def test_disabled_flag_wins_over_key(self):
        with patch.dict(os.environ, {"AI_ENABLED": "0", "OPENAI_API_KEY": "sk-test-key"}):
            self.assertFalse(llm_enabled())

    def test_placeholder_key_is_not_configured(self):
        with patch.dict(os.environ, {"AI_ENABLED": "1", "OPENAI_API_KEY": "your_openai_key"}):
            self.assertFalse(llm_enabled())
        with patch.dict(os.environ, AI_ENV):
            self.assertTrue(llm_enabled())

    def test_retry_delays_grow_by_backoff(self):
        with patch.dict(os.environ, {"AI_RETRY_BASE_DELAY_MS": "500", "AI_RETRY_BACKOFF": "3"}):
            self.assertEqual(retry_delays(3), [0.5, 1.5])
            self.assertEqual(retry_delays(1), [])


class JsonCompletionTests(unittest.TestCase):
    def test_disabled_returns_none_without_calling_client(self):
        client = _client_with()
        with patch.dict(os.environ, {"AI_ENABLED": "0"}), patch(
            "resume_optimizer.services.llm._client", return_value=client
        ):
            self.assertIsNone(json_completion(system_prompt="s", user_prompt="u"))
        client.chat.completions.create.assert_not_called()

    def test_rate_limited_calls_are_retried_with_backoff(self):
        client = _client_with(_status_error(429), _status_error(429), _completion('{"ok": true}'))
        with patch.dict(os.environ, {**AI_ENV, "AI_RETRY_BASE_DELAY_MS": "500", "AI_RETRY_BACKOFF": "3"}), patch(
            "resume_optimizer.services.llm._client", return_value=client
        ), patch("resume_optimizer.services.llm.time.sleep") as sleep:
            payload = json_completion(system_prompt="s", user_prompt="u", max_attempts=3, operation="resume_parse")

        self.assertEqual(payload, {"ok": True})
        self.assertEqual(client.chat.completions.create.call_count, 3)
        self.assertEqual([call.args[0] for call in sleep.call_args_list], [0.5, 1.5])

    def test_exhausted_retries_fall_back_to_none(self):
        client = _client_with(_status_error(503), _status_error(503), _status_error(503))
        with patch.dict(os.environ, AI_ENV), patch(
            "resume_optimizer.services.llm._client", return_value=client
        ), patch("resume_optimizer.services.llm.time.sleep"):
            payload = json_completion(system_prompt="s", user_prompt="u", max_attempts=3)

        self.assertIsNone(payload)
        self.assertEqual(client.chat.completions.create.call_count, 3)

    def test_client_errors_are_not_retried(self):
        client = _client_with(_status_error(400), _completion("{}"))
        with patch.dict(os.environ, AI_ENV), patch(
            "resume_optimizer.services.llm._client", return_value=client
        ), patch("resume_optimizer.services.llm.time.sleep") as sleep:
            payload = json_completion(system_prompt="s", user_prompt="u", max_attempts=3)

        self.assertIsNone(payload)
        self.assertEqual(client.chat.completions.create.call_count, 1)
        sleep.assert_not_called()

    def test_non_object_json_is_rejected(self):
        for content in ("[1, 2]", "not json", ""):
            client = _client_with(_completion(content))
            with patch.dict(os.environ, AI_ENV), patch("resume_optimizer.services.llm._client", return_value=client):
                self.assertIsNone(json_completion(system_prompt="s", user_prompt="u"))

    def test_required_variant_raises_typed_errors(self):
        with patch.dict(os.environ, {"AI_ENABLED": "0"}):
            with self.assertRaises(LLMError) as disabled:
                json_completion_required(system_prompt="s", user_prompt="u")
        self.assertEqual(disabled.exception.code, "llm_disabled")

        client = _client_with(_completion("not json"))
        with patch.dict(os.environ, AI_ENV), patch("resume_optimizer.services.llm._client", return_value=client):
            with self.assertRaises(LLMError) as invalid:
                json_completion_required(system_prompt="s", user_prompt="u")
        self.assertEqual(invalid.exception.code, "llm_invalid")


class TextCompletionTests(unittest.TestCase):
    def test_returns_stripped_text(self):
        client = _client_with(_completion("  Dear Hiring Manager,\n...  "))
        with patch.dict(os.environ, AI_ENV), patch("resume_optimizer.services.llm._client", return_value=client):
            self.assertEqual(text_completion(system_prompt="s", user_prompt="u"), "Dear Hiring Manager,\n...")

    def test_failures_map_to_error_codes(self):
        with patch.dict(os.environ, {"AI_ENABLED": "0"}):
            with self.assertRaises(LLMError) as disabled:
                text_completion(system_prompt="s", user_prompt="u")
        self.assertEqual(disabled.exception.code, "llm_disabled")

        client = _client_with(_status_error(500))
        with patch.dict(os.environ, AI_ENV), patch("resume_optimizer.services.llm._client", return_value=client):
            with self.assertRaises(LLMError) as failed:
                text_completion(system_prompt="s", user_prompt="u")
        self.assertEqual(failed.exception.code, "llm_exception")

        client = _client_with(_completion("   "))
        with patch.dict(os.environ, AI_ENV), patch("resume_optimizer.services.llm._client", return_value=client):
            with self.assertRaises(LLMError) as empty:
                text_completion(system_prompt="s", user_prompt="u")
        self.assertEqual(empty.exception.code, "llm_empty")


if __name__ == "__main__":
    unittest.main()
