from __future__ import annotations

import json
import logging
import os
import time
from functools import lru_cache
from typing import Any

from openai import APIStatusError, OpenAI

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class LLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_enabled() -> bool:
    if not _env_bool("AI_ENABLED", True):
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=_env_float("AI_TIMEOUT_S", 30.0),
        max_retries=0,
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()


def retry_delays(max_attempts: int) -> list[float]:
    """Seconds to wait before each retry: 0.5s, 1.5s, 4.5s, ... by default."""
    base = _env_float("AI_RETRY_BASE_DELAY_MS", 500.0) / 1000.0
    backoff = _env_float("AI_RETRY_BACKOFF", 3.0)
    return [base * (backoff**attempt) for attempt in range(max(0, max_attempts - 1))]


def _is_retryable(exc: Exception) -> bool:
    return isinstance(exc, APIStatusError) and exc.status_code in RETRYABLE_STATUS_CODES


def _chat(
    *,
    messages: list[dict[str, str]],
    temperature: float,
    max_output_tokens: int,
    json_mode: bool,
    max_attempts: int,
    operation: str,
) -> str:
    delays = retry_delays(max_attempts)
    attempt = 0
    while True:
        attempt += 1
        try:
            kwargs: dict[str, Any] = {
                "model": _model(),
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_output_tokens,
            }
            if json_mode:
                kwargs["response_format"] = {"type": "json_object"}
            response = _client().chat.completions.create(**kwargs)
            return (response.choices[0].message.content if response.choices else "") or ""
        except Exception as exc:
            if attempt > len(delays) or not _is_retryable(exc):
                raise
            delay = delays[attempt - 1]
            logger.info(
                "llm_retry operation=%s attempt=%s status=%s delay_s=%.2f",
                operation,
                attempt,
                getattr(exc, "status_code", None),
                delay,
            )
            time.sleep(delay)


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 1500,
    max_attempts: int = 1,
    operation: str = "unknown",
) -> dict[str, Any] | None:
    if not llm_enabled():
        logger.debug("llm_json_skipped operation=%s reason=llm_disabled", operation)
        return None

    started = time.perf_counter()
    try:
        content = _chat(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            json_mode=True,
            max_attempts=max_attempts,
            operation=operation,
        )
        if not content:
            logger.warning("llm_json_empty operation=%s model=%s", operation, _model())
            return None
        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            logger.warning("llm_json_invalid_schema operation=%s model=%s", operation, _model())
            return None
        logger.info(
            "llm_json_success operation=%s model=%s latency_ms=%s",
            operation,
            _model(),
            int((time.perf_counter() - started) * 1000),
        )
        return parsed
    except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
        logger.warning(
            "llm_json_failed operation=%s model=%s prompt_len=%s: %s",
            operation,
            _model(),
            len(user_prompt),
            exc,
        )
        return None


def json_completion_required(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 1500,
    operation: str = "unknown",
) -> dict[str, Any]:
    if not llm_enabled():
        raise LLMError("AI features are not configured on this server.", code="llm_disabled")

    payload = json_completion(
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        operation=operation,
    )
    if not payload:
        raise LLMError("The AI service could not produce a valid response. Try again.", code="llm_invalid")
    return payload


def text_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.7,
    max_output_tokens: int = 1000,
    operation: str = "unknown",
) -> str:
    if not llm_enabled():
        raise LLMError("AI features are not configured on this server.", code="llm_disabled")

    try:
        content = _chat(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            json_mode=False,
            max_attempts=1,
            operation=operation,
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("llm_text_failed operation=%s model=%s: %s", operation, _model(), exc)
        raise LLMError("The AI service failed to generate content. Try again.", code="llm_exception") from exc

    text = content.strip()
    if not text:
        raise LLMError("The AI service returned an empty response. Try again.", code="llm_empty")
    return text
