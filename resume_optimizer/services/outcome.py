from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from resume_optimizer.schemas.scoring import AnalysisSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of an AI step chained to a heuristic fallback, tagged with who produced it."""

    source: AnalysisSource
    value: T | None = None
    error_code: str | None = None

    @property
    def available(self) -> bool:
        return self.source != "unavailable" and self.value is not None

    @classmethod
    def ai(cls, value: T) -> "Outcome[T]":
        return cls(source="ai", value=value)

    @classmethod
    def heuristic(cls, value: T, error_code: str | None = None) -> "Outcome[T]":
        return cls(source="heuristic", value=value, error_code=error_code)

    @classmethod
    def unavailable(cls, error_code: str) -> "Outcome[T]":
        return cls(source="unavailable", error_code=error_code)


def run_with_fallback(
    ai_step: Callable[[], T | None],
    heuristic_step: Callable[[], T] | None,
    *,
    operation: str,
) -> Outcome[T]:
    value = ai_step()
    if value is not None:
        return Outcome.ai(value)
    if heuristic_step is None:
        logger.info("%s_unavailable reason=ai_unavailable", operation)
        return Outcome.unavailable("ai_unavailable")
    logger.info("%s_fallback reason=ai_unavailable", operation)
    return Outcome.heuristic(heuristic_step(), error_code="ai_unavailable")
