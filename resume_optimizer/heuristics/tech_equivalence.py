from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from resume_optimizer.core.config.scoring import get_scoring_value

from .text import contains_term


def _load_clusters() -> tuple[tuple[str, ...], ...]:
    raw = get_scoring_value("tech_equivalents", {}) or {}
    clusters: list[tuple[str, ...]] = []
    for key, members in raw.items():
        cluster = [str(key).strip()]
        if isinstance(members, list):
            cluster.extend(str(member).strip() for member in members)
        clusters.append(tuple(item for item in cluster if item))
    return tuple(clusters)


class TechStackEquivalenceMapper:
    """Maps each technology to related technologies from static clusters.

    A cluster applies when one of its terms appears in the technology name; the
    returned list never holds the technology itself or anything that contains it.
    """

    def __init__(self, clusters: Iterable[Iterable[str]]) -> None:
        self._clusters = tuple(tuple(cluster) for cluster in clusters)

    @staticmethod
    def _overlaps(term: str, tech: str) -> bool:
        return term.lower() == tech.lower() or contains_term(tech, term) or contains_term(term, tech)

    def equivalents_for(self, tech: str) -> list[str]:
        related: list[str] = []
        seen: set[str] = set()
        for cluster in self._clusters:
            if not any(contains_term(tech, term) for term in cluster):
                continue
            for term in cluster:
                key = term.lower()
                if key in seen or self._overlaps(term, tech):
                    continue
                seen.add(key)
                related.append(term)
        return related

    def map_equivalents(self, tech_stack: list[str]) -> dict[str, list[str]]:
        mapping: dict[str, list[str]] = {}
        for tech in tech_stack or []:
            normalized = (tech or "").strip()
            if not normalized or normalized in mapping:
                continue
            mapping[normalized] = self.equivalents_for(normalized)
        return mapping


@lru_cache(maxsize=1)
def get_default_tech_mapper() -> TechStackEquivalenceMapper:
    return TechStackEquivalenceMapper(_load_clusters())


def map_tech_equivalents(tech_stack: list[str]) -> dict[str, list[str]]:
    return get_default_tech_mapper().map_equivalents(tech_stack)
