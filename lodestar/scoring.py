"""Fuzzy subsequence matching and tiered scoring for catalog entries.

Every function here is pure and expects lowercase input; the search index
lowercases titles and keywords once at build time and the query once per
search.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .config import (
    DEFAULT_KEYWORD_MULTIPLIER,
    DEFAULT_PREFIX_BONUS,
    DEFAULT_TITLE_MULTIPLIER,
    Config,
)


class MatchRule(str, Enum):
    prefix = "prefix"
    title = "title"
    keyword = "keyword"


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Tuning constants for the three match tiers.

    Rule priority is fixed (prefix, then fuzzy title, then fuzzy keyword) but
    the ranking between entries follows the scores. A prefix match outranks
    the fuzzy tiers only while base weights are equal and ``prefix_bonus`` is
    at least ``title_multiplier`` and ``keyword_multiplier``, which the
    defaults satisfy.
    """

    prefix_bonus: float = DEFAULT_PREFIX_BONUS
    title_multiplier: float = DEFAULT_TITLE_MULTIPLIER
    keyword_multiplier: float = DEFAULT_KEYWORD_MULTIPLIER


@dataclass(frozen=True, slots=True)
class Match:
    score: float
    rule: MatchRule


def weights_from_config(config: Config) -> ScoringWeights:
    return ScoringWeights(
        prefix_bonus=config.prefix_bonus,
        title_multiplier=config.title_multiplier,
        keyword_multiplier=config.keyword_multiplier,
    )


def is_subsequence(query: str, target: str) -> bool:
    """Return True when every character of *query* appears in *target* in order."""

    needed = len(query)
    if needed == 0:
        return True
    if needed > len(target):
        return False
    position = 0
    for char in target:
        if char == query[position]:
            position += 1
            if position == needed:
                return True
    return False


def score_entry(
    query: str,
    title: str,
    keywords: Sequence[str],
    base_weight: float,
    weights: ScoringWeights = ScoringWeights(),
) -> Match | None:
    """Score one entry against *query*, or return None when nothing matches.

    Rules are tried in priority order and the first hit wins: title prefix,
    fuzzy title, then fuzzy keyword (first matching keyword in keyword order).
    """

    if title.startswith(query):
        return Match(score=base_weight + weights.prefix_bonus, rule=MatchRule.prefix)
    query_length = len(query)
    if is_subsequence(query, title):
        ratio = query_length / len(title)
        return Match(
            score=base_weight + weights.title_multiplier * ratio,
            rule=MatchRule.title,
        )
    for keyword in keywords:
        if keyword and is_subsequence(query, keyword):
            ratio = query_length / len(keyword)
            return Match(
                score=base_weight + weights.keyword_multiplier * ratio,
                rule=MatchRule.keyword,
            )
    return None
