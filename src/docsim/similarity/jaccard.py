from __future__ import annotations

from ..clean import word_tokens
from .base import overlap_percentage


def token_set(text: str) -> set[str]:
    return set(word_tokens(text))


def jaccard_similarity(source: str, target: str) -> float:
    """Word-level Jaccard index as a percentage.

    Tokens are lowercased and split on whitespace. Two texts without any
    token score 0.0: no tokens is no evidence of similarity.
    """
    return overlap_percentage(token_set(source), token_set(target))
