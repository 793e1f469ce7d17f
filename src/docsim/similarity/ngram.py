from __future__ import annotations

from ..clean import collapse_whitespace
from .base import overlap_percentage


def char_ngrams(text: str, n: int = 3) -> set[str]:
    """Set of contiguous ``n``-character shingles after normalization.

    A normalized text shorter than ``n``, the empty one included, is a single
    shingle.
    """
    if n < 1:
        raise ValueError(f"n-gram size must be >= 1, got {n}")
    cleaned = collapse_whitespace(text)
    if len(cleaned) < n:
        return {cleaned}
    return {cleaned[i : i + n] for i in range(len(cleaned) - n + 1)}


def ngram_similarity(source: str, target: str, n: int = 3) -> float:
    return overlap_percentage(char_ngrams(source, n), char_ngrams(target, n))
