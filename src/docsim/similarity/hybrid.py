from __future__ import annotations

from ..config import SimilarityProfile
from .base import SimilarityMethod
from .jaccard import jaccard_similarity
from .levenshtein import levenshtein_similarity
from .ngram import ngram_similarity


def hybrid_cascade(
    source: str,
    target: str,
    profile: SimilarityProfile | None = None,
    threshold: float | None = None,
) -> tuple[SimilarityMethod, float]:
    """Progressive cascade: cheap word gate, then one precise scorer.

    1) Word Jaccard; below ``jaccard_gate`` that score is final.
    2) Both texts under ``levenshtein_max_length`` characters: edit distance
       (abandoned early once ``threshold`` is out of reach).
    3) Otherwise character n-grams, which stay linear on long texts.

    Returns the scorer that produced the final score along with it
    (JACCARD when the pair stopped at the gate).

    Texts that share characters but few whole words (heavy misspelling)
    stop at the gate; that is accepted as an approximation.
    """
    profile = profile or SimilarityProfile()

    jaccard_score = jaccard_similarity(source, target)
    if jaccard_score < profile.jaccard_gate:
        return SimilarityMethod.JACCARD, jaccard_score

    limit = profile.levenshtein_max_length
    if len(source) < limit and len(target) < limit:
        return SimilarityMethod.LEVENSHTEIN, levenshtein_similarity(source, target, threshold)

    return SimilarityMethod.NGRAM, ngram_similarity(source, target, profile.ngram_size)


def hybrid_similarity(
    source: str,
    target: str,
    profile: SimilarityProfile | None = None,
    threshold: float | None = None,
) -> float:
    _, score = hybrid_cascade(source, target, profile, threshold)
    return score
