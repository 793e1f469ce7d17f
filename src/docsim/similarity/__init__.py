"""Similarity comparison engine.

Pure scorers (Jaccard, character n-gram, Levenshtein), the hybrid cascade
that chooses between them, and the batch comparator that fans one
candidate out over a reference corpus.
"""
from __future__ import annotations

from .base import SimilarityMatch, SimilarityMethod, parse_method
from .compare import calculate_similarity, compare_with_documents
from .hybrid import hybrid_cascade, hybrid_similarity
from .jaccard import jaccard_similarity
from .levenshtein import levenshtein_distance, levenshtein_similarity
from .ngram import char_ngrams, ngram_similarity
from .prefilter import length_ratio, passes_length_filter

__all__ = [
    "SimilarityMatch",
    "SimilarityMethod",
    "calculate_similarity",
    "char_ngrams",
    "compare_with_documents",
    "hybrid_cascade",
    "hybrid_similarity",
    "jaccard_similarity",
    "length_ratio",
    "levenshtein_distance",
    "levenshtein_similarity",
    "ngram_similarity",
    "parse_method",
    "passes_length_filter",
]
