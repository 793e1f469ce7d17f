from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..logging_config import get_logger

logger = get_logger("similarity")


class SimilarityMethod(str, Enum):
    """Scorers the batch comparator can dispatch to."""

    JACCARD = "jaccard"
    """Word-level token-set overlap"""

    NGRAM = "ngram"
    """Character-shingle overlap"""

    LEVENSHTEIN = "levenshtein"
    """Normalized edit distance"""

    HYBRID = "hybrid"
    """Jaccard gate, then Levenshtein for short pairs or N-gram for long ones"""


def parse_method(name: str | SimilarityMethod | None) -> SimilarityMethod:
    """Resolve a method name, falling back to HYBRID.

    Missing names fall back silently. Unrecognized names fall back too, but
    leave a warning in the log since a typo changes which scorer runs.
    """
    if isinstance(name, SimilarityMethod):
        return name
    if name is None:
        return SimilarityMethod.HYBRID
    key = str(name).strip().lower()
    if not key:
        return SimilarityMethod.HYBRID
    try:
        return SimilarityMethod(key)
    except ValueError:
        logger.warning("Unknown similarity method %r, using hybrid", name)
        return SimilarityMethod.HYBRID


@dataclass(frozen=True)
class SimilarityMatch:
    reference_index: int
    similarity_percentage: float

    def to_dict(self) -> dict:
        return {
            "reference_index": self.reference_index,
            "similarity_percentage": self.similarity_percentage,
        }


def overlap_percentage(a: set, b: set) -> float:
    """|A ∩ B| / |A ∪ B| as a percentage; 0.0 when both sets are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union * 100.0
