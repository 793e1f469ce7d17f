from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Sequence

from ..config import SimilarityProfile
from ..logging_config import get_logger
from .base import SimilarityMatch, SimilarityMethod, parse_method
from .hybrid import hybrid_similarity
from .jaccard import jaccard_similarity
from .levenshtein import levenshtein_similarity
from .ngram import ngram_similarity
from .prefilter import min_ratio_for, passes_length_filter

logger = get_logger("compare")


def calculate_similarity(
    source: str,
    target: str,
    method: str | SimilarityMethod | None = SimilarityMethod.HYBRID,
    profile: SimilarityProfile | None = None,
    threshold: float | None = None,
) -> float:
    """Score one pair with the selected method (percentage in [0, 100]).

    ``threshold`` only lets edit-distance scoring stop early on pairs that
    cannot reach it; it never changes a score that does.
    """
    profile = profile or SimilarityProfile()
    method = parse_method(method)

    if method is SimilarityMethod.JACCARD:
        return jaccard_similarity(source, target)
    if method is SimilarityMethod.NGRAM:
        return ngram_similarity(source, target, profile.ngram_size)
    if method is SimilarityMethod.LEVENSHTEIN:
        return levenshtein_similarity(source, target, threshold)
    return hybrid_similarity(source, target, profile, threshold)


def _score_chunk(
    candidate: str,
    chunk: Sequence[tuple[int, str]],
    method: SimilarityMethod,
    profile: SimilarityProfile,
    threshold: float,
    min_ratio: float,
) -> list[tuple[int, float]]:
    """Score a contiguous slice of the corpus; returns only qualifying pairs."""
    hits: list[tuple[int, float]] = []
    for idx, reference in chunk:
        if not passes_length_filter(candidate, reference, min_ratio):
            continue
        score = calculate_similarity(candidate, reference, method, profile, threshold)
        if score >= threshold:
            hits.append((idx, score))
    return hits


def _partition(references: Sequence[str], chunk_size: int) -> list[list[tuple[int, str]]]:
    indexed = list(enumerate(references))
    return [indexed[i : i + chunk_size] for i in range(0, len(indexed), chunk_size)]


def _make_executor(profile: SimilarityProfile, n_chunks: int) -> Executor:
    workers = min(profile.resolved_workers(), n_chunks)
    if profile.executor == "process":
        return ProcessPoolExecutor(max_workers=workers)
    return ThreadPoolExecutor(max_workers=workers)


def compare_with_documents(
    candidate: str,
    references: Sequence[str],
    threshold: float | None = None,
    method: str | SimilarityMethod | None = None,
    profile: SimilarityProfile | None = None,
) -> list[SimilarityMatch]:
    """Compare one candidate against every reference text.

    Each reference goes through the length pre-filter, then the selected
    scorer; references scoring ``>= threshold`` come back as matches tagged
    with their position in ``references``. The corpus is split into
    contiguous chunks scored by independent workers, and their local
    results are merged once at the end. Matches are ordered by
    ``reference_index``.

    ``threshold`` and ``method`` default to the profile's defaults. An
    unknown method name falls back to hybrid.
    """
    profile = profile or SimilarityProfile()
    if threshold is None:
        threshold = profile.default_threshold
    method = parse_method(profile.default_method if method is None else method)

    if not references:
        return []

    min_ratio = min_ratio_for(threshold, profile.min_length_ratio)
    chunks = _partition(references, profile.chunk_size)

    hits: list[tuple[int, float]] = []
    if profile.executor == "serial" or len(chunks) == 1 or profile.resolved_workers() == 1:
        for chunk in chunks:
            hits.extend(_score_chunk(candidate, chunk, method, profile, threshold, min_ratio))
    else:
        with _make_executor(profile, len(chunks)) as ex:
            futures = [
                ex.submit(_score_chunk, candidate, chunk, method, profile, threshold, min_ratio)
                for chunk in chunks
            ]
            for fut in as_completed(futures):
                hits.extend(fut.result())

    hits.sort(key=lambda hit: hit[0])
    logger.debug(
        "Compared candidate (%d chars) against %d references with %s: %d matches",
        len(candidate),
        len(references),
        method.value,
        len(hits),
    )
    return [SimilarityMatch(reference_index=idx, similarity_percentage=score) for idx, score in hits]
