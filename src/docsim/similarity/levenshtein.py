from __future__ import annotations

import math


def levenshtein_distance(source: str, target: str, max_distance: int | None = None) -> int:
    """Edit distance with two rolling rows sized by the shorter string.

    With ``max_distance`` set, the computation stops as soon as a whole row
    lies above the bound and returns ``max_distance + 1``.
    """
    # rows are indexed by the shorter string, the longer one drives the loop
    if len(source) < len(target):
        source, target = target, source

    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    current = [0] * (len(target) + 1)

    for i, sc in enumerate(source, start=1):
        current[0] = i
        row_min = i
        for j, tc in enumerate(target, start=1):
            cost = 0 if sc == tc else 1
            best = min(current[j - 1] + 1, previous[j] + 1, previous[j - 1] + cost)
            current[j] = best
            if best < row_min:
                row_min = best

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        previous, current = current, previous

    return previous[-1]


def max_distance_for(max_length: int, threshold: float) -> int:
    """Largest distance whose similarity still reaches ``threshold``."""
    bound = math.floor(max_length * (1.0 - threshold / 100.0) + 1e-9)
    return max(0, bound)


def levenshtein_similarity(source: str, target: str, threshold: float | None = None) -> float:
    """Edit-distance similarity as a percentage.

    Both strings empty is 100.0. When ``threshold`` is given, pairs that
    cannot reach it are abandoned early and reported as 0.0.
    """
    max_length = max(len(source), len(target))
    if max_length == 0:
        return 100.0

    max_distance = None if threshold is None else max_distance_for(max_length, threshold)
    distance = levenshtein_distance(source, target, max_distance)

    if max_distance is not None and distance > max_distance:
        return 0.0

    score = (max_length - distance) / max_length * 100.0
    return min(100.0, max(0.0, score))
