from __future__ import annotations


def length_ratio(source: str, target: str) -> float:
    """Shorter length over longer length; 1.0 for two empty texts."""
    longest = max(len(source), len(target))
    if longest == 0:
        return 1.0
    return min(len(source), len(target)) / longest


def min_ratio_for(threshold: float, min_length_ratio: float | None = None) -> float:
    """Cutoff used by the pre-filter.

    A configured ratio wins; otherwise the length difference may not exceed
    ``100 - threshold`` percent of the longer text.
    """
    if min_length_ratio is not None:
        return min_length_ratio
    return threshold / 100.0


def passes_length_filter(source: str, target: str, min_ratio: float) -> bool:
    """Cheap rejection test: False means "too different in length to score".

    This is a heuristic, not a bound on every scorer. Edit similarity can
    never exceed the length ratio, but token or shingle overlap can.
    """
    return length_ratio(source, target) >= min_ratio
