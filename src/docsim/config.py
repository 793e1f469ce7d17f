from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError


EXECUTORS = ("thread", "process", "serial")


@dataclass(frozen=True)
class SimilarityProfile:
    name: str = "default"

    # scorer knobs
    ngram_size: int = 3

    # hybrid cascade
    jaccard_gate: float = 20.0
    levenshtein_max_length: int = 1000

    # pre-filter; None derives the ratio from the call threshold
    min_length_ratio: float | None = None

    # call defaults
    default_threshold: float = 30.0
    default_method: str = "hybrid"

    # batch fan-out; the scorers are pure Python and hold the GIL, so only
    # "process" scores pairs in parallel. "thread" overlaps nothing CPU-bound.
    executor: str = "thread"
    max_workers: int | None = None
    chunk_size: int = 64

    def __post_init__(self) -> None:
        if self.ngram_size < 1:
            raise ConfigError(f"ngram_size must be >= 1, got {self.ngram_size}")
        if self.levenshtein_max_length < 0:
            raise ConfigError(f"levenshtein_max_length must be >= 0, got {self.levenshtein_max_length}")
        if self.executor not in EXECUTORS:
            raise ConfigError(f"Unknown executor: {self.executor} (expected one of {', '.join(EXECUTORS)})")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.chunk_size < 1:
            raise ConfigError(f"chunk_size must be >= 1, got {self.chunk_size}")

    def resolved_workers(self) -> int:
        return self.max_workers or os.cpu_count() or 1


@dataclass(frozen=True)
class ProcessingConfig:
    max_workers: int | None = None
    similarity: SimilarityProfile = field(default_factory=SimilarityProfile)

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")


def _opt_float(value) -> float | None:
    return None if value is None else float(value)


def _opt_int(value) -> int | None:
    return None if value is None else int(value)


def profile_from_cfg(cfg: dict | None) -> SimilarityProfile:
    # allow empty cfg
    cfg = cfg or {}
    return SimilarityProfile(
        name=str(cfg.get("name", "default")),
        ngram_size=int(cfg.get("ngram_size", 3)),
        jaccard_gate=float(cfg.get("jaccard_gate", 20.0)),
        levenshtein_max_length=int(cfg.get("levenshtein_max_length", 1000)),
        min_length_ratio=_opt_float(cfg.get("min_length_ratio")),
        default_threshold=float(cfg.get("default_threshold", 30.0)),
        default_method=str(cfg.get("default_method", "hybrid")),
        executor=str(cfg.get("executor", "thread")).lower(),
        max_workers=_opt_int(cfg.get("max_workers")),
        chunk_size=int(cfg.get("chunk_size", 64)),
    )


def processing_config_from_cfg(cfg: dict | None) -> ProcessingConfig:
    cfg = cfg or {}
    processing = cfg.get("processing") or {}
    return ProcessingConfig(
        max_workers=_opt_int(processing.get("max_workers")),
        similarity=profile_from_cfg(cfg.get("similarity")),
    )


def load_config(path: Path) -> ProcessingConfig:
    """Read a YAML config file with optional ``similarity:`` and ``processing:`` sections."""
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return processing_config_from_cfg(raw)
