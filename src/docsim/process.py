from __future__ import annotations

"""File-batch orchestration.

Extracts text from many files in parallel, groups the results by MIME type
and, on request, scores each extracted text against a reference corpus.
Files whose extraction failed, or produced no text, are never compared.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Sequence

from .config import ProcessingConfig
from .errors import ExtractionError
from .extract import FileHandler, default_handlers, find_handler
from .logging_config import get_logger
from .similarity import SimilarityMatch, SimilarityMethod, compare_with_documents

logger = get_logger("process")

ENCODING_OK = "utf-8"
ENCODING_ERROR = "error"
ENCODING_UNHANDLED = "application/octet-stream"


@dataclass
class FileInput:
    content: bytes
    mime_type: str
    filename: str


@dataclass
class FileMetadata:
    name: str
    size: float
    processing_time_ms: float
    encoding: str
    text_content: str

    @property
    def is_comparable(self) -> bool:
        return self.encoding == ENCODING_OK and bool(self.text_content.strip())

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FileMetadataWithSimilarity(FileMetadata):
    similarity_matches: list[SimilarityMatch] = field(default_factory=list)


@dataclass
class GroupedFiles:
    mime_type: str
    files: list[FileMetadata]


@dataclass
class GroupedFilesWithSimilarity:
    mime_type: str
    files: list[FileMetadataWithSimilarity]


def extract_file(file: FileInput, handlers: Sequence[FileHandler]) -> FileMetadata:
    """Run the first matching handler; failures become ``encoding="error"``."""
    started = time.perf_counter()
    handler = find_handler(file.mime_type, handlers)

    if handler is None:
        logger.debug("No handler for %s (%s)", file.filename, file.mime_type)
        text, encoding = "", ENCODING_UNHANDLED
    else:
        try:
            text, encoding = handler.extract_text(file.content, file.filename, file.mime_type), ENCODING_OK
        except ExtractionError as e:
            logger.warning("Extraction failed for %s: %s", file.filename, e)
            text, encoding = f"Error: {e}", ENCODING_ERROR
        except Exception as e:
            logger.exception("Unexpected extraction failure for %s", file.filename)
            text, encoding = f"Error: {e}", ENCODING_ERROR

    return FileMetadata(
        name=file.filename,
        size=float(len(file.content)),
        processing_time_ms=(time.perf_counter() - started) * 1000.0,
        encoding=encoding,
        text_content=text,
    )


def _extract_all(
    files: Sequence[FileInput],
    config: ProcessingConfig,
    handlers: Sequence[FileHandler] | None,
) -> list[FileMetadata]:
    handlers = default_handlers() if handlers is None else handlers
    if not files:
        return []
    workers = min(config.max_workers or config.similarity.resolved_workers(), len(files))
    with ThreadPoolExecutor(max_workers=max(1, workers)) as ex:
        # map keeps input order, so grouping below is deterministic
        return list(ex.map(lambda f: extract_file(f, handlers), files))


def _group(files: Sequence[FileInput], metas: Sequence) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for file, meta in zip(files, metas):
        grouped.setdefault(file.mime_type, []).append(meta)
    return grouped


def process_files(
    files: Sequence[FileInput],
    config: ProcessingConfig | None = None,
    handlers: Sequence[FileHandler] | None = None,
) -> list[GroupedFiles]:
    config = config or ProcessingConfig()
    metas = _extract_all(files, config, handlers)
    grouped = _group(files, metas)
    logger.info("Processed %d files into %d MIME groups", len(files), len(grouped))
    return [GroupedFiles(mime_type=mime, files=items) for mime, items in grouped.items()]


def process_and_compare_files(
    files: Sequence[FileInput],
    reference_texts: Sequence[str],
    threshold: float | None = None,
    method: str | SimilarityMethod | None = None,
    config: ProcessingConfig | None = None,
    handlers: Sequence[FileHandler] | None = None,
) -> list[GroupedFilesWithSimilarity]:
    """Extract every file, then score each usable text against the references."""
    config = config or ProcessingConfig()
    metas = _extract_all(files, config, handlers)

    scored: list[FileMetadataWithSimilarity] = []
    for meta in metas:
        matches: list[SimilarityMatch] = []
        if meta.is_comparable:
            matches = compare_with_documents(
                meta.text_content,
                reference_texts,
                threshold=threshold,
                method=method,
                profile=config.similarity,
            )
        scored.append(FileMetadataWithSimilarity(**asdict(meta), similarity_matches=matches))

    grouped = _group(files, scored)
    logger.info(
        "Processed %d files against %d references (%d with matches)",
        len(files),
        len(reference_texts),
        sum(1 for m in scored if m.similarity_matches),
    )
    return [GroupedFilesWithSimilarity(mime_type=mime, files=items) for mime, items in grouped.items()]
