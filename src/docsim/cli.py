from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path

from .config import ProcessingConfig, load_config
from .errors import DocsimError
from .logging_config import get_logger, setup_logging
from .process import FileInput, process_and_compare_files, process_files

logger = get_logger("cli")


def load_jsonl(path: Path) -> list[dict]:
    items: list[dict] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            items.append(json.loads(line))
    return items


def load_reference_texts(path: Path) -> list[str]:
    """References are JSONL objects with a ``text`` field; line order is the index."""
    return [str(item.get("text", "")) for item in load_jsonl(path)]


def write_jsonl(items: list[dict], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        for item in items:
            f.write(json.dumps(item, ensure_ascii=False) + "\n")


def guess_mime_type(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    return mime or "application/octet-stream"


def read_inputs(paths: list[str]) -> list[FileInput]:
    files: list[FileInput] = []
    for raw in paths:
        path = Path(raw)
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")
        files.append(FileInput(content=path.read_bytes(), mime_type=guess_mime_type(path), filename=path.name))
    return files


def flatten_groups(groups) -> list[dict]:
    rows: list[dict] = []
    for group in groups:
        for meta in group.files:
            row = {"mime_type": group.mime_type}
            row.update(meta.to_dict())
            rows.append(row)
    return rows


def _load_processing_config(path: str | None) -> ProcessingConfig:
    return load_config(Path(path)) if path else ProcessingConfig()


def cmd_extract(args: argparse.Namespace) -> int:
    config = _load_processing_config(args.config)
    groups = process_files(read_inputs(args.files), config=config)
    rows = flatten_groups(groups)
    write_jsonl(rows, Path(args.out))
    print(f"Wrote {len(rows)} files to {args.out}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    config = _load_processing_config(args.config)
    references = load_reference_texts(Path(args.references))
    groups = process_and_compare_files(
        read_inputs(args.files),
        references,
        threshold=args.threshold,
        method=args.method,
        config=config,
    )
    rows = flatten_groups(groups)
    write_jsonl(rows, Path(args.out))
    n_matched = sum(1 for r in rows if r["similarity_matches"])
    print(f"Wrote {len(rows)} files to {args.out} ({n_matched} with matches against {len(references)} references)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsim", description="Extract document text and find near-duplicates")
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO, DEBUG with DOCSIM_DEBUG=1)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Extract text from files -> JSONL")
    p_extract.add_argument("files", nargs="+", help="Input files")
    p_extract.add_argument("--out", required=True, help="Output JSONL path")
    p_extract.add_argument("--config", default=None, help="YAML config")
    p_extract.set_defaults(func=cmd_extract)

    p_compare = sub.add_parser("compare", help="Extract text and score it against reference texts -> JSONL")
    p_compare.add_argument("files", nargs="+", help="Input files")
    p_compare.add_argument("--references", required=True, help="JSONL with one {\"text\": ...} per reference")
    p_compare.add_argument("--out", required=True, help="Output JSONL path")
    p_compare.add_argument("--threshold", type=float, default=None, help="Minimum similarity percentage (default 30)")
    p_compare.add_argument(
        "--method",
        default=None,
        help="jaccard | ngram | levenshtein | hybrid (default hybrid; unknown names fall back to hybrid)",
    )
    p_compare.add_argument("--config", default=None, help="YAML config")
    p_compare.set_defaults(func=cmd_compare)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level)
        return args.func(args)
    except (DocsimError, ValueError, OSError) as e:
        logger.error("%s", e)
        print(f"docsim: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
