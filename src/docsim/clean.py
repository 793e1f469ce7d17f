from __future__ import annotations

import re


_re_any_whitespace = re.compile(r"\s+")


def strip_blank_lines(text: str) -> str:
    """Strip every line and drop the empty ones."""
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def collapse_whitespace(text: str) -> str:
    """Lowercase and fold every whitespace run into a single space."""
    return _re_any_whitespace.sub(" ", text.lower()).strip()


def word_tokens(text: str) -> list[str]:
    """Lowercased whitespace-delimited tokens."""
    return [tok.lower() for tok in text.split()]
