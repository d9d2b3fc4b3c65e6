"""
Shared text clean-ups.
"""
from __future__ import annotations
import re

_BULLET = re.compile(r"^[•\-*]\s*")
_BLANK_RUNS = re.compile(r"\n{3,}")
# characters XML 1.0 (and so python-docx) refuses
_XML_UNSAFE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def strip_bullet(line: str) -> str:
    """Drop one leading bullet marker (•, -, *) and the whitespace after it."""
    return _BULLET.sub("", line)


def is_bulleted(line: str) -> bool:
    return line.startswith(("•", "-", "*"))


def normalise_newlines(text: str) -> str:
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    """Non-blank, trimmed lines of `text` in order."""
    return [ln.strip() for ln in normalise_newlines(text).split("\n") if ln.strip()]


def split_list(value: str) -> list[str]:
    """Comma-separated list → trimmed, non-empty items."""
    return [x.strip() for x in value.split(",") if x.strip()]


def strip_control_chars(text: str) -> str:
    return _XML_UNSAFE.sub("", text or "")


def format_resume_text(text: str) -> str:
    """Collapse blank-line runs and trim every line of LLM output."""
    text = _BLANK_RUNS.sub("\n\n", normalise_newlines(text))
    return "\n".join(ln.strip() for ln in text.split("\n")).strip()
