"""
Small field extractors used inside section bodies.

All of them are total: text in, string out, "" when nothing matches.
"""
from __future__ import annotations
import re

DATE = re.compile(r"(\w+\s+\d{4}|\d{4})")
GPA = re.compile(r"(\d+\.\d+)")
_ONGOING = ("present", "current")
_HONORS = ("magna cum laude", "summa cum laude", "cum laude")


def extract_start_date(fragment: str) -> str:
    m = DATE.search(fragment or "")
    return m.group(1) if m else ""


def extract_end_date(fragment: str) -> str:
    """'Present' for ongoing roles, else the second date in the fragment."""
    low = (fragment or "").lower()
    if any(w in low for w in _ONGOING):
        return "Present"
    matches = DATE.findall(fragment or "")
    return matches[1] if len(matches) > 1 else ""


def extract_graduation_date(line: str) -> str:
    return extract_start_date(line)


def extract_gpa(line: str) -> str:
    m = GPA.search(line or "")
    return m.group(1) if m else ""


def is_honors(line: str) -> bool:
    low = (line or "").lower()
    return any(h in low for h in _HONORS)
