"""
Section-header detection.

`is_header_line` is an ordered set of loose tests; short all-caps body
lines (acronym bullets, phone numbers) are reported as headers too, and
callers rely on that being stable.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple

from resume_optimizer.cleaner import split_lines

SUMMARY = "SUMMARY"
EXPERIENCE = "EXPERIENCE"
EDUCATION = "EDUCATION"
SKILLS = "SKILLS"
PROJECTS = "PROJECTS"
CERTIFICATIONS = "CERTIFICATIONS"
LANGUAGES = "LANGUAGES"

KNOWN_SECTIONS = frozenset(
    {SUMMARY, EXPERIENCE, EDUCATION, SKILLS, PROJECTS, CERTIFICATIONS, LANGUAGES}
)

IMPLICIT_SECTION = "PROFESSIONAL SUMMARY"

HDR = re.compile(
    r"^(PROFESSIONAL SUMMARY|SUMMARY|OBJECTIVE|EXPERIENCE|WORK EXPERIENCE|EMPLOYMENT"
    r"|EDUCATION|SKILLS|TECHNICAL SKILLS|PROJECTS|CERTIFICATIONS|CONTACT"
    r"|PERSONAL INFORMATION|ACHIEVEMENTS|AWARDS|LANGUAGES)",
    re.I,
)
CAPS = re.compile(r"^[A-Z\s]{3,}$")
YEAR_RANGE = re.compile(r"\d{4}-\d{4}")

# first match wins
_BUCKETS = (
    (SUMMARY, ("SUMMARY", "OBJECTIVE")),
    (EXPERIENCE, ("EXPERIENCE", "EMPLOYMENT", "WORK")),
    (EDUCATION, ("EDUCATION",)),
    (SKILLS, ("SKILL",)),
    (PROJECTS, ("PROJECT",)),
    (CERTIFICATIONS, ("CERTIFICATION", "CERTIFICATE")),
    (LANGUAGES, ("LANGUAGE",)),
)


def is_header_line(line: str) -> bool:
    if CAPS.match(line) or HDR.match(line):
        return True
    return (
        line == line.upper()
        and "@" not in line
        and not YEAR_RANGE.search(line)
        and 2 < len(line) < 50
    )


def normalize_section(line: str) -> str:
    """
    Map a header to its canonical section kind.

    Headers outside the known buckets come back as their upper-cased text;
    see `KNOWN_SECTIONS` to tell the two apart.
    """
    hdr = line.upper().strip()
    for kind, needles in _BUCKETS:
        if any(n in hdr for n in needles):
            return kind
    return hdr


class Section(NamedTuple):
    title: str
    lines: List[str]


def split_sections(text: str) -> List[Section]:
    """
    Raw section split for passthrough consumers (document export).

    Titles are kept verbatim. Lines before the first header form an
    implicit PROFESSIONAL SUMMARY section.
    """
    sections: List[Section] = []
    current: Section | None = None
    for ln in split_lines(text):
        if is_header_line(ln):
            if current:
                sections.append(current)
            current = Section(ln, [])
        elif current:
            current.lines.append(ln)
        elif not sections:
            current = Section(IMPLICIT_SECTION, [ln])
    if current:
        sections.append(current)
    return sections
