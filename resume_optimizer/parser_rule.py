"""
Rule-based résumé parser.

Turns loosely formatted résumé text (uploads or LLM output) into the
record from schema_resume:

• personal info is read from the first lines (name, title, contact)
• header lines switch the current section
• every other line goes to the handler of the current section

The rules are deliberately literal and order-sensitive. Unexpected text
never raises; it only leaves fields empty.
"""

from __future__ import annotations
import logging, re
from typing import Callable, Dict, Optional, Set, List

from resume_optimizer.cleaner import is_bulleted, split_lines, split_list, strip_bullet
from resume_optimizer.fields import (
    extract_end_date,
    extract_gpa,
    extract_graduation_date,
    extract_start_date,
    is_honors,
)
from resume_optimizer.headers import (
    CERTIFICATIONS,
    EDUCATION,
    EXPERIENCE,
    LANGUAGES,
    PROJECTS,
    SKILLS,
    SUMMARY,
    is_header_line,
    normalize_section,
)
from resume_optimizer.schema_resume import (
    EDUCATION_ENTRY,
    EXPERIENCE_ENTRY,
    PROJECT_ENTRY,
    new_entry,
    new_resume,
)

log = logging.getLogger(__name__)

PERSONAL_WINDOW = 10

NAME = re.compile(r"^[A-Za-z\s.'-]+$")
EMAIL = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
PHONE = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
STATE = re.compile(r"\b[A-Z]{2}\b")
URL = re.compile(r"(?:https?://|www\.)\S+", re.I)

JOB = re.compile(r"^(.+?)\s*[-–|]\s*(.+?)(?:\s*[-–|]\s*(.+?))?(?:\s*[-–|]\s*(.+?))?$")
YEAR = re.compile(r"\b\d{4}\b")
SEP = re.compile(r"[-–|]")
EDU_KEYS = ("Bachelor", "Master", "PhD", "Associate", "University", "College", "Institute")

COURSEWORK = re.compile(r"^(?:relevant\s+)?coursework\s*:\s*(.*)$", re.I)
TECH = re.compile(r"^(?:technologies|tech stack)\s*:\s*(.*)$", re.I)
LINK = re.compile(r"^link\s*:\s*(.*)$", re.I)

# handler(line, record, open_entry) -> open_entry
Handler = Callable[[str, Dict, Optional[Dict]], Optional[Dict]]


def parse_resume_rule(raw: str) -> Dict:
    out = new_resume()
    lines = split_lines(raw)
    taken = extract_personal_info(lines[:PERSONAL_WINDOW], out)

    # section dispatcher; `entry` is the only entry that may still grow
    sec, entry = None, None
    for i, ln in enumerate(lines):
        if i in taken:
            continue
        if is_header_line(ln):
            sec, entry = normalize_section(ln), None
            continue
        handler = _HANDLERS.get(sec)
        if handler:
            entry = handler(ln, out, entry)

    log.debug(
        "parsed %d lines: %d jobs, %d degrees, %d skills, %d projects",
        len(lines),
        len(out["experience"]),
        len(out["education"]),
        len(out["skills"]),
        len(out["projects"]),
    )
    return out


# ───────────────────────────────────────── personal info ──
def extract_personal_info(lines: List[str], o: Dict) -> Set[int]:
    """
    Fill name, title and contact fields of `o` from the leading lines.

    Each field is claimed at most once. Returns the indices of the lines
    used as name or title; contact lines are left in the stream.
    """
    contact = o["contact"]
    taken: Set[int] = set()
    for i, ln in enumerate(lines):
        if not o["name"] and _looks_like_name(ln):
            o["name"] = ln
            taken.add(i)
            continue
        if o["name"] and not o["title"] and _looks_like_title(ln):
            o["title"] = ln
            taken.add(i)
            continue
        if not _claim_contact(ln, contact) and not contact["location"] and _looks_like_location(ln):
            contact["location"] = ln
    return taken


def _looks_like_name(ln: str) -> bool:
    words = len(ln.split(" "))
    return 0 < len(ln) < 50 and bool(NAME.match(ln)) and 2 <= words <= 4


def _looks_like_title(ln: str) -> bool:
    return (
        0 < len(ln) < 100
        and not any(c in ln for c in "@(+")
        and not is_header_line(ln)
    )


def _looks_like_location(ln: str) -> bool:
    low = ln.lower()
    if "@" in ln or "linkedin" in low or "github" in low:
        return False
    return "," in ln or bool(STATE.search(ln))


def _claim_contact(ln: str, contact: Dict) -> bool:
    """Claim every still-empty contact field this line satisfies."""
    low = ln.lower()
    hit = False
    if not contact["email"] and "@" in ln:
        if m := EMAIL.search(ln):
            contact["email"] = m.group()
            hit = True
    if not contact["phone"]:
        if m := PHONE.search(ln):
            contact["phone"] = m.group()
            hit = True
    if not contact["linkedin"] and "linkedin" in low:
        contact["linkedin"] = ln
        hit = True
    if not contact["github"] and "github" in low:
        contact["github"] = ln
        hit = True
    if not contact["website"] and "linkedin" not in low and "github" not in low:
        if m := URL.search(ln):
            contact["website"] = m.group()
            hit = True
    return hit


# ───────────────────────────────────────── section bodies ──
def _summary(ln: str, o: Dict, entry: Optional[Dict]) -> Optional[Dict]:
    o["summary"] = f"{o['summary']} {ln}" if o["summary"] else ln
    return entry


def _experience(ln: str, o: Dict, entry: Optional[Dict]) -> Optional[Dict]:
    m = JOB.match(ln)
    if m and (YEAR.search(ln) or "Present" in ln or "Current" in ln):
        title, company, location, dates = m.groups()
        entry = new_entry(
            EXPERIENCE_ENTRY,
            title=title.strip(),
            company=company.strip(),
            location=(location or "").strip(),
            start_date=extract_start_date(dates or ""),
            end_date=extract_end_date(dates or ""),
        )
        o["experience"].append(entry)
    elif entry is not None:
        if bullet := strip_bullet(ln):
            entry["achievements"].append(bullet)
    return entry


def _education(ln: str, o: Dict, entry: Optional[Dict]) -> Optional[Dict]:
    if any(k in ln for k in EDU_KEYS):
        parts = [p.strip() for p in SEP.split(ln)] + ["", ""]
        entry = new_entry(
            EDUCATION_ENTRY,
            degree=parts[0],
            institution=parts[1],
            location=parts[2],
            graduation_date=extract_graduation_date(ln),
        )
        o["education"].append(entry)
        return entry
    if entry is None:
        return entry

    if "gpa" in ln.lower():
        if not entry["gpa"]:
            entry["gpa"] = extract_gpa(ln)
    elif is_honors(ln):
        if not entry["honors"]:
            entry["honors"] = ln
    elif m := COURSEWORK.match(ln):
        entry["coursework"].extend(split_list(m.group(1)))
    return entry


def _project(ln: str, o: Dict, entry: Optional[Dict]) -> Optional[Dict]:
    if entry is not None:
        if m := TECH.match(ln):
            entry["technologies"].extend(split_list(m.group(1)))
            return entry
        if m := LINK.match(ln):
            entry["link"] = entry["link"] or m.group(1).strip()
            return entry

    if not is_bulleted(ln) and len(ln) > 10:
        entry = new_entry(PROJECT_ENTRY, name=ln)
        o["projects"].append(entry)
    elif entry is not None:
        if text := strip_bullet(ln):
            desc = entry["description"]
            entry["description"] = f"{desc} {text}" if desc else text
    return entry


def _flat(key: str) -> Handler:
    def _append(ln: str, o: Dict, entry: Optional[Dict]) -> Optional[Dict]:
        if item := strip_bullet(ln):
            o[key].append(item)
        return entry

    return _append


_HANDLERS: Dict[str, Handler] = {
    SUMMARY: _summary,
    EXPERIENCE: _experience,
    EDUCATION: _education,
    SKILLS: _flat("skills"),
    PROJECTS: _project,
    CERTIFICATIONS: _flat("certifications"),
    LANGUAGES: _flat("languages"),
}
