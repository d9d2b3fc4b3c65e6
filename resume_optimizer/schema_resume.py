"""
Canonical résumé record shape (empty lists / strings, no placeholders).

Records are plain dicts so they serialise straight to JSON and feed the
Jinja2 text template without conversion.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

CONTACT_FIELDS = ("email", "phone", "location", "linkedin", "github", "website")

RESUME_SCHEMA = {
    "name": "",
    "title": "",
    "contact": {k: "" for k in CONTACT_FIELDS},
    "summary": "",
    "experience": [],
    "education": [],
    "skills": [],
    "projects": [],
    "certifications": [],
    "languages": [],
}

EXPERIENCE_ENTRY = {
    "title": "",
    "company": "",
    "location": "",
    "start_date": "",
    "end_date": "",
    "achievements": [],
}

EDUCATION_ENTRY = {
    "degree": "",
    "institution": "",
    "location": "",
    "graduation_date": "",
    "gpa": "",
    "honors": "",
    "coursework": [],
}

PROJECT_ENTRY = {
    "name": "",
    "description": "",
    "technologies": [],
    "link": "",
}

LIST_FIELDS = ("experience", "education", "skills", "projects", "certifications", "languages")


def new_resume() -> Dict[str, Any]:
    return copy.deepcopy(RESUME_SCHEMA)


def new_entry(template: Dict[str, Any], **fields: Any) -> Dict[str, Any]:
    entry = copy.deepcopy(template)
    entry.update(fields)
    return entry


def merge_resume(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay `extra` onto `base` and return a new record.

    Scalars and contact keys present in `extra` win; lists in `extra`
    replace the corresponding list wholesale. Neither input is mutated.
    """
    out = copy.deepcopy(base)
    for key, value in extra.items():
        if key == "contact":
            out.setdefault("contact", {}).update(copy.deepcopy(value or {}))
        elif key in LIST_FIELDS:
            if value is not None:
                out[key] = copy.deepcopy(value)
        else:
            out[key] = copy.deepcopy(value)
    return out
