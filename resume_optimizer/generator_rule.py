"""
Résumé record → plain text, the inverse of parser_rule.

The layout is chosen so parse_resume_rule() reads it back with the same
sections in the same order (some detail is lost, e.g. locations of jobs
without one).
"""
from pathlib import Path
from jinja2 import Environment, FileSystemLoader

from resume_optimizer.cleaner import format_resume_text
from resume_optimizer.schema_resume import CONTACT_FIELDS

env = Environment(loader=FileSystemLoader(Path(__file__).parent / "templates"),
                  autoescape=False, trim_blocks=True, lstrip_blocks=True)


def resume_to_text(data: dict) -> str:
    """Render résumé → text via templates/resume.txt.j2."""
    raw = env.get_template("resume.txt.j2").render(r=data, contact_fields=CONTACT_FIELDS)
    return format_resume_text(raw)
