"""
Résumé → downloadable PDF / DOCX bytes.

A source is either a parsed record (laid out field by field) or plain
text (laid out from split_sections, so sections the parser has no bucket
for, such as AWARDS, survive the export).
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, List, NamedTuple, Tuple, Union
from xml.sax.saxutils import escape

import docx
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from resume_optimizer.cleaner import is_bulleted, strip_bullet, strip_control_chars
from resume_optimizer.headers import split_sections
from resume_optimizer.schema_resume import CONTACT_FIELDS

log = logging.getLogger(__name__)

Source = Union[Dict, str]

ACCENT = "3B82F6"
MUTED = "6B7280"

_YEAR = re.compile(r"\d{4}")


class Block(NamedTuple):
    kind: str  # heading | entry | bullet | body
    text: str
    detail: str = ""


Layout = Tuple[str, List[str], List[Block]]


# ───────────────────────────────────────── layout ──
def _join(*parts: str, sep: str = " | ") -> str:
    return sep.join(p for p in parts if p)


def _layout_from_record(r: Dict) -> Layout:
    contact = r.get("contact") or {}
    header = [x for x in (r.get("title", ""), _join(*(contact.get(k, "") for k in CONTACT_FIELDS))) if x]
    blocks: List[Block] = []

    if r.get("summary"):
        blocks += [Block("heading", "PROFESSIONAL SUMMARY"), Block("body", r["summary"])]

    if r.get("experience"):
        blocks.append(Block("heading", "WORK EXPERIENCE"))
        for exp in r["experience"]:
            dates = _join(exp.get("start_date", ""), exp.get("end_date", ""), sep=" - ")
            detail = _join(exp.get("company", ""), exp.get("location", ""), dates)
            blocks.append(Block("entry", exp.get("title", ""), f" - {detail}" if detail else ""))
            blocks += [Block("bullet", a) for a in exp.get("achievements", [])]

    if r.get("education"):
        blocks.append(Block("heading", "EDUCATION"))
        for edu in r["education"]:
            detail = _join(edu.get("institution", ""), edu.get("location", ""), edu.get("graduation_date", ""))
            blocks.append(Block("entry", edu.get("degree", ""), f" - {detail}" if detail else ""))
            if edu.get("gpa"):
                blocks.append(Block("body", f"GPA: {edu['gpa']}"))
            if edu.get("honors"):
                blocks.append(Block("body", edu["honors"]))
            if edu.get("coursework"):
                blocks.append(Block("body", "Relevant Coursework: " + ", ".join(edu["coursework"])))

    if r.get("skills"):
        blocks.append(Block("heading", "SKILLS"))
        blocks += [Block("bullet", s) for s in r["skills"]]

    if r.get("projects"):
        blocks.append(Block("heading", "PROJECTS"))
        for p in r["projects"]:
            blocks.append(Block("entry", p.get("name", "")))
            if p.get("description"):
                blocks.append(Block("body", p["description"]))
            if p.get("technologies"):
                blocks.append(Block("body", "Technologies: " + ", ".join(p["technologies"])))
            if p.get("link"):
                blocks.append(Block("body", f"Link: {p['link']}"))

    for key, heading in (("certifications", "CERTIFICATIONS"), ("languages", "LANGUAGES")):
        if r.get(key):
            blocks.append(Block("heading", heading))
            blocks += [Block("bullet", x) for x in r[key]]

    return r.get("name", ""), header, blocks


def _layout_from_text(text: str) -> Layout:
    sections = split_sections(text)
    name, header = "", []
    if sections and sections[0].lines:
        first = sections[0].lines[0]
        if len(first.split(" ")) <= 4 and "@" not in first:
            name = first
            if len(sections[0].lines) > 1:
                header = [" | ".join(sections[0].lines[1:])]
            sections = sections[1:]

    blocks: List[Block] = []
    for sec in sections:
        blocks.append(Block("heading", sec.title))
        skills = "skill" in sec.title.lower()
        for item in sec.lines:
            clean = strip_bullet(item)
            if skills or is_bulleted(item):
                blocks.append(Block("bullet", clean))
            elif " - " in item or _YEAR.search(item):
                head, _, rest = clean.partition(" - ")
                blocks.append(Block("entry", head, f" - {rest}" if rest else ""))
            else:
                blocks.append(Block("body", clean))
    return name, header, blocks


def layout(source: Source) -> Layout:
    """Name, header lines and blocks of `source`, with control characters removed."""
    if isinstance(source, str):
        name, header, blocks = _layout_from_text(source)
    else:
        name, header, blocks = _layout_from_record(source)
    clean = strip_control_chars
    return (
        clean(name),
        [clean(ln) for ln in header],
        [Block(b.kind, clean(b.text), clean(b.detail)) for b in blocks],
    )


# ───────────────────────────────────────── PDF ──
def _pdf_styles() -> Dict[str, ParagraphStyle]:
    accent = HexColor(f"#{ACCENT}")
    return {
        "Name": ParagraphStyle("Name", fontName="Helvetica-Bold", fontSize=20,
                               leading=24, textColor=accent, spaceAfter=4),
        "Contact": ParagraphStyle("Contact", fontName="Helvetica", fontSize=10,
                                  leading=13, textColor=HexColor(f"#{MUTED}")),
        "SectionTitle": ParagraphStyle("SectionTitle", fontName="Helvetica-Bold", fontSize=14,
                                       leading=18, textColor=accent, spaceBefore=12, spaceAfter=6),
        "Body": ParagraphStyle("Body", fontName="Helvetica", fontSize=10, leading=13, spaceAfter=2),
        "Bullet": ParagraphStyle("Bullet", fontName="Helvetica", fontSize=10, leading=13,
                                 leftIndent=14, bulletIndent=4, spaceAfter=2),
    }


def render_pdf(source: Source, title: str | None = None) -> bytes:
    name, header, blocks = layout(source)
    styles = _pdf_styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=LETTER,
        leftMargin=0.75 * inch, rightMargin=0.75 * inch,
        topMargin=0.75 * inch, bottomMargin=0.75 * inch,
        title=title or name or "Résumé",
    )

    flowables = []
    if name:
        flowables.append(Paragraph(escape(name), styles["Name"]))
    for ln in header:
        flowables.append(Paragraph(escape(ln), styles["Contact"]))
    for b in blocks:
        if b.kind == "heading":
            flowables.append(Paragraph(escape(b.text), styles["SectionTitle"]))
        elif b.kind == "entry":
            flowables.append(Paragraph(f"<b>{escape(b.text)}</b>{escape(b.detail)}", styles["Body"]))
        elif b.kind == "bullet":
            flowables.append(Paragraph(escape(b.text), styles["Bullet"], bulletText="•"))
        else:
            flowables.append(Paragraph(escape(b.text), styles["Body"]))
    if not flowables:
        flowables.append(Spacer(1, 12))

    doc.build(flowables)
    log.debug("PDF created, %d blocks, %d bytes", len(blocks), buffer.tell())
    return buffer.getvalue()


# ───────────────────────────────────────── DOCX ──
def render_docx(source: Source) -> bytes:
    name, header, blocks = layout(source)
    document = docx.Document()
    for section in document.sections:
        section.top_margin = section.bottom_margin = Inches(0.5)
        section.left_margin = section.right_margin = Inches(0.5)
    normal = document.styles["Normal"]
    normal.font.name = "Calibri"
    normal.font.size = Pt(11)

    if name:
        p = document.add_paragraph()
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = p.add_run(name)
        run.bold = True
        run.font.size = Pt(16)
        run.font.color.rgb = RGBColor.from_string(ACCENT)
    for ln in header:
        p = document.add_paragraph()
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = p.add_run(ln)
        run.font.size = Pt(10)
        run.font.color.rgb = RGBColor.from_string(MUTED)

    for b in blocks:
        if b.kind == "heading":
            document.add_heading(b.text, level=2)
        elif b.kind == "entry":
            p = document.add_paragraph()
            p.add_run(b.text).bold = True
            if b.detail:
                run = p.add_run(b.detail)
                run.font.color.rgb = RGBColor.from_string(MUTED)
        elif b.kind == "bullet":
            document.add_paragraph(b.text, style="List Bullet")
        else:
            document.add_paragraph(b.text)

    buffer = io.BytesIO()
    document.save(buffer)
    log.debug("DOCX created, %d blocks, %d bytes", len(blocks), buffer.tell())
    return buffer.getvalue()


RENDERERS = {"pdf": render_pdf, "docx": render_docx}


def render_document(source: Source, fmt: str) -> bytes:
    try:
        renderer = RENDERERS[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unsupported export format: {fmt}") from None
    return renderer(source)


def export_filename(record: Dict | None, ext: str) -> str:
    name = ((record or {}).get("name") or "").strip()
    if not name:
        return f"improved-resume.{ext}"
    stem = re.sub(r"\s+", "_", name)
    return f"{stem}_Resume.{ext}"
