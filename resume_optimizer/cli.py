"""
Command-line interface for resume-optimizer.

    resume-optimizer parse resume.pdf
    resume-optimizer feedback resume.pdf --job jd.txt
    resume-optimizer improve resume.pdf --job jd.txt > improved.txt
    resume-optimizer export improved.txt --format docx -o Jane_Doe_Resume.docx
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from resume_optimizer import config
from resume_optimizer.errors import ResumeOptimizerError, UnsupportedFileType
from resume_optimizer.extractor import extract_text, guess_mime_type
from resume_optimizer.feedback import feedback_text, improve_resume, request_feedback
from resume_optimizer.logging_utils import LOG, setup_logging
from resume_optimizer.parser_rule import parse_resume_rule
from resume_optimizer.render import export_filename, render_document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-optimizer",
        description="Review a résumé against a job description and export an improved version.",
    )
    parser.add_argument("--endpoint", default=None, help="LLM chat endpoint URL")
    parser.add_argument("--model", default=None, help="LLM model name")
    parser.add_argument("--api-key", default=None, help="API key (optional for public endpoints)")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-file", default=None)

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="print the structured résumé as JSON")
    p.add_argument("file", type=Path)
    p.add_argument("--mime", default=None, help="override the detected MIME type")

    for name, help_text in (("feedback", "list LLM feedback points"),
                            ("improve", "print an improved résumé")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", type=Path)
        p.add_argument("--job", type=Path, required=True, help="job description text file")
        p.add_argument("--mime", default=None)

    p = sub.add_parser("export", help="render a résumé to PDF or DOCX")
    p.add_argument("file", type=Path)
    p.add_argument("--format", choices=("pdf", "docx"), default="pdf")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--mime", default=None)
    p.add_argument("--raw", action="store_true",
                   help="lay out the text as-is instead of the parsed structure")
    return parser


def read_resume(path: Path, mime: str | None = None) -> str:
    mime = mime or guess_mime_type(path)
    if not mime:
        raise UnsupportedFileType(path.suffix or "unknown")
    return extract_text(path.read_bytes(), mime)


def run(args: argparse.Namespace) -> int:
    text = read_resume(args.file, args.mime)

    if args.command == "parse":
        print(json.dumps(parse_resume_rule(text), indent=2, ensure_ascii=False))
        return 0

    if args.command == "export":
        record = parse_resume_rule(text)
        data = render_document(text if args.raw else record, args.format)
        out = args.output or Path(export_filename(record, args.format))
        out.write_bytes(data)
        LOG.info("wrote %s (%d bytes)", out, len(data))
        print(out)
        return 0

    job = args.job.read_text(encoding="utf-8")
    items = request_feedback(text, job, args.endpoint, args.model, args.api_key)
    if args.command == "feedback":
        for i, item in enumerate(items, 1):
            print(f"{i}. {feedback_text(item)}")
        return 0

    print(improve_resume(text, items, args.endpoint, args.model, args.api_key))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, log_file=args.log_file)
    try:
        return run(args)
    except (ResumeOptimizerError, ValueError, OSError) as e:
        LOG.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
