"""
LLM-backed résumé review.

• request_feedback(): résumé + job description → list of feedback items
• improve_resume(): résumé + feedback items → rewritten résumé text

Feedback items come back loosely typed: plain strings, or objects with
one of several text-like keys. feedback_text() turns either into a
display string.
"""

from __future__ import annotations
import json, logging, re, textwrap
from typing import Any, Dict, List, Optional, Union

from resume_optimizer import config
from resume_optimizer.cleaner import format_resume_text
from resume_optimizer.errors import LLMResponseFormatError
from resume_optimizer.llm_client import LLMClient, get_llm_client

log = logging.getLogger(__name__)

FeedbackItem = Union[str, Dict[str, Any]]

FEEDBACK_SYSTEM_PROMPT = (
    "You are an expert résumé coach and recruiter. Analyze the following résumé "
    "against the job description and provide detailed, actionable feedback points "
    "to improve the résumé for this specific job. Be quantitative and specific: point "
    "out missing skills, keywords, experience, or achievements. If the résumé is "
    "already strong, suggest advanced improvements. Respond ONLY in JSON format: "
    '{"feedback": ["point 1", "point 2", "point 3", ...]}'
)

IMPROVE_SYSTEM_PROMPT = textwrap.dedent(
    """\
    You are an expert résumé writer. Given the original résumé and specific feedback points, create an improved version of the résumé that addresses ALL the feedback points while keeping the résumé realistic and professional.

    Instructions:
    - Apply each feedback point to improve the résumé
    - Keep all existing experience and education factual
    - Enhance descriptions, add relevant keywords, and improve formatting
    - Make the résumé more compelling for the target role
    - Return ONLY the improved résumé text, no additional commentary

    Respond with just the improved résumé content."""
)

DEFAULT_FEEDBACK = "The AI provided general feedback to improve your résumé."
UNSTRUCTURED_PREFIX = "The AI provided feedback in a non-structured format: "

# display priority for object-shaped feedback items
_TEXT_KEYS = ("point", "feedback", "text", "message")

_JSON_FINDER = re.compile(r"\{.*\}", re.S)


def feedback_text(item: Any) -> str:
    if item is None:
        return "Empty feedback point"
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in _TEXT_KEYS:
            value = item.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
        return json.dumps(item, ensure_ascii=False)
    return str(item)


def parse_feedback(content: str) -> List[FeedbackItem]:
    """
    Read feedback items out of the model's reply.

    The first {...} span is decoded and its "feedback" value used. Replies
    without JSON fall back to one item per non-blank line.
    """
    m = _JSON_FINDER.search(content)
    if not m:
        lines = [ln.strip() for ln in content.split("\n") if ln.strip()]
        log.info("No JSON in LLM reply, using %d lines as feedback", len(lines))
        return lines or [DEFAULT_FEEDBACK]

    try:
        parsed = json.loads(m.group())
    except json.JSONDecodeError:
        log.warning("LLM reply contained malformed JSON")
        return [UNSTRUCTURED_PREFIX + content]

    items = parsed.get("feedback", []) if isinstance(parsed, dict) else []
    if isinstance(items, str):
        return [items]
    if not isinstance(items, list):
        raise LLMResponseFormatError(
            f"Expected a list of feedback points, got {type(items).__name__}"
        )
    return items


def _require(**fields: Optional[str]) -> None:
    missing = [k for k, v in fields.items() if not (v or "").strip()]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")


def request_feedback(resume_text: str, job_description: str, endpoint: str | None = None,
                     model: str | None = None, api_key: str | None = None,
                     client: LLMClient | None = None) -> List[FeedbackItem]:
    _require(resume_text=resume_text, job_description=job_description)
    client = client or get_llm_client(endpoint, model, api_key)

    user = (
        f"RÉSUMÉ:\n{resume_text}\n\nJOB DESCRIPTION:\n{job_description}\n\n"
        "Provide detailed, actionable feedback to improve this résumé for the job."
    )
    content = client.chat(
        FEEDBACK_SYSTEM_PROMPT,
        user,
        temperature=config.LLM_MODEL_PARAMS["feedback_temperature"],
        max_tokens=config.LLM_MODEL_PARAMS["max_tokens"],
    )
    log.debug("Extracted content: %s", content)

    items = parse_feedback(content)
    if not items:
        raise LLMResponseFormatError("No feedback received from LLM API")
    return items


def improve_resume(resume_text: str, feedback: List[FeedbackItem], endpoint: str | None = None,
                   model: str | None = None, api_key: str | None = None,
                   client: LLMClient | None = None) -> str:
    _require(resume_text=resume_text)
    if not feedback:
        raise ValueError("Missing required fields: feedback")
    client = client or get_llm_client(endpoint, model, api_key)

    points = "\n- ".join(feedback_text(item) for item in feedback)
    user = (
        f"ORIGINAL RÉSUMÉ:\n{resume_text}\n\nFEEDBACK POINTS TO ADDRESS:\n- {points}\n\n"
        "Please create an improved version of this résumé that addresses all the "
        "feedback points above."
    )
    content = client.chat(
        IMPROVE_SYSTEM_PROMPT,
        user,
        temperature=config.LLM_MODEL_PARAMS["improve_temperature"],
        max_tokens=config.LLM_MODEL_PARAMS["max_tokens"],
    )
    return format_resume_text(content)
