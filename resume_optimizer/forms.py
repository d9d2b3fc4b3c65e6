"""
Form checks for the Streamlit front end.

Kept free of Streamlit calls so they can be exercised without a running app.
Errors are keyed by the form field they belong to.
"""

from __future__ import annotations

from typing import Dict
from urllib.parse import urlparse

from resume_optimizer.errors import ExtractionError
from resume_optimizer.extractor import guess_mime_type, validate_file_type

# where a failed analyze/improve request is reported
REQUEST_FIELD = "request"


def validate_form(upload, job_description: str, endpoint: str, model: str) -> Dict[str, str]:
    """`upload` is anything with `.type` and `.name` (Streamlit's UploadedFile)."""
    errors = {}
    if upload is None:
        errors["resume_file"] = "Please upload your résumé"
    elif not validate_file_type(upload.type or guess_mime_type(upload.name)):
        errors["resume_file"] = "Please upload a PDF, DOCX, or text file"
    if not job_description.strip():
        errors["job_description"] = "Please enter the job description"
    if not endpoint.strip():
        errors["endpoint"] = "Please enter the API endpoint"
    else:
        url = urlparse(endpoint.strip())
        if url.scheme not in ("http", "https") or not url.netloc:
            errors["endpoint"] = "Please enter a valid URL"
    if not model.strip():
        errors["model"] = "Please enter the model name"
    return errors


def error_field(exc: Exception) -> str:
    if isinstance(exc, ExtractionError):
        return "resume_file"
    return REQUEST_FIELD


def request_errors(exc: Exception) -> Dict[str, str]:
    return {error_field(exc): str(exc)}
