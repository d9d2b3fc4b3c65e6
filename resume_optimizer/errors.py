"""
Exception hierarchy.

The rule-based parser never raises; everything here belongs to the
collaborators around it (file extraction and remote LLM calls).
"""

from __future__ import annotations


class ResumeOptimizerError(Exception):
    """Base class for all errors raised by this package."""


class ExtractionError(ResumeOptimizerError):
    """A file could not be turned into plain text."""


class UnsupportedFileType(ExtractionError):
    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {mime_type}. Please use PDF, DOCX, or TXT files."
        )


class LLMError(ResumeOptimizerError):
    """A remote LLM call failed."""


class LLMTimeoutError(LLMError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request timeout - the API endpoint took too long to respond ({timeout:g}s)"
        )


class LLMNetworkError(LLMError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Network error: {reason}")


class LLMStatusError(LLMError):
    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"API Error ({status}): {body}")


class LLMResponseFormatError(LLMError):
    """The LLM answered with a payload of an unrecognised shape."""
