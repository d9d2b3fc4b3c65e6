"""
Configuration settings for resume-optimizer.

Every value can be overridden from the environment or a `.env` file.
Nothing here is mandatory: an API key is only needed for private endpoints.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os

# LLM Provider Configuration
# "endpoint" posts raw JSON to any chat endpoint (OpenAI, Anthropic, Gemini, self-hosted)
# "openai" goes through the official SDK
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "endpoint")

DEFAULT_MODEL = {
    "endpoint": "gpt-4o-mini",
    "openai": "gpt-4o-mini",
}

LLM_ENDPOINT = os.getenv("LLM_ENDPOINT", "https://api.openai.com/v1/chat/completions")
LLM_MODEL = os.getenv("LLM_MODEL", "")
LLM_API_KEY = os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY")

# Remote calls are abandoned after this many seconds
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

LLM_MODEL_PARAMS = {
    "max_tokens": int(os.getenv("LLM_MAX_TOKENS", "4000")),
    "feedback_temperature": float(os.getenv("FEEDBACK_TEMPERATURE", "0.1")),
    "improve_temperature": float(os.getenv("IMPROVE_TEMPERATURE", "0.3")),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


def get_model_for_provider(provider: str = None) -> str:
    """Get the default model for the specified provider."""
    provider = provider or LLM_PROVIDER
    return LLM_MODEL or DEFAULT_MODEL.get(provider, "gpt-4o-mini")
