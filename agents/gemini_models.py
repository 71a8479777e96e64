"""Construction helpers for Gemini models shared by the AI clients."""

from __future__ import annotations

from typing import Any, Dict, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

# Errors raised by the SDK for transport failures, API errors, missing credentials and blocked output.
REMOTE_ERRORS = (
    google_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
    BlockedPromptException,
    StopCandidateException,
)


def configure_api_key(api_key: Optional[str]) -> None:
    if api_key:
        genai.configure(api_key=api_key)


def build_generative_model(model_name: str, system_instruction: Optional[str] = None) -> genai.GenerativeModel:
    return genai.GenerativeModel(model_name=model_name, system_instruction=system_instruction)


def json_generation_config(response_schema: Dict[str, Any]) -> genai.GenerationConfig:
    return genai.GenerationConfig(
        response_mime_type="application/json",
        response_schema=response_schema,
    )


def request_options(timeout_seconds: Optional[float]) -> Dict[str, Any]:
    return {"timeout": timeout_seconds} if timeout_seconds else {}


def inline_image_part(data: bytes, mime_type: str) -> Dict[str, Any]:
    return {"mime_type": mime_type, "data": data}


def block_reason(response: Any) -> Optional[str]:
    """Return the provider's block reason name, if the prompt was blocked."""

    feedback = getattr(response, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None) if feedback is not None else None
    if not reason:
        return None
    return getattr(reason, "name", None) or str(reason)


__all__ = [
    "REMOTE_ERRORS",
    "block_reason",
    "build_generative_model",
    "configure_api_key",
    "inline_image_part",
    "json_generation_config",
    "request_options",
]
