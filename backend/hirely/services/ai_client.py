"""
Unified AI client: Groq chat completions.

Single chokepoint for every model call in the suite. Three entry points:

  text_completion   → plain text
  json_completion   → provider JSON mode, parsed with json.loads
  stream_completion → async generator of text chunks

Every call is a fresh round trip: no caching, no retries, no queueing.
Provider failures are translated into the CompletionError family below so
feature builders can catch one base class at their boundary.
"""

import json
import logging
from typing import Any, AsyncIterator, Optional

import groq
from groq import AsyncGroq

from hirely.config import settings

logger = logging.getLogger(__name__)

JSON_ONLY_INSTRUCTION = (
    "\n\nIMPORTANT: You must respond with valid JSON only. "
    "Do not include any markdown formatting or explanations."
)

_PLACEHOLDER_KEYS = {"gsk_your_api_key_here"}


# ─────────────────────────────────────────────────────────────────────────────
# Error taxonomy
# ─────────────────────────────────────────────────────────────────────────────

class CompletionError(Exception):
    """Any failure of a completion call. Wraps the provider's message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(CompletionError):
    """API key missing, placeholder, or rejected by the provider (401)."""


class AccessDeniedError(CompletionError):
    """Model not enabled for this account (403)."""


class EmptyResponseError(CompletionError):
    """Provider answered without any message content."""


class InvalidJSONError(CompletionError, ValueError):
    """JSON-mode response could not be parsed."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


# ─────────────────────────────────────────────────────────────────────────────
# Client construction + error translation
# ─────────────────────────────────────────────────────────────────────────────

def _is_placeholder(api_key: str) -> bool:
    return api_key in _PLACEHOLDER_KEYS or "your" in api_key.lower()


def _get_client() -> AsyncGroq:
    api_key = settings.GROQ_API_KEY.strip()
    if not api_key:
        raise AuthError("GROQ_API_KEY is not set. Add it to backend/.env.")
    if _is_placeholder(api_key):
        raise AuthError("GROQ_API_KEY still holds the placeholder value. Set your real key in backend/.env.")
    return AsyncGroq(api_key=api_key)


def _translate_error(exc: Exception) -> CompletionError:
    """Map a groq SDK exception onto the completion taxonomy."""
    if isinstance(exc, groq.APIStatusError):
        status = exc.status_code
        logger.warning("Groq API error %s: %s", status, exc.message)
        if status == 401:
            return AuthError("Groq API error (401): invalid API key. Check GROQ_API_KEY.", status)
        if status == 403:
            return AccessDeniedError(
                f"Groq API error (403): access to model '{settings.GROQ_MODEL}' is not enabled "
                "for this project. Enable it in the Groq console project limits.",
                status,
            )
        return CompletionError(f"Failed to get AI response: {exc.message}", status)
    if isinstance(exc, groq.APIError):
        logger.warning("Groq request failed: %s", exc.message)
        return CompletionError(f"Failed to get AI response: {exc.message}")
    return CompletionError(f"Failed to get AI response: {exc}")


def _build_messages(system_prompt: str, user_prompt: str) -> list[dict]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


async def _create(**request_args) -> Any:
    client = _get_client()
    try:
        return await client.chat.completions.create(model=settings.GROQ_MODEL, **request_args)
    except groq.APIError as e:
        raise _translate_error(e) from e


def _content_of(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return (getattr(message, "content", None) or "") if message else ""


# ─────────────────────────────────────────────────────────────────────────────
# Public completion API
# ─────────────────────────────────────────────────────────────────────────────

async def text_completion(
    system_prompt: str,
    user_prompt: str,
    *,
    temperature: float = 0.7,
    max_tokens: int = 2048,
    top_p: float = 0.95,
) -> str:
    """Send one system+user exchange and return the response text."""
    response = await _create(
        messages=_build_messages(system_prompt, user_prompt),
        temperature=temperature,
        max_tokens=max_tokens,
        top_p=top_p,
    )
    content = _content_of(response)
    if not content:
        logger.error("Groq returned no content for text completion")
        raise EmptyResponseError("No response content from Groq API")
    return content


async def json_completion(
    system_prompt: str,
    user_prompt: str,
    *,
    temperature: float = 0.3,
    max_tokens: int = 2048,
) -> Any:
    """Request provider JSON mode and parse the reply.

    Malformed JSON is never repaired or retried; callers catch
    InvalidJSONError and substitute their own default.
    """
    response = await _create(
        messages=_build_messages(system_prompt + JSON_ONLY_INSTRUCTION, user_prompt),
        temperature=temperature,
        max_tokens=max_tokens,
        response_format={"type": "json_object"},
    )
    content = _content_of(response)
    if not content:
        raise EmptyResponseError("No response content from Groq API")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("JSON-mode response failed to parse: %s", e)
        raise InvalidJSONError("AI response was not valid JSON", raw=content) from e


async def chat_messages(
    system_prompt: str,
    messages: list[dict],
    *,
    temperature: float = 0.7,
    max_tokens: int = 512,
) -> str:
    """Multi-turn variant: system prompt followed by a prepared message list."""
    response = await _create(
        messages=[{"role": "system", "content": system_prompt}, *messages],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    content = _content_of(response)
    if not content:
        raise EmptyResponseError("No response content from Groq API")
    return content


async def stream_completion(
    system_prompt: str,
    user_prompt: str,
    *,
    temperature: float = 0.7,
    max_tokens: int = 2048,
) -> AsyncIterator[str]:
    """Yield text chunks as they arrive.

    Finite and not restartable. The provider stream is closed on every exit
    path; callers that may stop early should wrap the generator in
    contextlib.aclosing so the close runs immediately.
    """
    stream = await _create(
        messages=_build_messages(system_prompt, user_prompt),
        temperature=temperature,
        max_tokens=max_tokens,
        stream=True,
    )
    try:
        async for chunk in stream:
            choices = getattr(chunk, "choices", None) or []
            if not choices:
                continue
            delta = getattr(choices[0], "delta", None)
            content = getattr(delta, "content", None) if delta else None
            if content:
                yield content
    except groq.APIError as e:
        raise _translate_error(e) from e
    finally:
        await stream.close()


# ─────────────────────────────────────────────────────────────────────────────
# Status helpers
# ─────────────────────────────────────────────────────────────────────────────

def ai_provider_name() -> str:
    key = settings.GROQ_API_KEY.strip()
    if not key or _is_placeholder(key):
        return "none"
    return f"Groq ({settings.GROQ_MODEL})"


async def ai_health_check() -> dict:
    """Live connectivity test, called by /api/health/ai."""
    provider = ai_provider_name()
    if provider == "none":
        return {
            "provider": "none",
            "status": "unconfigured",
            "message": "Set GROQ_API_KEY (and optionally GROQ_MODEL) in backend/.env.",
        }

    try:
        reply = await text_completion(
            "You are a test assistant.",
            "Reply with exactly: OK",
            temperature=0.0,
            max_tokens=10,
        )
        return {"provider": provider, "status": "ok", "test_reply": reply.strip()}
    except CompletionError as e:
        return {"provider": provider, "status": "error", "error": str(e)}
