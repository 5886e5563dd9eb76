"""Google Gemini helpers for policy tailoring."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from google import genai
from google.genai import types

from .config import get_config


class GeminiPolicyError(RuntimeError):
    """Raised when a Gemini policy generation call fails."""


@lru_cache(maxsize=1)
def _client() -> genai.Client:
    """Get cached Gemini client instance."""
    config = get_config()
    api_key = config.get_gemini_api_key()
    if not api_key:
        raise GeminiPolicyError("GEMINI_API_KEY environment variable is required.")
    return genai.Client(api_key=api_key)


def _response_text(response: types.GenerateContentResponse) -> str:
    text = getattr(response, "text", None)
    if text:
        return text
    candidates = getattr(response, "candidates", None) or []
    if not candidates or not candidates[0].content:
        return ""
    parts = getattr(candidates[0].content, "parts", []) or []
    return "\n".join(part.text for part in parts if getattr(part, "text", None))


def generate_policy_text(
    system_prompt: str,
    user_prompt: str,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
) -> str:
    """
    Ask Gemini to rewrite a policy according to the prompt pair.

    Args:
        system_prompt: Persona + language mandate.
        user_prompt: Directives and the substituted policy text.
        model: Optional model override (default: POLICY_MODEL from config).
        temperature: Optional temperature override (default: POLICY_TEMPERATURE).

    Returns:
        Markdown policy text (empty string if the model returned nothing).

    Raises:
        GeminiPolicyError: If the API call fails.
    """
    config = get_config()
    generation_config = types.GenerateContentConfig(
        system_instruction=system_prompt,
        temperature=float(config.POLICY_TEMPERATURE if temperature is None else temperature),
        top_p=0.9,
        max_output_tokens=8192,
        response_mime_type="text/plain",
    )
    try:
        response = _client().models.generate_content(
            model=model or config.POLICY_MODEL,
            contents=[types.Content(role="user", parts=[types.Part(text=user_prompt)])],
            config=generation_config,
        )
    except GeminiPolicyError:
        raise
    except Exception as exc:
        raise GeminiPolicyError(f"Gemini policy generation failed: {exc}") from exc

    return _response_text(response)
