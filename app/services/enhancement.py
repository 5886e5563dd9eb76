"""Pluggable text enhancement (AI tailoring) for generated policies."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .. import gemini_client
from ..config import get_config
from ..prompts.policy_tailoring import GenerationPrompt
from ..schemas import GenerationOptions

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnhancementContext:
    client: Any
    policy_name: str
    language: str
    language_name: str
    options: GenerationOptions
    prompt: GenerationPrompt


class TextEnhancer(Protocol):
    def enhance(self, content: str, context: EnhancementContext) -> str:
        ...


class NoOpEnhancer:
    """Returns content untouched; the default when AI tailoring is off."""

    def enhance(self, content: str, context: EnhancementContext) -> str:
        LOGGER.debug("AI tailoring disabled; returning content for %r unchanged", context.policy_name)
        return content


class GeminiEnhancer:
    """Tailors content with Gemini, falling back to the input on failure."""

    def __init__(self, model: Optional[str] = None, temperature: Optional[float] = None) -> None:
        self.model = model
        self.temperature = temperature

    def enhance(self, content: str, context: EnhancementContext) -> str:
        model = context.options.model_override or self.model
        try:
            tailored = gemini_client.generate_policy_text(
                context.prompt.system_prompt,
                context.prompt.user_prompt,
                model=model,
                temperature=self.temperature,
            )
        except gemini_client.GeminiPolicyError as exc:
            LOGGER.error("Policy tailoring failed for %r: %s", context.policy_name, exc)
            return content

        if not tailored.strip():
            LOGGER.warning("Gemini returned empty text for %r; keeping untailored content", context.policy_name)
            return content
        return tailored


def get_enhancer() -> TextEnhancer:
    """Enhancer selected by AI_TAILORING_ENABLED."""
    config = get_config()
    if config.AI_TAILORING_ENABLED:
        return GeminiEnhancer(model=config.POLICY_MODEL, temperature=config.POLICY_TEMPERATURE)
    return NoOpEnhancer()


__all__ = [
    "EnhancementContext",
    "GeminiEnhancer",
    "NoOpEnhancer",
    "TextEnhancer",
    "get_enhancer",
]
