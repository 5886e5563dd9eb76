"""Prompt templates for tailoring a generated policy to a client."""
from __future__ import annotations

from typing import List, NamedTuple, Optional

POLICY_SYSTEM_PROMPT = (
    "You are a specialized compliance policy writer. "
    "You MUST write all content in {language_name}."
)

POLICY_USER_PROMPT = """
You are an expert CISO and Compliance Officer specializing in the {industry} industry.
Please review and refine the following policy text for "{policy_name}".
The goal is to make it specifically relevant to a {size} {industry} company.

IMPORTANT: Write the ENTIRE refined policy in {language_name}. All text must be in {language_name}.
{instruction_block}
Directives:
{directives}

Original Policy:
{content}
""".strip()

DEFAULT_INDUSTRY = "general"
DEFAULT_SIZE = "mid-sized"


class GenerationPrompt(NamedTuple):
    user_prompt: str
    system_prompt: str


def _directives(industry: str, language_name: str, has_instruction: bool) -> List[str]:
    directives = [
        "Maintain the professional tone and structure.",
        f"Inject specific security concerns or regulatory references relevant to {industry} "
        "(e.g., HIPAA for Health, PCI for Retail, SOC2/ISO for Tech).",
        "Do not remove core requirements, only enhance them.",
        f"Write EVERYTHING in {language_name} language.",
    ]
    if has_instruction:
        directives.append("PRIORITIZE the USER INSTRUCTION provided above.")
    directives.append("Return ONLY the updated policy text in Markdown format.")
    return directives


def build_generation_prompt(
    *,
    policy_name: str,
    language_name: str,
    content: str,
    industry: Optional[str] = None,
    size: Optional[str] = None,
    custom_instruction: Optional[str] = None,
) -> GenerationPrompt:
    """Return the user/system prompt pair for the tailoring model."""
    industry = industry or DEFAULT_INDUSTRY
    instruction = (custom_instruction or "").strip()
    instruction_block = f"\nUSER INSTRUCTION: {instruction}\n" if instruction else ""
    directives = _directives(industry, language_name, bool(instruction))

    user_prompt = POLICY_USER_PROMPT.format(
        industry=industry,
        policy_name=policy_name,
        size=size or DEFAULT_SIZE,
        language_name=language_name,
        instruction_block=instruction_block,
        directives="\n".join(f"{number}. {text}" for number, text in enumerate(directives, start=1)),
        content=content,
    )
    system_prompt = POLICY_SYSTEM_PROMPT.format(language_name=language_name)
    return GenerationPrompt(user_prompt=user_prompt, system_prompt=system_prompt)
