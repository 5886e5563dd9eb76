"""Compose modular template sections into a single Markdown document."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

UNTITLED_SECTION = "Untitled Section"
SKELETON_PLACEHOLDER = "[Content to be generated]"
SECTION_SEPARATOR = "\n\n"


def _is_enabled(section: Any) -> bool:
    if section is None:
        return False
    if isinstance(section, Mapping):
        # Only an explicit False disables a section.
        return section.get("defaultEnabled") is not False
    return True


def _render_section(section: Any) -> str:
    if isinstance(section, str):
        return section
    if not isinstance(section, Mapping):
        # Malformed entries still render as an empty untitled section.
        section = {}
    title = section.get("title") or UNTITLED_SECTION
    body = section.get("content") or section.get("text") or ""
    return f"## {title}\n\n{body}"


def compose_sections(sections: Optional[Iterable[Any]]) -> str:
    """Render enabled sections as ``## <title>`` blocks in input order."""
    if not sections or isinstance(sections, (str, bytes, Mapping)):
        return ""
    rendered = [
        _render_section(section)
        for section in sections
        if _is_enabled(section)
    ]
    return SECTION_SEPARATOR.join(rendered)


def build_skeleton(
    policy_name: str,
    section_names: Sequence[str],
    placeholder: str = SKELETON_PLACEHOLDER,
) -> str:
    """Heading-only document for a blank policy built from section names."""
    body = SECTION_SEPARATOR.join(f"## {name}\n\n{placeholder}" for name in section_names)
    return f"# {policy_name}{SECTION_SEPARATOR}{body}"


def section_outline(section_names: Sequence[str]) -> str:
    """Outline used as prompt input when no template exists."""
    return SECTION_SEPARATOR.join(f"## {name}\n\n[Content for {name}]" for name in section_names)


def resolve_template_content(template: Any) -> str:
    """Monolithic content wins; otherwise compose the template's sections."""
    content = getattr(template, "content", None)
    if content and content.strip():
        return content
    return compose_sections(getattr(template, "sections", None))
