"""Policy templating core (substitution, section composition, languages)."""

from .languages import LANGUAGE_NAMES, language_name, resolve_language
from .sections import build_skeleton, compose_sections, resolve_template_content
from .substitution import CATALOG, build_substitution_map, substitute

__all__ = [
    "CATALOG",
    "LANGUAGE_NAMES",
    "build_skeleton",
    "build_substitution_map",
    "compose_sections",
    "language_name",
    "resolve_language",
    "resolve_template_content",
    "substitute",
]
