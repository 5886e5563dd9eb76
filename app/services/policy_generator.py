"""Policy generation: template + client profile -> client-specific policy text."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Client, PolicyTemplate
from ..policy.languages import language_name, resolve_language
from ..policy.sections import build_skeleton, resolve_template_content, section_outline
from ..policy.substitution import substitute
from ..prompts.policy_tailoring import GenerationPrompt, build_generation_prompt
from ..schemas import GenerationOptions
from .enhancement import EnhancementContext, TextEnhancer, get_enhancer

LOGGER = logging.getLogger(__name__)

DEFAULT_POLICY_NAME = "Policy"
DEFAULT_SECTIONS = (
    "Introduction",
    "Scope",
    "Policy Statement",
    "Roles and Responsibilities",
    "Compliance",
)


class NotFoundError(LookupError):
    """Raised when a client or template id does not resolve."""

    def __init__(self, kind: str, identifier: Any) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} with ID {identifier} not found")


class PolicyGenerator:
    """
    Builds policy documents for a client.

    Record lookups go through the given session; everything after that
    (composition, substitution, prompt building) is pure string work.
    Tailoring is delegated to a ``TextEnhancer``.
    """

    def __init__(self, session: AsyncSession, enhancer: Optional[TextEnhancer] = None) -> None:
        self.session = session
        self.enhancer = enhancer or get_enhancer()

    async def _get_client(self, client_id: int) -> Client:
        client = await self.session.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    async def _get_template(self, template_id: int) -> PolicyTemplate:
        template = await self.session.get(PolicyTemplate, template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    @staticmethod
    def _language(client: Client, options: GenerationOptions) -> Tuple[str, str]:
        code = resolve_language(options.language, client.policy_language)
        return code, language_name(code)

    async def _tailor(
        self,
        content: str,
        client: Client,
        policy_name: str,
        options: GenerationOptions,
    ) -> str:
        if not options.wants_tailoring:
            return content
        language, display_name = self._language(client, options)
        prompt = build_generation_prompt(
            policy_name=policy_name,
            language_name=display_name,
            content=content,
            industry=client.industry,
            size=client.size,
            custom_instruction=options.custom_instruction,
        )
        context = EnhancementContext(
            client=client,
            policy_name=policy_name,
            language=language,
            language_name=display_name,
            options=options,
            prompt=prompt,
        )
        return await asyncio.to_thread(self.enhancer.enhance, content, context)

    async def generate(
        self,
        client_id: int,
        template_id: int,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        """Substitute client values into a template and optionally tailor it."""
        options = options or GenerationOptions()
        client = await self._get_client(client_id)
        template = await self._get_template(template_id)
        language, _ = self._language(client, options)
        LOGGER.info(
            "Generating policy from template %s for client %s (language=%s)",
            template.template_id,
            client_id,
            language,
        )

        content = substitute(resolve_template_content(template), client)
        return await self._tailor(content, client, template.name, options)

    async def generate_from_sections(
        self,
        client_id: int,
        policy_name: str,
        section_names: Sequence[str],
        options: Optional[GenerationOptions] = None,
    ) -> str:
        """Skeleton document for a blank policy; placeholders are left raw."""
        options = options or GenerationOptions()
        client = await self._get_client(client_id)
        LOGGER.info(
            "Building %d-section skeleton %r for client %s",
            len(section_names),
            policy_name,
            client_id,
        )
        content = build_skeleton(policy_name, section_names)
        return await self._tailor(content, client, policy_name, options)

    @staticmethod
    async def suggest_sections(policy_name: str, industry: Optional[str] = None) -> List[str]:
        return list(DEFAULT_SECTIONS)

    async def get_generation_prompt(
        self,
        client_id: int,
        template_id: Optional[int] = None,
        section_names: Optional[Sequence[str]] = None,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationPrompt:
        """Prompt pair for an external model (e.g. a streaming endpoint)."""
        options = options or GenerationOptions()
        client = await self._get_client(client_id)
        _, display_name = self._language(client, options)

        policy_name = DEFAULT_POLICY_NAME
        base_content = ""
        if template_id is not None:
            template = await self._get_template(template_id)
            policy_name = template.name
            base_content = resolve_template_content(template)
        elif section_names:
            base_content = section_outline(section_names)

        return build_generation_prompt(
            policy_name=policy_name,
            language_name=display_name,
            content=substitute(base_content, client),
            industry=client.industry,
            size=client.size,
            custom_instruction=options.custom_instruction,
        )


__all__ = ["DEFAULT_SECTIONS", "NotFoundError", "PolicyGenerator"]
