"""Policy generation and client policy endpoints."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..db import get_session
from ..models import Client, ClientPolicy
from ..services.policy_generator import NotFoundError, PolicyGenerator
from .clients import client_not_found

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["policies"])


def get_policy_generator(session: AsyncSession = Depends(get_session)) -> PolicyGenerator:
    return PolicyGenerator(session)


def _not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"message": str(exc), "code": f"{exc.kind.upper()}_NOT_FOUND"},
    )


async def _get_client_policy(session: AsyncSession, client_id: int, policy_id: int) -> ClientPolicy:
    policy = await session.get(ClientPolicy, policy_id)
    if not policy or policy.client_id != client_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": f"Policy with ID {policy_id} not found", "code": "POLICY_NOT_FOUND"},
        )
    return policy


@router.post("/clients/{client_id}/policies/generate", response_model=schemas.GeneratedContent)
async def generate_policy(
    client_id: int,
    payload: schemas.GenerateRequest,
    generator: PolicyGenerator = Depends(get_policy_generator),
):
    try:
        content = await generator.generate(client_id, payload.template_id, payload.options)
    except NotFoundError as exc:
        raise _not_found(exc)
    return schemas.GeneratedContent(content=content)


@router.post("/clients/{client_id}/policies/generate-from-sections", response_model=schemas.GeneratedContent)
async def generate_policy_from_sections(
    client_id: int,
    payload: schemas.GenerateFromSectionsRequest,
    generator: PolicyGenerator = Depends(get_policy_generator),
):
    try:
        content = await generator.generate_from_sections(
            client_id, payload.policy_name, payload.sections, payload.options
        )
    except NotFoundError as exc:
        raise _not_found(exc)
    return schemas.GeneratedContent(content=content)


@router.post("/clients/{client_id}/policies/prompt", response_model=schemas.PromptResponse)
async def generation_prompt(
    client_id: int,
    payload: schemas.PromptRequest,
    generator: PolicyGenerator = Depends(get_policy_generator),
):
    try:
        prompt = await generator.get_generation_prompt(
            client_id, payload.template_id, payload.sections, payload.options
        )
    except NotFoundError as exc:
        raise _not_found(exc)
    return schemas.PromptResponse(user_prompt=prompt.user_prompt, system_prompt=prompt.system_prompt)


@router.get("/policies/suggest-sections", response_model=schemas.SuggestSectionsResponse)
async def suggest_sections(
    policy_name: str,
    industry: Optional[str] = None,
):
    sections = await PolicyGenerator.suggest_sections(policy_name, industry)
    return schemas.SuggestSectionsResponse(policy_name=policy_name, sections=sections)


@router.post(
    "/clients/{client_id}/policies",
    response_model=schemas.ClientPolicyOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_client_policy(
    client_id: int,
    body: schemas.ClientPolicyCreate,
    session: AsyncSession = Depends(get_session),
    generator: PolicyGenerator = Depends(get_policy_generator),
):
    if not await session.get(Client, client_id):
        raise client_not_found(client_id)

    content = body.content
    is_ai_generated = False
    if not content and (body.template_id is not None or body.sections):
        LOGGER.info(
            "Generating content for new policy %r (client=%s, template=%s)",
            body.name,
            client_id,
            body.template_id if body.template_id is not None else "from sections",
        )
        try:
            if body.template_id is not None:
                content = await generator.generate(client_id, body.template_id, body.generation_options())
            else:
                content = await generator.generate_from_sections(
                    client_id, body.name, body.sections, body.generation_options()
                )
            is_ai_generated = True
            LOGGER.info("Generation complete (%d chars)", len(content))
        except NotFoundError as exc:
            LOGGER.warning("Policy generation failed, saving without content: %s", exc)

    policy = ClientPolicy(
        client_id=client_id,
        template_id=body.template_id,
        client_policy_id=body.client_policy_id,
        name=body.name,
        content=content,
        status=body.status,
        version=body.version,
        owner=body.owner,
        module=body.module,
        is_ai_generated=is_ai_generated,
    )
    session.add(policy)
    await session.commit()
    await session.refresh(policy)
    LOGGER.info("Saved policy %s for client %s", policy.id, client_id)
    return policy


@router.get("/clients/{client_id}/policies", response_model=List[schemas.ClientPolicyOut])
async def list_client_policies(
    client_id: int,
    module: schemas.PolicyModule = "general",
    session: AsyncSession = Depends(get_session),
):
    result = await session.execute(
        select(ClientPolicy)
        .where(ClientPolicy.client_id == client_id, ClientPolicy.module == module)
        .order_by(ClientPolicy.updated_at.desc(), ClientPolicy.id.desc())
    )
    return result.scalars().all()


@router.get("/clients/{client_id}/policies/{policy_id}", response_model=schemas.ClientPolicyOut)
async def get_client_policy(
    client_id: int,
    policy_id: int,
    session: AsyncSession = Depends(get_session),
):
    return await _get_client_policy(session, client_id, policy_id)


@router.patch("/clients/{client_id}/policies/{policy_id}", response_model=schemas.ClientPolicyOut)
async def update_client_policy(
    client_id: int,
    policy_id: int,
    body: schemas.ClientPolicyUpdate,
    session: AsyncSession = Depends(get_session),
):
    policy = await _get_client_policy(session, client_id, policy_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(policy, key, value)
    await session.commit()
    await session.refresh(policy)
    return policy


@router.delete("/clients/{client_id}/policies/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client_policy(
    client_id: int,
    policy_id: int,
    session: AsyncSession = Depends(get_session),
):
    policy = await _get_client_policy(session, client_id, policy_id)
    await session.delete(policy)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
