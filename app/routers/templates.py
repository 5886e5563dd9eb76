"""Policy template store endpoints."""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..db import get_session
from ..models import PolicyTemplate

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post("", response_model=schemas.TemplateOut, status_code=status.HTTP_201_CREATED)
async def create_template(
    body: schemas.TemplateCreate,
    session: AsyncSession = Depends(get_session),
):
    existing = await session.execute(
        select(PolicyTemplate.id).where(PolicyTemplate.template_id == body.template_id)
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": f"Template '{body.template_id}' already exists", "code": "TEMPLATE_EXISTS"},
        )

    template = PolicyTemplate(
        template_id=body.template_id,
        name=body.name,
        content=body.content,
        owner_id=body.owner_id,
        is_public=body.is_public,
        sections=body.sections_payload(),
        frameworks=body.frameworks,
    )
    session.add(template)
    await session.commit()
    await session.refresh(template)
    return template


@router.get("", response_model=List[schemas.TemplateOut])
async def list_templates(
    owner_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
):
    """Global templates plus, when ``owner_id`` is given, that client's own."""
    visible = PolicyTemplate.owner_id.is_(None)
    if owner_id is not None:
        visible = or_(visible, PolicyTemplate.owner_id == owner_id)
    result = await session.execute(select(PolicyTemplate).where(visible).order_by(PolicyTemplate.name))
    return result.scalars().all()


@router.get("/{template_pk}", response_model=schemas.TemplateOut)
async def get_template(
    template_pk: int,
    session: AsyncSession = Depends(get_session),
):
    template = await session.get(PolicyTemplate, template_pk)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": f"Template with ID {template_pk} not found", "code": "TEMPLATE_NOT_FOUND"},
        )
    return template
