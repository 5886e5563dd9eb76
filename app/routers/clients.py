"""Client profile endpoints (the source of policy substitution values)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..db import get_session
from ..models import Client

router = APIRouter(prefix="/clients", tags=["clients"])


def client_not_found(client_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"message": f"Client with ID {client_id} not found", "code": "CLIENT_NOT_FOUND"},
    )


@router.post("", response_model=schemas.ClientOut, status_code=status.HTTP_201_CREATED)
async def create_client(
    body: schemas.ClientCreate,
    session: AsyncSession = Depends(get_session),
):
    client = Client(**body.model_dump())
    if not client.policy_language:
        client.policy_language = "en"
    session.add(client)
    await session.commit()
    await session.refresh(client)
    return client


@router.get("/{client_id}", response_model=schemas.ClientOut)
async def get_client(
    client_id: int,
    session: AsyncSession = Depends(get_session),
):
    client = await session.get(Client, client_id)
    if not client:
        raise client_not_found(client_id)
    return client


@router.patch("/{client_id}", response_model=schemas.ClientOut)
async def update_client(
    client_id: int,
    body: schemas.ClientUpdate,
    session: AsyncSession = Depends(get_session),
):
    client = await session.get(Client, client_id)
    if not client:
        raise client_not_found(client_id)

    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(client, key, value)
    await session.commit()
    await session.refresh(client)
    return client
