"""SQLAlchemy ORM models for clients, policy templates and client policies."""
from __future__ import annotations

import datetime
from datetime import timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime.datetime:
    """Get current UTC timezone-aware datetime."""
    return datetime.datetime.now(timezone.utc)


class Client(Base):
    """Client (tenant) profile - source of policy substitution values."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    industry = Column(String(255))
    size = Column(String(50))
    ciso_name = Column(String(255))
    dpo_name = Column(String(255))
    headquarters = Column(String(255))
    main_service_region = Column(String(255))
    region = Column(String(100))
    primary_contact_email = Column(String(255))
    legal_entity_name = Column(String(500))  # For policy headers
    policy_language = Column(String(50), default="en")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class PolicyTemplate(Base):
    """Reusable policy skeleton - monolithic content or modular sections."""

    __tablename__ = "policy_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    content = Column(Text)
    owner_id = Column(Integer, index=True)  # NULL = global template
    is_public = Column(Boolean, default=False, nullable=False)
    sections = Column(JSON)
    frameworks = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class ClientPolicy(Base):
    """A client's own policy document, usually generated from a template."""

    __tablename__ = "client_policies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, nullable=False, index=True)
    template_id = Column(Integer, index=True)
    client_policy_id = Column(String(50))
    name = Column(String(255), nullable=False)
    content = Column(Text)
    status = Column(String(20), default="draft", nullable=False)
    version = Column(Integer, default=1, nullable=False)
    owner = Column(String(255))
    module = Column(String(50), default="general", nullable=False, index=True)
    is_ai_generated = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
