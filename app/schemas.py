"""Pydantic schemas for FastAPI endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

PolicyStatus = Literal["draft", "review", "approved", "archived"]
PolicyModule = Literal["general", "privacy", "cyber"]


def _reject_explicit_nulls(model: BaseModel, fields: Tuple[str, ...]) -> None:
    """Partial updates may omit a NOT NULL column but never set it to null."""
    nulled = [name for name in fields if name in model.model_fields_set and getattr(model, name) is None]
    if nulled:
        raise ValueError(f"{', '.join(nulled)} cannot be null")


class GenerationOptions(BaseModel):
    """Knobs for a single generation call; accepts camelCase keys too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    tailor_to_industry: bool = False
    custom_instruction: Optional[str] = None
    model_override: Optional[str] = None
    provider_override: Optional[str] = None
    language: Optional[str] = Field(default=None, description="Language code overriding the client's setting.")

    @property
    def wants_tailoring(self) -> bool:
        return bool(self.tailor_to_industry or (self.custom_instruction or "").strip())


class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    size: Optional[str] = None
    ciso_name: Optional[str] = None
    dpo_name: Optional[str] = None
    headquarters: Optional[str] = None
    main_service_region: Optional[str] = None
    region: Optional[str] = None
    primary_contact_email: Optional[str] = None
    legal_entity_name: Optional[str] = None
    policy_language: Optional[str] = "en"


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    industry: Optional[str] = None
    size: Optional[str] = None
    ciso_name: Optional[str] = None
    dpo_name: Optional[str] = None
    headquarters: Optional[str] = None
    main_service_region: Optional[str] = None
    region: Optional[str] = None
    primary_contact_email: Optional[str] = None
    legal_entity_name: Optional[str] = None
    policy_language: Optional[str] = None

    @model_validator(mode="after")
    def _non_nullable(self) -> "ClientUpdate":
        _reject_explicit_nulls(self, ("name",))
        return self


class ClientOut(ClientCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class TemplateSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    text: Optional[str] = None
    optional: Optional[bool] = None
    default_enabled: Optional[bool] = Field(default=None, alias="defaultEnabled")


class TemplateCreate(BaseModel):
    template_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1)
    content: Optional[str] = None
    owner_id: Optional[int] = None
    is_public: bool = False
    sections: Optional[List[Union[str, TemplateSection]]] = None
    frameworks: List[str] = Field(default_factory=list)

    def sections_payload(self) -> Optional[List[Any]]:
        """Sections as stored JSON (camelCase ``defaultEnabled`` kept)."""
        if self.sections is None:
            return None
        return [
            section if isinstance(section, str) else section.model_dump(by_alias=True, exclude_none=True)
            for section in self.sections
        ]


class TemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: str
    name: str
    content: Optional[str] = None
    owner_id: Optional[int] = None
    is_public: bool = False
    sections: Optional[List[Any]] = None
    frameworks: Optional[List[str]] = None


class GenerateRequest(BaseModel):
    template_id: int
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class GenerateFromSectionsRequest(BaseModel):
    policy_name: str = Field(..., min_length=1)
    sections: List[str] = Field(..., min_length=1)
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class PromptRequest(BaseModel):
    template_id: Optional[int] = None
    sections: Optional[List[str]] = None
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class GeneratedContent(BaseModel):
    content: str


class PromptResponse(BaseModel):
    user_prompt: str
    system_prompt: str


class SuggestSectionsResponse(BaseModel):
    policy_name: str
    sections: List[str]


class ClientPolicyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    template_id: Optional[int] = None
    client_policy_id: Optional[str] = None
    content: Optional[str] = None
    status: PolicyStatus = "draft"
    owner: Optional[str] = None
    version: int = 1
    module: PolicyModule = "general"
    tailor: bool = False
    instruction: Optional[str] = None
    sections: Optional[List[str]] = None
    language: Optional[str] = None

    def generation_options(self) -> GenerationOptions:
        return GenerationOptions(
            tailor_to_industry=self.tailor,
            custom_instruction=self.instruction,
            language=self.language,
        )


class ClientPolicyUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    status: Optional[PolicyStatus] = None
    owner: Optional[str] = None
    version: Optional[int] = None

    @model_validator(mode="after")
    def _non_nullable(self) -> "ClientPolicyUpdate":
        _reject_explicit_nulls(self, ("name", "status", "version"))
        return self


class ClientPolicyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    template_id: Optional[int] = None
    client_policy_id: Optional[str] = None
    name: str
    content: Optional[str] = None
    status: str
    version: int
    owner: Optional[str] = None
    module: str
    is_ai_generated: bool
    created_at: datetime
    updated_at: datetime
