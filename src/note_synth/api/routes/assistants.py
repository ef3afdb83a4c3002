"""Use-case metadata and template assistant discovery."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from note_synth.models import AssistantSummary, UseCase
from note_synth.services.assistant_registry import AssistantRegistry
from note_synth.services.submission_service import SubmissionService

router = APIRouter(tags=["assistants"])


class UseCaseResponse(BaseModel):
    """A selectable use case."""

    id: str
    label: str
    heading: str
    is_template: bool


class TemplateListResponse(BaseModel):
    """Template assistants and the one selected by default."""

    templates: list[AssistantSummary] = Field(default_factory=list)
    default_assistant_id: Optional[str] = None


@router.get("/use-cases", response_model=list[UseCaseResponse])
async def list_use_cases() -> list[UseCaseResponse]:
    return [
        UseCaseResponse(id=u.value, label=u.label, heading=u.heading, is_template=u.is_template)
        for u in UseCase
    ]


@router.get("/assistants/templates", response_model=TemplateListResponse)
async def list_templates(req: Request) -> TemplateListResponse:
    """Assistants eligible as templates; empty when the listing is unavailable."""
    service: SubmissionService = req.app.state.submission_service
    templates = await service.list_templates()
    return TemplateListResponse(
        templates=templates,
        default_assistant_id=AssistantRegistry.default_template(templates),
    )
