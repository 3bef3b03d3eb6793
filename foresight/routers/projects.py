"""Project and profile persistence endpoints."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_user_id, require_user_id
from ..db import get_session
from ..models import Profile, Project, ProjectResponse
from ..schemas import (
    ProfileCreate,
    ProfileEnvelope,
    ProfileOut,
    ProjectCreate,
    ProjectEnvelope,
    ProjectOut,
    ResponseAppend,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["projects"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/projects", status_code=status.HTTP_201_CREATED, response_model=ProjectEnvelope)
async def create_project(
    payload: Optional[ProjectCreate] = None,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    payload = payload or ProjectCreate()
    if not payload.company_name or not payload.research_goal:
        return _error(status.HTTP_400_BAD_REQUEST, "companyName and researchGoal are required")

    project = Project(
        user_id=user_id,
        company_name=payload.company_name,
        research_goal=payload.research_goal,
        status=payload.status or "Draft",
        questions=payload.questions or [],
        company_analysis=payload.company_analysis,
        report=payload.report,
        response_rows=[],
    )
    session.add(project)
    await session.commit()
    LOGGER.info("Created project %s for user %s", project.id, user_id)
    return ProjectEnvelope(project=ProjectOut.model_validate(project))


@router.post("/profiles", response_model=ProfileEnvelope)
async def upsert_profile(
    payload: Optional[ProfileCreate] = None,
    user_id: Optional[str] = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
):
    payload = payload or ProfileCreate()
    if not user_id or not payload.email:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing user id or email")

    profile = await session.get(Profile, user_id)
    if profile:
        profile.email = payload.email
    else:
        profile = Profile(id=user_id, email=payload.email)
        session.add(profile)
    await session.commit()
    return ProfileEnvelope(profile=ProfileOut.model_validate(profile))


@router.post("/projects/{project_id}/response")
async def append_response(
    project_id: str,
    payload: Optional[ResponseAppend] = None,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    payload = payload or ResponseAppend()
    if payload.response is None:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing response")

    exists = await session.scalar(select(Project.id).where(Project.id == project_id))
    if exists is None:
        return _error(status.HTTP_404_NOT_FOUND, "Project not found")

    # Insert-only, so concurrent submissions never overwrite each other.
    session.add(ProjectResponse(project_id=project_id, payload=payload.response))
    await session.commit()
    LOGGER.info("Appended response to project %s (user %s)", project_id, user_id)
    return {"success": True}
