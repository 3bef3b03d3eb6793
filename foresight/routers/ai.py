"""Structured-generation endpoints used by the questionnaire builder."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from ..auth import require_user_id
from ..schemas import (
    AnalyzeCompanyRequest,
    AnalyzeCompanyResponse,
    FollowUp,
    GenerateFollowUpRequest,
    GenerateOptionsRequest,
    GenerateQuestionsRequest,
    GenerateReportRequest,
    OptionsResponse,
    QuestionsResponse,
    ReportResponse,
)
from ..services import operations
from ..services.gemini_client import GenerationClient

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def get_generation_client(request: Request) -> GenerationClient:
    """The process-wide client built at startup."""
    return request.app.state.generation_client


@router.post("/analyze-company", response_model=AnalyzeCompanyResponse)
async def analyze_company(
    payload: Optional[AnalyzeCompanyRequest] = None,
    user_id: str = Depends(require_user_id),
    client: GenerationClient = Depends(get_generation_client),
):
    payload = payload or AnalyzeCompanyRequest()
    LOGGER.info("Analyzing company for user %s", user_id)
    analysis = await operations.analyze_company(client, payload.company_name)
    return AnalyzeCompanyResponse(analysis=analysis)


@router.post("/generate-questions", response_model=QuestionsResponse)
async def generate_questions(
    payload: Optional[GenerateQuestionsRequest] = None,
    user_id: str = Depends(require_user_id),
    client: GenerationClient = Depends(get_generation_client),
):
    payload = payload or GenerateQuestionsRequest()
    LOGGER.info("Generating questionnaire for user %s", user_id)
    questions = await operations.generate_initial_questions(
        client,
        payload.company_name,
        payload.research_goal,
        payload.company_analysis,
    )
    return QuestionsResponse(questions=questions)


@router.post("/generate-mc-options", response_model=OptionsResponse)
async def generate_mc_options(
    payload: Optional[GenerateOptionsRequest] = None,
    client: GenerationClient = Depends(get_generation_client),
):
    payload = payload or GenerateOptionsRequest()
    options = await operations.generate_multiple_choice_options(client, payload.question_text, payload.research_goal)
    return OptionsResponse(options=options)


@router.post("/generate-followup", response_model=FollowUp)
async def generate_followup(
    payload: Optional[GenerateFollowUpRequest] = None,
    client: GenerationClient = Depends(get_generation_client),
):
    payload = payload or GenerateFollowUpRequest()
    return await operations.generate_follow_up_question(
        client,
        payload.original_question,
        payload.user_answer,
        payload.language,
    )


@router.post("/generate-project-report", response_model=ReportResponse)
async def generate_project_report(
    payload: Optional[GenerateReportRequest] = None,
    user_id: str = Depends(require_user_id),
    client: GenerationClient = Depends(get_generation_client),
):
    payload = payload or GenerateReportRequest()
    LOGGER.info("Generating project report for user %s", user_id)
    report = await operations.generate_project_report(client, payload.responses, payload.research_goal)
    return ReportResponse(report=report)
