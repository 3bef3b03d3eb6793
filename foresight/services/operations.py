"""Structured-generation operations backing the /api/ai endpoints.

Every operation follows the same path: render the prompt (rejecting missing
input before any model call), ask the generation client for raw text,
recover the embedded JSON value, then validate it into the typed result.
Failures surface as ``ValidationFailure``, ``UpstreamFailure`` or
``MalformedOutputFailure`` so callers never receive a silent empty value.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..prompts import (
    ANALYZE_COMPANY,
    GENERATE_FOLLOW_UP_QUESTION,
    GENERATE_INITIAL_QUESTIONS,
    GENERATE_MULTIPLE_CHOICE_OPTIONS,
    GENERATE_PROJECT_REPORT,
    build_prompt,
)
from ..schemas import ChoiceOptions, CompanyAnalysis, FollowUp, Option, Question, Questionnaire, Report
from .errors import MalformedOutputFailure, UpstreamFailure
from .extraction import extract_json
from .gemini_client import GenerationFailure

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TextGenerator(Protocol):
    async def generate(self, prompt: str, *, tools: Optional[Dict[str, bool]] = None) -> str:
        ...


def _summarize(exc: ValidationError, limit: int = 3) -> str:
    messages = []
    for error in exc.errors()[:limit]:
        location = ".".join(str(part) for part in error.get("loc", ())) or "value"
        messages.append(f"{location}: {error.get('msg')}")
    remaining = exc.error_count() - limit
    if remaining > 0:
        messages.append(f"(+{remaining} more)")
    return "; ".join(messages)


async def _generate_value(
    operation: str,
    client: TextGenerator,
    prompt: str,
    *,
    kind: str,
    tools: Optional[Dict[str, bool]] = None,
) -> Any:
    try:
        text = await client.generate(prompt, tools=tools)
    except GenerationFailure as exc:
        LOGGER.error("%s: upstream generation failed: %s", operation, exc)
        raise UpstreamFailure("Gemini request failed", details=str(exc)) from exc

    extraction = extract_json(text).expect(kind)
    if not extraction.ok:
        LOGGER.warning("%s: could not extract JSON (%s); response=%r", operation, extraction.reason, (text or "")[:200])
        raise MalformedOutputFailure("Gemini returned malformed output", details=extraction.reason)
    return extraction.value


def _validate(operation: str, model: Type[ModelT], value: Any) -> ModelT:
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        details = _summarize(exc)
        LOGGER.warning("%s: output failed shape validation: %s", operation, details)
        raise MalformedOutputFailure("Gemini output did not match the expected shape", details=details) from exc


async def analyze_company(client: TextGenerator, company_name: str) -> CompanyAnalysis:
    """Category, domain, summary and 3-5 competitors for ``company_name``."""
    prompt = build_prompt(ANALYZE_COMPANY, company_name=company_name)
    value = await _generate_value(ANALYZE_COMPANY, client, prompt, kind="object", tools={"google_search": True})
    return _validate(ANALYZE_COMPANY, CompanyAnalysis, value)


async def generate_initial_questions(
    client: TextGenerator,
    company_name: str,
    research_goal: str,
    company_analysis: Any,
) -> List[Question]:
    """A 5-7 question questionnaire mixing open-text, multiple-choice and rating-scale."""
    prompt = build_prompt(
        GENERATE_INITIAL_QUESTIONS,
        company_name=company_name,
        research_goal=research_goal,
        company_analysis=company_analysis,
    )
    value = await _generate_value(GENERATE_INITIAL_QUESTIONS, client, prompt, kind="array")
    return list(_validate(GENERATE_INITIAL_QUESTIONS, Questionnaire, value).root)


async def generate_multiple_choice_options(
    client: TextGenerator,
    question_text: str,
    research_goal: str,
) -> List[Option]:
    prompt = build_prompt(
        GENERATE_MULTIPLE_CHOICE_OPTIONS,
        question_text=question_text,
        research_goal=research_goal,
    )
    value = await _generate_value(GENERATE_MULTIPLE_CHOICE_OPTIONS, client, prompt, kind="array")
    return list(_validate(GENERATE_MULTIPLE_CHOICE_OPTIONS, ChoiceOptions, value).root)


async def generate_follow_up_question(
    client: TextGenerator,
    original_question: str,
    user_answer: str,
    language: str,
) -> FollowUp:
    prompt = build_prompt(
        GENERATE_FOLLOW_UP_QUESTION,
        original_question=original_question,
        user_answer=user_answer,
        language=language,
    )
    value = await _generate_value(GENERATE_FOLLOW_UP_QUESTION, client, prompt, kind="object")
    return _validate(GENERATE_FOLLOW_UP_QUESTION, FollowUp, value)


async def generate_project_report(client: TextGenerator, responses: Any, research_goal: str) -> Report:
    """Synthesize collected interview responses into a research report."""
    prompt = build_prompt(GENERATE_PROJECT_REPORT, responses=responses, research_goal=research_goal)
    value = await _generate_value(GENERATE_PROJECT_REPORT, client, prompt, kind="object")
    return _validate(GENERATE_PROJECT_REPORT, Report, value)


__all__ = [
    "TextGenerator",
    "analyze_company",
    "generate_follow_up_question",
    "generate_initial_questions",
    "generate_multiple_choice_options",
    "generate_project_report",
]
