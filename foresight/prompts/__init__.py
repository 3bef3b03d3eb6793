"""Prompt templates for each structured-generation operation."""
from __future__ import annotations

from typing import Any, Callable, Dict

from ..services.errors import ValidationFailure
from .company_analysis import build_company_analysis_prompt
from .follow_up import build_follow_up_prompt
from .project_report import build_project_report_prompt
from .questionnaire import build_choice_options_prompt, build_initial_questions_prompt

ANALYZE_COMPANY = "analyze_company"
GENERATE_INITIAL_QUESTIONS = "generate_initial_questions"
GENERATE_MULTIPLE_CHOICE_OPTIONS = "generate_multiple_choice_options"
GENERATE_FOLLOW_UP_QUESTION = "generate_follow_up_question"
GENERATE_PROJECT_REPORT = "generate_project_report"

BUILDERS: Dict[str, Callable[..., str]] = {
    ANALYZE_COMPANY: build_company_analysis_prompt,
    GENERATE_INITIAL_QUESTIONS: build_initial_questions_prompt,
    GENERATE_MULTIPLE_CHOICE_OPTIONS: build_choice_options_prompt,
    GENERATE_FOLLOW_UP_QUESTION: build_follow_up_prompt,
    GENERATE_PROJECT_REPORT: build_project_report_prompt,
}


def build_prompt(operation: str, **params: Any) -> str:
    """Render the prompt for ``operation`` from its keyword parameters."""
    builder = BUILDERS.get(operation)
    if builder is None:
        raise ValidationFailure(f"Unknown operation '{operation}'")
    try:
        return builder(**params)
    except TypeError as exc:
        raise ValidationFailure(f"Invalid parameters for {operation}: {exc}", details=operation) from exc


__all__ = [
    "ANALYZE_COMPANY",
    "BUILDERS",
    "GENERATE_FOLLOW_UP_QUESTION",
    "GENERATE_INITIAL_QUESTIONS",
    "GENERATE_MULTIPLE_CHOICE_OPTIONS",
    "GENERATE_PROJECT_REPORT",
    "build_choice_options_prompt",
    "build_company_analysis_prompt",
    "build_follow_up_prompt",
    "build_initial_questions_prompt",
    "build_project_report_prompt",
    "build_prompt",
]
