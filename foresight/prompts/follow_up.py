"""Prompt for a single follow-up question after a respondent's answer."""
from __future__ import annotations

from ..schemas import MAX_FOLLOW_UP_OPTIONS, MIN_FOLLOW_UP_OPTIONS
from .base import json_only, require

FOLLOW_UP_PROMPT = """
You are a world-class user researcher. Given the following question and user answer, generate a single, concise follow-up question (under 15 words) and {min_options}-{max_options} relevant options (each with a Material icon name).

Original Question: "{original_question}"
User Answer: "{user_answer}"
Language: {language}

Write the follow-up question and the option labels in the language above.
Respond with a JSON object:
{{
  "followUp": "The follow-up question text",
  "options": [ {{ "label": "Option text", "icon": "material_icon_name" }}, ... ]
}}
{rules}
""".strip()


def build_follow_up_prompt(original_question: str, user_answer: str, language: str) -> str:
    require(
        "generate_follow_up_question",
        originalQuestion=original_question,
        userAnswer=user_answer,
        language=language,
    )
    return FOLLOW_UP_PROMPT.format(
        original_question=original_question,
        user_answer=user_answer,
        language=language,
        min_options=MIN_FOLLOW_UP_OPTIONS,
        max_options=MAX_FOLLOW_UP_OPTIONS,
        rules=json_only("a single raw JSON object"),
    )
