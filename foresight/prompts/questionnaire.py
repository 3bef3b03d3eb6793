"""Prompts for questionnaire generation: initial questions and choice options."""
from __future__ import annotations

from typing import Any

from ..schemas import MAX_CHOICES, MAX_QUESTIONS, MIN_CHOICES, MIN_QUESTIONS, RATING_SCALE_ICON, RATING_SCALE_TOP_ICON
from .base import as_json, json_only, require

INITIAL_QUESTIONS_PROMPT = """
You are a world-class user researcher. Your task is to generate a structured questionnaire.
Use the following context to create highly relevant questions:
- Company Name: "{company_name}"
- Company Details: {company_analysis}
- Primary Research Goal: "{research_goal}"
Based on ALL the context above, generate a diverse questionnaire with {min_questions}-{max_questions} questions (a mix of 'open-text', 'multiple-choice', and 'rating-scale' from 1 to 5).
Each question must be short, clear, and concise (ideally under 15 words). Do not include extra context, explanations, or multi-part questions. Only ask what is essential.
For each option, also provide a relevant Material icon name (e.g., 'attach_money', 'store', 'star', etc.) in an 'icon' field. The icon should match the meaning of the option as closely as possible. The options array should be an array of objects: {{ label: string, icon: string }}.
{rules}
Only output the raw JSON array.
Each object in the array must have this exact structure:
{{
  "id": "A unique string identifier",
  "text": "The full question text",
  "type": "one of 'open-text', 'multiple-choice', or 'rating-scale'",
  "options": [
    {{ "label": "Option text", "icon": "material_icon_name" }},
    ...
  ]
}}
- For 'multiple-choice' questions, you MUST populate the 'options' array with {min_choices}-{max_choices} relevant and distinct choices, each with an appropriate icon. This is not optional.
- For 'rating-scale', populate 'options' with exactly [
  {{ "label": "1", "icon": "{scale_icon}" }},
  {{ "label": "2", "icon": "{scale_icon}" }},
  {{ "label": "3", "icon": "{scale_icon}" }},
  {{ "label": "4", "icon": "{scale_icon}" }},
  {{ "label": "5", "icon": "{scale_top_icon}" }}
].
- For 'open-text', 'options' MUST be an empty array [].
""".strip()

CHOICE_OPTIONS_PROMPT = """
You are a user research expert. Based on the provided research goal and a specific question, generate {min_choices} to {max_choices} relevant and distinct multiple-choice options.
- Research Goal: "{research_goal}"
- Question: "{question_text}"
{rules}
Each object must have this structure: {{ "label": string, "icon": string }}. The icon should be a relevant Material icon name (e.g., 'check_box', 'store', etc.).
Example response: [ {{ "label": "Option A", "icon": "check_box" }}, {{ "label": "Option B", "icon": "store" }} ]
""".strip()


def build_initial_questions_prompt(company_name: str, research_goal: str, company_analysis: Any) -> str:
    require(
        "generate_initial_questions",
        companyName=company_name,
        researchGoal=research_goal,
        companyAnalysis=company_analysis,
    )
    return INITIAL_QUESTIONS_PROMPT.format(
        company_name=company_name,
        company_analysis=as_json(company_analysis),
        research_goal=research_goal,
        min_questions=MIN_QUESTIONS,
        max_questions=MAX_QUESTIONS,
        min_choices=MIN_CHOICES,
        max_choices=MAX_CHOICES,
        scale_icon=RATING_SCALE_ICON,
        scale_top_icon=RATING_SCALE_TOP_ICON,
        rules=json_only("a valid JSON array of objects"),
    )


def build_choice_options_prompt(question_text: str, research_goal: str) -> str:
    require("generate_multiple_choice_options", questionText=question_text, researchGoal=research_goal)
    return CHOICE_OPTIONS_PROMPT.format(
        question_text=question_text,
        research_goal=research_goal,
        min_choices=MIN_CHOICES,
        max_choices=MAX_CHOICES,
        rules=json_only("a valid JSON array of objects"),
    )
