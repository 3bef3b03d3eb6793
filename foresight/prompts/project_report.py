"""Prompt for the final research report over collected responses."""
from __future__ import annotations

from typing import Any

from .base import as_json, json_only, require

PROJECT_REPORT_PROMPT = """
You are a world-class research analyst. Given the following research goal and a set of interview responses, generate a detailed research report.

Research Goal: "{research_goal}"

Responses: {responses}

Your report must be a valid JSON object with this exact structure and nothing else:
{{
  "title": string,
  "executiveSummary": string,
  "keyThemes": [ {{ "theme": string, "percentage": number, "description": string }} ],
  "detailedAnalysis": string,
  "actionableInsights": string[],
  "notableQuotes": [ {{ "quote": string, "context"?: string }} ]
}}
Each "percentage" is the share of respondents (0-100) who raised the theme.
{rules}
""".strip()


def build_project_report_prompt(responses: Any, research_goal: str) -> str:
    require("generate_project_report", responses=responses, researchGoal=research_goal)
    return PROJECT_REPORT_PROMPT.format(
        research_goal=research_goal,
        responses=as_json(responses),
        rules=json_only("the raw JSON object"),
    )
