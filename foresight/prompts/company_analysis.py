"""Prompt for the company analysis pass."""
from __future__ import annotations

from .base import json_only, require

COMPANY_ANALYSIS_PROMPT = """
You are a concise business analyst. Analyze the company provided.
Company Name: "{company_name}"
Use Google Search to find up-to-date information.
Provide your analysis in a valid JSON object format. The JSON object must have the following structure and nothing else:
{{
  "category": "The primary industry or category the company operates in.",
  "domain": "The main website domain of the company.",
  "summary": "A brief one or two-sentence summary of what the company does.",
  "competitors": ["A list of 3-5 main competitors."]
}}
{rules}
""".strip()


def build_company_analysis_prompt(company_name: str) -> str:
    require("analyze_company", companyName=company_name)
    return COMPANY_ANALYSIS_PROMPT.format(
        company_name=company_name,
        rules=json_only("a single raw JSON object"),
    )
