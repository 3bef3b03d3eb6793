"""Shared helpers for prompt templates."""
from __future__ import annotations

import json
from typing import Any

from ..services.errors import ValidationFailure

JSON_ONLY_RULES = """
IMPORTANT: Your response MUST be {shape}, and NOTHING else.
Do NOT wrap it in markdown or add any commentary.
""".strip()


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def require(operation: str, **params: Any) -> None:
    """Raise ValidationFailure naming every missing or empty parameter."""
    missing = [name for name, value in params.items() if is_blank(value)]
    if missing:
        raise ValidationFailure(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required", details=operation)


def as_json(value: Any) -> str:
    """Serialize structured context for verbatim embedding in a prompt."""
    if hasattr(value, "model_dump"):
        value = value.model_dump(by_alias=True)
    elif isinstance(value, list):
        value = [item.model_dump(by_alias=True) if hasattr(item, "model_dump") else item for item in value]
    return json.dumps(value, ensure_ascii=False)


def json_only(shape: str) -> str:
    return JSON_ONLY_RULES.format(shape=shape)


__all__ = ["as_json", "is_blank", "json_only", "require"]
