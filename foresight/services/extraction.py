"""Recover a JSON value embedded in free-form model output."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

# Fence markers may sit on their own line or share a line with the payload.
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|```$", re.MULTILINE)

_CLOSERS = {"{": "}", "[": "]"}

NO_STRUCTURE = "no JSON object or array found"
NO_CLOSER = "no closing token after the opening one"
INVALID_JSON = "embedded text is not valid JSON"


@dataclass(frozen=True)
class Extraction:
    """Tagged outcome of :func:`extract_json`.

    ``ok`` is true only when ``value`` holds a parsed object or array.
    On failure ``reason`` says which step gave up and ``value`` is None.
    """

    value: Any = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def kind(self) -> Optional[str]:
        if isinstance(self.value, dict):
            return "object"
        if isinstance(self.value, list):
            return "array"
        return None

    @classmethod
    def failure(cls, reason: str) -> "Extraction":
        return cls(value=None, reason=reason)

    def expect(self, kind: str) -> "Extraction":
        """Narrow a successful extraction to ``kind`` ("object" or "array").

        Failures pass through untouched; a parsed value of the other kind
        becomes a failure naming both kinds.
        """
        if not self.ok or self.kind == kind:
            return self
        return Extraction.failure(f"expected a JSON {kind}, got {self.kind}")


def strip_fences(text: str) -> str:
    """Remove markdown code-fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", text or "").strip()


def _balanced_end(text: str, start: int) -> int:
    """Index of the token closing the container opened at ``start``, or -1.

    Tracks nesting of both container kinds and skips over string literals,
    so brackets inside strings or after the payload do not confuse it.
    """
    stack = []
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack.pop() != ch:
                return -1
            if not stack:
                return idx
    return -1


def extract_json(text: Optional[str], *, balanced: bool = False) -> Extraction:
    """Pull the first JSON object or array out of ``text``.

    The container kind is whichever of ``{`` / ``[`` appears first. By
    default the payload runs to the *last* matching close token in the
    text; this is cheap and works when the model emits exactly one value,
    but fails if another bracketed fragment of the same kind follows.
    ``balanced=True`` instead stops where nesting depth returns to zero.

    Never raises: every failure is reported through ``Extraction.reason``.
    """
    cleaned = strip_fences(text or "")
    first_brace = cleaned.find("{")
    first_bracket = cleaned.find("[")
    if first_brace == -1 and first_bracket == -1:
        return Extraction.failure(NO_STRUCTURE)

    is_array = first_bracket != -1 and (first_brace == -1 or first_bracket < first_brace)
    start = first_bracket if is_array else first_brace

    if balanced:
        end = _balanced_end(cleaned, start)
    else:
        end = cleaned.rfind("]" if is_array else "}")
    if end == -1 or end < start:
        return Extraction.failure(NO_CLOSER)

    try:
        value = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError:
        return Extraction.failure(INVALID_JSON)
    return Extraction(value=value)


__all__ = [
    "Extraction",
    "INVALID_JSON",
    "NO_CLOSER",
    "NO_STRUCTURE",
    "extract_json",
    "strip_fences",
]
