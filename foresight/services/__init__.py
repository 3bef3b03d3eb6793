"""Service-layer pipeline (generation client, extraction, operations)."""

__all__ = [
    "errors",
    "extraction",
    "gemini_client",
    "operations",
]
