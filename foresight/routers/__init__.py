"""API routers for the Foresight research backend."""

from . import ai, projects, tts

__all__ = ["ai", "projects", "tts"]
