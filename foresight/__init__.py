"""Foresight research backend: structured Gemini generation for questionnaires."""
