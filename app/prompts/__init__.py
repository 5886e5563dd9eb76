"""Prompt builders for Gemini-backed policy generation."""
