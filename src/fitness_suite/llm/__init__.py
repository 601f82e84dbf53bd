"""Gemini client and prompt builders."""
