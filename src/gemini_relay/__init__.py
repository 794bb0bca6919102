"""Gemini Relay - a thin proxy in front of a Gemini inference API."""
