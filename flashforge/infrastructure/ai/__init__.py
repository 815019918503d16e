"""LLM gateway client and prompt definitions."""
