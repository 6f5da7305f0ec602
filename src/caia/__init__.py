"""Caia - chat with an LLM about your workspace and let it edit files and spreadsheets."""

__version__ = "0.1.0"
