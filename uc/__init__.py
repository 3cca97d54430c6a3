"""
uc: Unix commands from natural language.

This package turns a plain-language request into a shell command using a
configurable LLM backend (a local Ollama server, OpenAI or Google Gemini)
and then runs it, or only shows it in dry-run mode.
"""

__version__ = "0.3.0"
