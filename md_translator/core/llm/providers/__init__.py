"""
LLM Provider Implementations

Providers:
    - openai: OpenAI chat-completions API and compatible servers
"""
from .openai import OpenAICompatibleProvider

__all__ = ["OpenAICompatibleProvider"]
