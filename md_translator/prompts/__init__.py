"""
Prompts module for md-translator
"""
from md_translator.prompts.prompts import (
    PromptPair,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_USER_PROMPT,
    substitute_languages,
    resolve_prompt,
    resolve_prompts,
)

__all__ = [
    "PromptPair",
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_USER_PROMPT",
    "substitute_languages",
    "resolve_prompt",
    "resolve_prompts",
]
