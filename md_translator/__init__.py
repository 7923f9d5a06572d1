"""
md-translator: translate Markdown documents with an OpenAI-compatible chat model.

The document is split at its headings and every fragment is translated in
order with the same system prompt, user prompt and request parameters.
"""
from md_translator.config import Model, TranslatorConfiguration
from md_translator.core import (
    Document,
    Translator,
    ReadyForTranslation,
    EmptyInputError,
    ConfigError,
    TranslationError,
)

__version__ = "0.1.0"

__all__ = [
    "Model",
    "TranslatorConfiguration",
    "Document",
    "Translator",
    "ReadyForTranslation",
    "EmptyInputError",
    "ConfigError",
    "TranslationError",
]
