"""
Core translation modules
"""
from .exceptions import MarkdownTranslatorError, EmptyInputError, ConfigError, TranslationError
from .segmenter import split
from .translator import Translator, ReadyForTranslation
from .document import Document

__all__ = [
    'MarkdownTranslatorError',
    'EmptyInputError',
    'ConfigError',
    'TranslationError',
    'split',
    'Translator',
    'ReadyForTranslation',
    'Document'
]
