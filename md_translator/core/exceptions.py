"""
Exception hierarchy for the translation pipeline.

Every fatal condition of a translation run surfaces as one of these
exceptions. Prompt override files that cannot be read are deliberately not
represented here: they fall back to the default prompt.
"""

from typing import Optional, Dict, Any


class MarkdownTranslatorError(Exception):
    """Base exception for all translation pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" (context: {context_str})"
        return base


class EmptyInputError(MarkdownTranslatorError):
    """Raised when the text handed to the segmenter is empty."""

    def __init__(self, message: str = "Input text is empty", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class ConfigError(MarkdownTranslatorError):
    """Raised when a configuration cannot be turned into a ready translator.

    Covers a missing credential and generation parameters the request
    template rejects. Always raised before any network call.
    """
    pass


class TranslationError(MarkdownTranslatorError):
    """Raised when a single fragment's exchange with the chat service fails.

    The underlying transport or service error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        fragment_index: Optional[int] = None
    ):
        if fragment_index is not None:
            context = dict(context or {}, fragment_index=fragment_index)
        super().__init__(message, context)
        self.fragment_index = fragment_index
