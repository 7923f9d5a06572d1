"""
LLM-specific exceptions.

This module defines the exceptions raised by chat-completion providers.
"""

from typing import Optional


class LLMError(Exception):
    """Base exception for provider failures."""
    pass


class LLMRequestError(LLMError):
    """
    Raised when the request cannot be completed.

    Covers timeouts, connection failures and non-2xx HTTP statuses
    (authentication, quota, server errors).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LLMResponseError(LLMError):
    """
    Raised when the service answers with a body that is not a chat completion.
    """
    pass
