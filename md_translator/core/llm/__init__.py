"""
Chat-completion client layer.

The translator only depends on LLMProvider.create_chat_completion(); the
concrete OpenAI-compatible provider lives in providers/.
"""
from .base import LLMProvider, ChatMessage, ChatCompletionRequest, ChatCompletionResponse, ChatChoice
from .exceptions import LLMError, LLMRequestError, LLMResponseError
from .providers import OpenAICompatibleProvider

__all__ = [
    "LLMProvider",
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatChoice",
    "LLMError",
    "LLMRequestError",
    "LLMResponseError",
    "OpenAICompatibleProvider",
]
