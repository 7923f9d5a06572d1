"""
Base classes and data structures for chat-completion providers.

This module defines the abstract base class that providers implement, the
request value sent for every fragment, and the response returned by the
service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Real
from typing import Optional, Tuple
import httpx

from md_translator.config import (
    REQUEST_TIMEOUT, MAX_TOKENS_LIMIT, TEMPERATURE_RANGE, FREQUENCY_PENALTY_RANGE
)


@dataclass(frozen=True)
class ChatMessage:
    """A role-tagged chat message"""
    role: str  # "system" or "user"
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatCompletionRequest:
    """
    Chat-completion request.

    Instances are immutable. The translator keeps one with empty messages as
    a template and derives a new request per fragment with
    ``dataclasses.replace``.

    Raises:
        ValueError: If a generation parameter is outside the range accepted
            by the chat-completion API
    """
    model: str
    max_tokens: int
    temperature: float
    frequency_penalty: float
    messages: Tuple[ChatMessage, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.model:
            raise ValueError("model must not be empty")
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
            raise ValueError(f"max_tokens must be an integer, got {self.max_tokens!r}")
        if not 1 <= self.max_tokens <= MAX_TOKENS_LIMIT:
            raise ValueError(f"max_tokens must be between 1 and {MAX_TOKENS_LIMIT}, got {self.max_tokens}")
        _check_range("temperature", self.temperature, TEMPERATURE_RANGE)
        _check_range("frequency_penalty", self.frequency_penalty, FREQUENCY_PENALTY_RANGE)

    def to_payload(self) -> dict:
        """JSON body for the /chat/completions endpoint"""
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "frequency_penalty": self.frequency_penalty,
            "messages": [message.to_dict() for message in self.messages],
        }


def _check_range(name: str, value, bounds: Tuple[float, float]) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if value != value or not low <= value <= high:  # NaN fails the first test
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class ChatChoice:
    """One completion returned by the service. content is None when refused or filtered."""
    index: int
    content: Optional[str]
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class ChatCompletionResponse:
    """Response from the service with token usage information"""
    choices: Tuple[ChatChoice, ...]
    prompt_tokens: int = 0  # Number of tokens in the prompt
    completion_tokens: int = 0  # Number of tokens in the response

    def texts(self):
        """Textual content of every choice, in service order, skipping empty ones"""
        return [choice.content for choice in self.choices if choice.content is not None]


class LLMProvider(ABC):
    """Abstract base class for chat-completion providers"""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the provider.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout)
            )
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    async def create_chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Send a chat-completion request.

        Args:
            request: The complete request, messages included

        Returns:
            ChatCompletionResponse with every choice returned by the service

        Raises:
            LLMRequestError: On transport failure or an error status
            LLMResponseError: When the body is not a chat completion
        """
        pass
