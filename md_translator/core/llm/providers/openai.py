"""
OpenAI-compatible provider implementation.

This module provides the OpenAICompatibleProvider class for interacting with
the OpenAI chat-completions API and compatible endpoints (llama.cpp, LM Studio,
vLLM, OpenRouter, etc.).
"""

from typing import Optional, Callable
import httpx

from ..base import LLMProvider, ChatCompletionRequest, ChatCompletionResponse, ChatChoice
from ..exceptions import LLMRequestError, LLMResponseError

from md_translator.config import API_ENDPOINT, REQUEST_TIMEOUT


class OpenAICompatibleProvider(LLMProvider):
    """OpenAI-compatible API provider (works with OpenAI, llama.cpp, LM Studio, vLLM, etc.)"""

    def __init__(self, api_key: str, api_endpoint: str = API_ENDPOINT,
                 timeout: float = REQUEST_TIMEOUT, log_callback: Optional[Callable] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(timeout)
        self.api_key = api_key
        self.api_endpoint = api_endpoint
        self.log_callback = log_callback
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None and self._transport is not None:
            self._client = httpx.AsyncClient(transport=self._transport, timeout=httpx.Timeout(self.timeout))
        return await super()._get_client()

    async def create_chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Send a chat-completion request to an OpenAI compatible API.

        A single attempt is made: retry policy belongs to the caller.

        Args:
            request: The complete request, messages included

        Returns:
            ChatCompletionResponse with every choice and token usage info

        Raises:
            LLMRequestError: On timeout, connection failure or HTTP error status
            LLMResponseError: When the body is not valid chat-completion JSON
        """
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        client = await self._get_client()
        try:
            response = await client.post(
                self.api_endpoint,
                json=request.to_payload(),
                headers=headers
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise LLMRequestError(f"OpenAI-compatible API timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            error_body = e.response.text[:500]
            if self.log_callback:
                self.log_callback("llm_api_error",
                                  f"Response details: Status {e.response.status_code}, Body: {error_body}")
            raise LLMRequestError(
                f"OpenAI-compatible API HTTP error {e.response.status_code}: {error_body}",
                status_code=e.response.status_code,
                body=error_body
            ) from e
        except httpx.HTTPError as e:
            raise LLMRequestError(f"OpenAI-compatible API request failed: {e}") from e

        try:
            response_json = response.json()
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
            raise LLMResponseError(f"OpenAI-compatible API returned invalid JSON: {e}") from e

        return self._parse_response(response_json)

    @staticmethod
    def _parse_response(response_json) -> ChatCompletionResponse:
        """Build a ChatCompletionResponse from the decoded JSON body"""
        if not isinstance(response_json, dict) or not isinstance(response_json.get("choices"), list):
            raise LLMResponseError("OpenAI-compatible API response has no 'choices' list")

        choices = []
        for position, raw_choice in enumerate(response_json["choices"]):
            if not isinstance(raw_choice, dict):
                raise LLMResponseError(f"Malformed choice at position {position}")
            message = raw_choice.get("message") or {}
            content = message.get("content") if isinstance(message, dict) else None
            choices.append(ChatChoice(
                index=raw_choice.get("index", position),
                content=content if isinstance(content, str) else None,
                finish_reason=raw_choice.get("finish_reason")
            ))

        # Extract token usage if available
        usage = response_json.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        return ChatCompletionResponse(
            choices=tuple(choices),
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0)
        )
