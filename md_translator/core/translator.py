"""
Translator state machine and the per-fragment translation protocol.

A translation run goes through two states:

    TranslatorConfiguration  --Translator.from_configuration()-->  ReadyForTranslation

The transition binds the chat-completion provider, validates the request
template and resolves both prompts, once. Only ReadyForTranslation has a
translate() method, so a fragment can never be sent with a half-initialized
translator.
"""
import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from md_translator.config import TranslatorConfiguration
from md_translator.prompts import resolve_prompts
from .exceptions import ConfigError, TranslationError
from .llm import (
    LLMProvider, LLMError, ChatMessage, ChatCompletionRequest, OpenAICompatibleProvider
)


@dataclass(frozen=True)
class ReadyForTranslation:
    """
    A translator whose client, request template and prompts are all resolved.

    Attributes:
        provider: Bound chat-completion provider, shared by every call
        request_template: Model and generation parameters, no messages
        system_prompt: Resolved system prompt, sent verbatim
        user_prompt: Resolved user prompt template, prefixed to each fragment
        log_callback: Optional logging callback (message, details, data)
    """
    provider: LLMProvider
    request_template: ChatCompletionRequest
    system_prompt: str
    user_prompt: str
    log_callback: Optional[Callable] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.provider, LLMProvider):
            raise TypeError("ReadyForTranslation requires a bound LLMProvider")
        if not isinstance(self.request_template, ChatCompletionRequest):
            raise TypeError("ReadyForTranslation requires a ChatCompletionRequest template")
        if not isinstance(self.system_prompt, str) or not isinstance(self.user_prompt, str):
            raise TypeError("ReadyForTranslation requires resolved system and user prompts")

    def build_request(self, fragment: str) -> ChatCompletionRequest:
        """Copy the template with the system message and the user message for this fragment."""
        return replace(self.request_template, messages=(
            ChatMessage(role="system", content=self.system_prompt),
            ChatMessage(role="user", content=f"{self.user_prompt}\n{fragment}"),
        ))

    async def translate(self, fragment: str) -> List[str]:
        """
        Translate one fragment.

        Args:
            fragment: Markdown text, sent verbatim

        Returns:
            list: The text of every returned completion, in service order.
                Completions without text are skipped, so the list may be empty.

        Raises:
            TranslationError: If the exchange with the service fails
        """
        request = self.build_request(fragment)

        if self.log_callback:
            self.log_callback("llm_request", "Sending request to LLM", data={
                'type': 'llm_request',
                'system_prompt': request.messages[0].content,
                'user_prompt': request.messages[1].content,
                'model': request.model
            })

        start_time = time.time()
        try:
            response = await self.provider.create_chat_completion(request)
        except LLMError as e:
            raise TranslationError(str(e), context={'model': request.model}) from e

        if self.log_callback:
            self.log_callback("llm_response", "LLM Response received", data={
                'type': 'llm_response',
                'response': "\n".join(response.texts()),
                'execution_time': time.time() - start_time
            })

        return response.texts()

    async def close(self):
        """Release the provider's HTTP client"""
        await self.provider.close()

    async def __aenter__(self) -> 'ReadyForTranslation':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


class Translator:
    """Builds ready translators from configurations."""

    @staticmethod
    def from_configuration(
        config: TranslatorConfiguration,
        provider: Optional[LLMProvider] = None,
        log_callback: Optional[Callable] = None
    ) -> ReadyForTranslation:
        """
        Move a configuration to the ReadyForTranslation state.

        Args:
            config: Raw translation parameters
            provider: Provider to bind instead of an OpenAICompatibleProvider
                built from the configuration
            log_callback: Optional logging callback

        Returns:
            ReadyForTranslation

        Raises:
            ConfigError: If the credential is missing or a generation
                parameter is rejected by the request template
        """
        if not config.api_key or not config.api_key.strip():
            raise ConfigError("OpenAI API key is missing", context={'model': str(config.model)})

        try:
            request_template = ChatCompletionRequest(
                model=str(config.model),
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                frequency_penalty=config.frequency_penalty
            )
        except ValueError as e:
            raise ConfigError(f"Invalid request parameters: {e}") from e

        if provider is None:
            provider = OpenAICompatibleProvider(
                api_key=config.api_key,
                api_endpoint=config.api_endpoint,
                timeout=config.timeout,
                log_callback=log_callback
            )

        prompts = resolve_prompts(config)

        return ReadyForTranslation(
            provider=provider,
            request_template=request_template,
            system_prompt=prompts.system,
            user_prompt=prompts.user,
            log_callback=log_callback
        )
