"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from md_translator.config import Model, TranslatorConfiguration
from md_translator.core.llm import LLMProvider, ChatCompletionResponse, ChatChoice


class StubProvider(LLMProvider):
    """Provider returning canned completions and recording every request."""

    def __init__(self, replies=None, error=None):
        super().__init__(timeout=1)
        self.replies = replies
        self.error = error
        self.requests = []
        self.closed = False

    async def create_chat_completion(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        contents = self.replies if self.replies is not None else [f"<T:{request.messages[1].content}>"]
        return ChatCompletionResponse(choices=tuple(
            ChatChoice(index=i, content=content) for i, content in enumerate(contents)
        ))

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_markdown():
    """Markdown document with a preamble, three sections and a fenced code block."""
    return (
        "Preamble paragraph.\n"
        "\n"
        "# Title\n"
        "Intro text.\n"
        "\n"
        "## Install\n"
        "```bash\n"
        "# not a heading\n"
        "pip install md-translator\n"
        "```\n"
        "\n"
        "### Usage\n"
        "Run it."
    )


@pytest.fixture
def make_config():
    """Factory for configurations with test-friendly defaults."""
    def _make(**overrides):
        values = dict(
            api_key="sk-test-1234",
            model=Model.GPT_4O,
            max_tokens=2000,
            temperature=0.6,
            frequency_penalty=1.0,
            system_prompt_file=None,
            user_prompt_file=None,
            system_prompt_text=None,
            user_prompt_text=None,
            source_language="Japanese",
            target_language="English",
            api_endpoint="https://api.example.test/v1/chat/completions",
            timeout=5,
        )
        values.update(overrides)
        return TranslatorConfiguration(**values)
    return _make


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def make_provider():
    """Factory for stub providers: make_provider(replies=[...]) or make_provider(error=...)."""
    return StubProvider
