"""Unit tests for custom exceptions."""

from md_translator.core.exceptions import (
    MarkdownTranslatorError,
    EmptyInputError,
    ConfigError,
    TranslationError
)


class TestMarkdownTranslatorError:
    """Test base exception class."""

    def test_message_and_context(self):
        error = MarkdownTranslatorError("Test error", context={"model": "gpt-4o"})
        assert error.message == "Test error"
        assert str(error) == "MarkdownTranslatorError: Test error (context: model=gpt-4o)"

    def test_without_context(self):
        error = MarkdownTranslatorError("Test error")
        assert error.context == {}
        assert str(error) == "MarkdownTranslatorError: Test error"


class TestSubclasses:
    """Each fatal error kind inherits from the base class."""

    def test_empty_input_default_message(self):
        error = EmptyInputError()
        assert isinstance(error, MarkdownTranslatorError)
        assert error.message == "Input text is empty"

    def test_config_error(self):
        assert isinstance(ConfigError("missing key"), MarkdownTranslatorError)

    def test_translation_error_fragment_index(self):
        error = TranslationError("timeout", fragment_index=3)
        assert error.fragment_index == 3
        assert error.context == {"fragment_index": 3}
        assert "fragment_index=3" in str(error)

    def test_translation_error_keeps_context(self):
        error = TranslationError("timeout", context={"model": "gpt-4o"}, fragment_index=0)
        assert error.context == {"model": "gpt-4o", "fragment_index": 0}

    def test_translation_error_without_index(self):
        error = TranslationError("timeout")
        assert error.fragment_index is None
        assert error.context == {}
