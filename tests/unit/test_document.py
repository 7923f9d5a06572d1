"""Unit tests for Document orchestration."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from md_translator.core.document import Document
from md_translator.core.exceptions import EmptyInputError, TranslationError
from md_translator.core.translator import Translator


class StubTranslator:
    """Translator stub: wraps each fragment, optionally failing at one index."""

    def __init__(self, fail_at=None):
        self.fail_at = fail_at
        self.calls = []

    async def translate(self, fragment):
        self.calls.append(fragment)
        if self.fail_at is not None and len(self.calls) - 1 == self.fail_at:
            raise TranslationError("quota exceeded")
        return [f"<T:{fragment}>"]


class TestFromText:
    """Tests for Document construction."""

    def test_fragments_from_segmenter(self):
        document = Document.from_text("# A\ntext1\n## B\ntext2")
        assert document.fragments == ("# A\ntext1", "## B\ntext2")
        assert len(document) == 2

    def test_empty_text(self):
        with pytest.raises(EmptyInputError):
            Document.from_text("")


class TestTranslate:
    """Tests for Document.translate()."""

    @pytest.mark.asyncio
    async def test_output_aligned_with_fragments(self, sample_markdown):
        document = Document.from_text(sample_markdown)
        translator = StubTranslator()

        result = await document.translate(translator, log_callback=MagicMock())

        assert len(result) == len(document.fragments)
        for fragment, translation in zip(document.fragments, result):
            assert translation == f"<T:{fragment}>"
        assert translator.calls == list(document.fragments)

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self):
        document = Document.from_text("# A\na\n# B\nb\n# C\nc\n# D\nd")
        translator = StubTranslator(fail_at=1)

        with pytest.raises(TranslationError) as excinfo:
            await document.translate(translator, log_callback=MagicMock())

        assert translator.calls == ["# A\na", "# B\nb"]
        assert excinfo.value.fragment_index == 1
        assert excinfo.value.context['fragment_index'] == 1

    @pytest.mark.asyncio
    async def test_flattens_multiple_completions(self):
        document = Document.from_text("# A\n# B")
        translator = MagicMock()
        translator.translate = AsyncMock(side_effect=[["a1", "a2"], []])

        result = await document.translate(translator, log_callback=MagicMock())

        assert result == ["a1", "a2"]
        assert translator.translate.await_count == 2

    @pytest.mark.asyncio
    async def test_by_fragment_keeps_completion_groups(self):
        document = Document.from_text("# A\n# B\n# C")
        translator = MagicMock()
        translator.translate = AsyncMock(side_effect=[["a1", "a2"], [], ["c"]])

        result = await document.translate_by_fragment(translator, log_callback=MagicMock())

        assert result == [["a1", "a2"], [], ["c"]]

    @pytest.mark.asyncio
    async def test_progress_bar_closed_on_failure(self, monkeypatch):
        progress_bar = MagicMock()
        monkeypatch.setattr("md_translator.core.document.tqdm", MagicMock(return_value=progress_bar))
        document = Document.from_text("# A\n# B\n# C")

        with pytest.raises(TranslationError):
            await document.translate(StubTranslator(fail_at=1))

        progress_bar.update.assert_called_once_with(1)
        progress_bar.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_progress_bar_closed_on_success(self, monkeypatch):
        progress_bar = MagicMock()
        monkeypatch.setattr("md_translator.core.document.tqdm", MagicMock(return_value=progress_bar))
        document = Document.from_text("# A\n# B")

        await document.translate(StubTranslator())

        assert progress_bar.update.call_count == 2
        progress_bar.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_progress_reported(self):
        document = Document.from_text("# A\n# B\n# C")
        log_callback = MagicMock()

        await document.translate(StubTranslator(), log_callback=log_callback)

        progress = [c for c in log_callback.call_args_list if c.args[0] == "fragment_progress"]
        assert [c.args[1] for c in progress] == [
            "Translating fragment 1/3",
            "Translating fragment 2/3",
            "Translating fragment 3/3",
        ]
        assert progress[0].kwargs['data']['type'] == 'progress'

    @pytest.mark.asyncio
    async def test_without_log_callback_uses_progress_bar(self):
        document = Document.from_text("# A\n# B")
        assert await document.translate(StubTranslator()) == ["<T:# A>", "<T:# B>"]

    @pytest.mark.asyncio
    async def test_with_ready_translator(self, make_config, stub_provider):
        """End to end with a real ReadyForTranslation and a stub provider."""
        document = Document.from_text("# A\ntext1\n## B\ntext2")
        translator = Translator.from_configuration(make_config(user_prompt_text="P"), provider=stub_provider)

        result = await document.translate(translator, log_callback=MagicMock())

        assert result == ["<T:P\n# A\ntext1>", "<T:P\n## B\ntext2>"]
