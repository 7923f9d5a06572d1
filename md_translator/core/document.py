"""
Document-level orchestration: segment a text, then translate it fragment by fragment.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from tqdm.auto import tqdm

from .exceptions import TranslationError
from .segmenter import split

if TYPE_CHECKING:
    from .translator import ReadyForTranslation


@dataclass(frozen=True)
class Document:
    """
    A Markdown document split into heading-delimited fragments.

    Attributes:
        fragments: Fragments in source order
    """
    fragments: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> 'Document':
        """
        Segment a text into a document.

        Raises:
            EmptyInputError: If the text is empty
        """
        return cls(fragments=tuple(split(text)))

    def __len__(self) -> int:
        return len(self.fragments)

    async def translate_by_fragment(self, translator: 'ReadyForTranslation',
                                    log_callback: Optional[Callable] = None) -> List[List[str]]:
        """
        Translate every fragment, strictly in order.

        Fragment i+1 is only sent once fragment i's response is back. The
        first failure stops the run: later fragments are never sent.

        Args:
            translator: A ReadyForTranslation translator
            log_callback (callable): Logging callback for progress messages.
                A tqdm progress bar is shown when not given.

        Returns:
            list: One list of completion texts per fragment, in fragment order

        Raises:
            TranslationError: From the first fragment that failed
        """
        total_fragments = len(self.fragments)
        result: List[List[str]] = []

        progress_bar = tqdm(total=total_fragments, desc="Translating", unit="fragment") if not log_callback else None
        try:
            for i, fragment in enumerate(self.fragments):
                if log_callback:
                    log_callback("fragment_progress", f"Translating fragment {i + 1}/{total_fragments}", data={
                        'type': 'progress',
                        'current': i + 1,
                        'total': total_fragments,
                        'percentage': (i / total_fragments) * 100
                    })

                try:
                    translations = await translator.translate(fragment)
                except TranslationError as e:
                    if e.fragment_index is None:
                        e.fragment_index = i
                        e.context['fragment_index'] = i
                    raise

                result.append(list(translations))
                if progress_bar is not None:
                    progress_bar.update(1)
        finally:
            if progress_bar is not None:
                progress_bar.close()

        return result

    async def translate(self, translator: 'ReadyForTranslation',
                        log_callback: Optional[Callable] = None) -> List[str]:
        """
        Translate every fragment and flatten the completion texts in order.

        See translate_by_fragment() for ordering and failure behavior.
        """
        per_fragment = await self.translate_by_fragment(translator, log_callback=log_callback)
        return [text for texts in per_fragment for text in texts]
