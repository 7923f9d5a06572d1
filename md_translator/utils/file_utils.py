"""
File utilities for translation operations
"""
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

import aiofiles

from md_translator.config import TranslatorConfiguration
from md_translator.core.document import Document
from md_translator.core.translator import Translator
from md_translator.core.llm import LLMProvider


def get_unique_output_path(output_path):
    """
    Generate a unique output path by adding a number suffix if the file already exists.

    Args:
        output_path (str): Desired output path

    Returns:
        str: Unique output path (original or with numeric suffix)

    Examples:
        notes.md -> notes.md (if doesn't exist)
        notes.md -> notes (1).md (if notes.md exists)
    """
    path = Path(output_path)

    if not path.exists():
        return output_path

    counter = 1
    while True:
        candidate = path.parent / f"{path.stem} ({counter}){path.suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1


async def read_input(words: Optional[Sequence[str]] = None,
                     input_filepath: Optional[str] = None,
                     stdin: Optional[TextIO] = None) -> str:
    """
    Read the text to translate.

    Literal words win over an input file, which wins over standard input.

    Args:
        words: Text given on the command line, joined with a space
        input_filepath (str): Path to a UTF-8 Markdown file
        stdin: Stream read when neither words nor a file are given

    Returns:
        str: The text, trimmed
    """
    if words:
        text = " ".join(words)
    elif input_filepath:
        async with aiofiles.open(input_filepath, 'r', encoding='utf-8') as f:
            text = await f.read()
    else:
        text = (stdin or sys.stdin).read()
    return text.strip()


async def write_output(content: str, output_filepath: str, log_callback: Optional[Callable] = None):
    """Write the formatted translation to a file"""
    async with aiofiles.open(output_filepath, 'w', encoding='utf-8') as f:
        await f.write(content)
    if log_callback:
        log_callback("txt_save_success", f"Translation saved: '{output_filepath}'")


async def translate_markdown(text: str, config: TranslatorConfiguration,
                             log_callback: Optional[Callable] = None,
                             provider: Optional[LLMProvider] = None) -> Tuple[Document, List[List[str]]]:
    """
    Segment a Markdown text and translate it.

    Args:
        text (str): Trimmed Markdown text
        config: Translation parameters
        log_callback (callable): Logging callback
        provider: Provider to use instead of the configured OpenAI-compatible one

    Returns:
        tuple: (document, translations), translations holding one list of
            completion texts per fragment

    Raises:
        EmptyInputError: If the text is empty
        ConfigError: If the configuration is invalid
        TranslationError: If a fragment fails to translate
    """
    document = Document.from_text(text)
    if log_callback:
        log_callback("txt_translation_info_chunks1", f"Split into {len(document)} main segments")

    translator = Translator.from_configuration(config, provider=provider, log_callback=log_callback)
    async with translator:
        if log_callback:
            log_callback("txt_translation_loop_start", "Starting segment translation...")
        translations = await document.translate_by_fragment(translator, log_callback=log_callback)

    return document, translations
