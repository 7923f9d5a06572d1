import logging
import re
from pathlib import Path
from typing import NamedTuple, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from md_translator.config import TranslatorConfiguration


logger = logging.getLogger(__name__)

SOURCE_PLACEHOLDER = "{source}"
TARGET_PLACEHOLDER = "{target}"
_PLACEHOLDER_PATTERN = re.compile(r"\{(?:source|target)\}")


class PromptPair(NamedTuple):
    """A pair of system and user prompts for LLM translation."""
    system: str
    user: str


# ============================================================================
# DEFAULT PROMPTS
# ============================================================================

DEFAULT_SYSTEM_PROMPT = "You are a helpful technical writing assistant."

DEFAULT_USER_PROMPT = """I am translating the documentation. I want you to act as an expert and technical {target} translator. Translate the Markdown content below from {source} into {target}. You must strictly follow the rules below.

- Never change the Markdown markup structure. Don't add or remove links. Do not change any URL.
- Never change the contents of code blocks even if they appear to have a bug.
- Always preserve the original line breaks. Do not add or remove blank lines.
- Do not include any explanations nor additional punctuations, only provide a translated markdown.
---"""


# ============================================================================
# PROMPT RESOLUTION
# ============================================================================

def substitute_languages(template: str, source_language: str, target_language: str) -> str:
    """
    Replace every {source} and {target} placeholder with the language names.

    This is a literal replacement: other braces in the template are left
    untouched, so prompts may contain JSON or code samples.
    """
    names = {SOURCE_PLACEHOLDER: source_language, TARGET_PLACEHOLDER: target_language}
    return _PLACEHOLDER_PATTERN.sub(lambda match: names[match.group(0)], template)


def _read_prompt_file(path: Union[str, Path]) -> Optional[str]:
    """Read an override prompt file, returning None when it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read prompt file %s (%s), using the default prompt", path, e)
        return None


def resolve_prompt(
    override_path: Optional[Union[str, Path]],
    override_text: Optional[str],
    default_template: str,
    source_language: str,
    target_language: str
) -> str:
    """
    Resolve a prompt from its overrides and substitute the language names.

    Precedence: override text, then override file, then the default
    template. A file that cannot be read falls back to the default without
    raising.

    Args:
        override_path: Optional path to a UTF-8 prompt file
        override_text: Optional literal prompt text
        default_template: Built-in prompt used when no override applies
        source_language: Replaces {source}
        target_language: Replaces {target}

    Returns:
        str: The resolved prompt
    """
    template = None
    if override_text is not None:
        template = override_text
    elif override_path:
        template = _read_prompt_file(override_path)

    if template is None:
        template = default_template

    return substitute_languages(template, source_language, target_language)


def resolve_prompts(config: 'TranslatorConfiguration') -> PromptPair:
    """Resolve the system prompt and the user prompt template of a configuration."""
    return PromptPair(
        system=resolve_prompt(
            config.system_prompt_file,
            config.system_prompt_text,
            DEFAULT_SYSTEM_PROMPT,
            config.source_language,
            config.target_language
        ),
        user=resolve_prompt(
            config.user_prompt_file,
            config.user_prompt_text,
            DEFAULT_USER_PROMPT,
            config.source_language,
            config.target_language
        )
    )
