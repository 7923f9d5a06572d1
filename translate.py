"""
Command-line interface for Markdown translation
"""
import sys
import argparse
import asyncio

from md_translator.config import (
    DEFAULT_MODEL, API_ENDPOINT, OPENAI_API_KEY, MAX_TOKENS, TEMPERATURE, FREQUENCY_PENALTY,
    REQUEST_TIMEOUT, DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE,
    SYSTEM_PROMPT_FILE, USER_PROMPT_FILE, Model, TranslatorConfiguration
)
from md_translator.core.exceptions import MarkdownTranslatorError
from md_translator.utils.file_utils import (
    read_input, write_output, translate_markdown, get_unique_output_path
)
from md_translator.utils.output_formatter import format_text, format_html_table
from md_translator.utils.unified_logger import setup_cli_logger, LogType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate a Markdown text with an OpenAI-compatible chat model. "
                    "The text is split at its headings and translated section by section."
    )
    parser.add_argument("words", nargs="*", help="Text to translate. Multiple words are joined with a space. Read from --input or stdin when omitted.")
    parser.add_argument("-i", "--input", default=None, help="Path to a Markdown file to translate.")
    parser.add_argument("-o", "--output", default=None, help="Path to the output file. Printed to stdout if not specified.")
    parser.add_argument("-sl", "--source_lang", default=DEFAULT_SOURCE_LANGUAGE, help=f"Source language (default: {DEFAULT_SOURCE_LANGUAGE}).")
    parser.add_argument("-tl", "--target_lang", default=DEFAULT_TARGET_LANGUAGE, help=f"Target language (default: {DEFAULT_TARGET_LANGUAGE}).")
    parser.add_argument("-m", "--model", type=Model.parse, default=DEFAULT_MODEL,
                        help=f"Model to use: 'mini' selects gpt-4o-mini, '4o' gpt-4o, other '4' gpt-4-turbo, '35' gpt-3.5-turbo (default: {DEFAULT_MODEL}).")
    parser.add_argument("--max_tokens", type=int, default=MAX_TOKENS, help=f"Maximum number of tokens to generate per fragment (default: {MAX_TOKENS}).")
    parser.add_argument("--temperature", type=float, default=TEMPERATURE, help=f"Sampling temperature between 0 and 2 (default: {TEMPERATURE}).")
    parser.add_argument("--frequency_penalty", type=float, default=FREQUENCY_PENALTY, help=f"Frequency penalty between -2.0 and 2.0 (default: {FREQUENCY_PENALTY}).")
    parser.add_argument("--system_prompt_file", default=SYSTEM_PROMPT_FILE, help="File overriding the default system prompt.")
    parser.add_argument("--user_prompt_file", default=USER_PROMPT_FILE, help="File overriding the default user prompt. {source} and {target} are replaced with the language names.")
    parser.add_argument("--system_prompt", default=None, help="System prompt text (takes precedence over --system_prompt_file).")
    parser.add_argument("--user_prompt", default=None, help="User prompt text (takes precedence over --user_prompt_file).")
    parser.add_argument("--openai_api_key", default=OPENAI_API_KEY, help="OpenAI API key (default: OPENAI_API_KEY environment variable).")
    parser.add_argument("--api_endpoint", default=API_ENDPOINT, help=f"Chat-completions endpoint (default: {API_ENDPOINT}).")
    parser.add_argument("--timeout", type=int, default=REQUEST_TIMEOUT, help=f"Request timeout in seconds (default: {REQUEST_TIMEOUT}).")
    parser.add_argument("--html", action="store_true", help="Write a two-column HTML table (original | translation) instead of plain text.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


async def run(args, logger) -> int:
    config = TranslatorConfiguration.from_cli_args(args)
    log_callback = logger.create_log_callback()

    text = await read_input(args.words, args.input)

    logger.info("Translation Started", LogType.TRANSLATION_START, {
        'source_lang': config.source_language,
        'target_lang': config.target_language,
        'model': str(config.model),
        'input_file': args.input
    })

    document, translations = await translate_markdown(text, config, log_callback=log_callback)

    if args.html:
        content = format_html_table(
            document.fragments, translations,
            source_language=config.source_language,
            target_language=config.target_language
        )
    else:
        content = format_text([completion for texts in translations for completion in texts])

    output_path = None
    if args.output:
        output_path = get_unique_output_path(args.output)
        await write_output(content, output_path, log_callback=log_callback)
    else:
        sys.stdout.write(content)
        sys.stdout.flush()

    logger.info("Translation Completed Successfully", LogType.TRANSLATION_END, {
        'output_file': output_path,
        'fragments': len(document.fragments)
    })
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_cli_logger(enable_colors=not args.no_color)

    if not args.openai_api_key:
        parser.error("--openai_api_key is required (or set OPENAI_API_KEY)")

    try:
        return asyncio.run(run(args, logger))
    except (MarkdownTranslatorError, OSError) as e:
        logger.error(f"Translation failed: {e}", LogType.ERROR_DETAIL, {
            'details': repr(e.__cause__) if e.__cause__ else str(e),
            'input_file': args.input
        })
        return 1
    except KeyboardInterrupt:
        logger.warning("Translation interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
