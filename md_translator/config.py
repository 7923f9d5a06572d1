"""
Centralized configuration
"""
import os
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Get config directory (current working directory)
_env_file = Path.cwd() / '.env'

# Load .env file if it exists (environment variables already set take precedence)
_dotenv_result = load_dotenv(_env_file)

# Load from environment variables with defaults
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
API_ENDPOINT = os.getenv('API_ENDPOINT', 'https://api.openai.com/v1/chat/completions')
DEFAULT_MODEL = os.getenv('DEFAULT_MODEL', '4o')
MAX_TOKENS = int(os.getenv('MAX_TOKENS', '2000'))
TEMPERATURE = float(os.getenv('TEMPERATURE', '0.6'))
FREQUENCY_PENALTY = float(os.getenv('FREQUENCY_PENALTY', '1.0'))
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '900'))

# Default languages from environment
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'Japanese')
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', 'English')

# Optional prompt override files
SYSTEM_PROMPT_FILE = os.getenv('SYSTEM_PROMPT_FILE') or None
USER_PROMPT_FILE = os.getenv('USER_PROMPT_FILE') or None

# Debug mode
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

# Bounds accepted by the chat-completion API
MAX_TOKENS_LIMIT = 65535
TEMPERATURE_RANGE = (0.0, 2.0)
FREQUENCY_PENALTY_RANGE = (-2.0, 2.0)

if DEBUG_MODE:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug("=" * 60)
    _config_logger.debug(f"   .env loaded: {_dotenv_result} ({_env_file.absolute()})")
    _config_logger.debug(f"   API_ENDPOINT: {API_ENDPOINT}")
    _config_logger.debug(f"   DEFAULT_MODEL: {DEFAULT_MODEL}")
    _config_logger.debug(f"   MAX_TOKENS: {MAX_TOKENS}")
    _config_logger.debug(f"   TEMPERATURE: {TEMPERATURE}")
    _config_logger.debug(f"   FREQUENCY_PENALTY: {FREQUENCY_PENALTY}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   DEFAULT_SOURCE_LANGUAGE: {DEFAULT_SOURCE_LANGUAGE}")
    _config_logger.debug(f"   DEFAULT_TARGET_LANGUAGE: {DEFAULT_TARGET_LANGUAGE}")
    _config_logger.debug(f"   OPENAI_API_KEY: {'***' + OPENAI_API_KEY[-4:] if OPENAI_API_KEY else '(not set)'}")
    _config_logger.debug("=" * 60)


class Model(Enum):
    """Chat models the translator can target."""
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_35_TURBO = "gpt-3.5-turbo"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> 'Model':
        """
        Resolve a loose model name.

        Exact API names are accepted as-is. Otherwise "mini" selects
        gpt-4o-mini, "4o" gpt-4o, any other "4" gpt-4-turbo and "35" or "3.5"
        gpt-3.5-turbo.

        "mini" is checked before "4o" so that names like "4o-mini" or
        "gpt4o-mini" resolve to gpt-4o-mini rather than gpt-4o.

        Raises:
            ValueError: If the name matches no known model
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower()
        for model in cls:
            if key == model.value:
                return model

        if "mini" in key:
            return cls.GPT_4O_MINI
        if "4o" in key:
            return cls.GPT_4O
        if "35" in key or "3.5" in key:
            return cls.GPT_35_TURBO
        if "4" in key:
            return cls.GPT_4_TURBO
        raise ValueError(f"{name} is not a valid model")


@dataclass(frozen=True)
class TranslatorConfiguration:
    """
    Raw translation parameters.

    Holds everything needed to build a ReadyForTranslation translator. It is
    only a value: nothing here talks to the network or reads prompt files.
    """

    # Credential
    api_key: str = OPENAI_API_KEY

    # Request parameters
    model: Model = Model.parse(DEFAULT_MODEL)
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    frequency_penalty: float = FREQUENCY_PENALTY

    # Prompt overrides (text wins over file)
    system_prompt_file: Optional[str] = SYSTEM_PROMPT_FILE
    user_prompt_file: Optional[str] = USER_PROMPT_FILE
    system_prompt_text: Optional[str] = None
    user_prompt_text: Optional[str] = None

    # Languages
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE

    # Transport
    api_endpoint: str = API_ENDPOINT
    timeout: int = REQUEST_TIMEOUT

    @classmethod
    def from_cli_args(cls, args) -> 'TranslatorConfiguration':
        """Create config from CLI arguments"""
        return cls(
            api_key=getattr(args, 'openai_api_key', OPENAI_API_KEY),
            model=Model.parse(getattr(args, 'model', DEFAULT_MODEL)),
            max_tokens=getattr(args, 'max_tokens', MAX_TOKENS),
            temperature=getattr(args, 'temperature', TEMPERATURE),
            frequency_penalty=getattr(args, 'frequency_penalty', FREQUENCY_PENALTY),
            system_prompt_file=getattr(args, 'system_prompt_file', SYSTEM_PROMPT_FILE),
            user_prompt_file=getattr(args, 'user_prompt_file', USER_PROMPT_FILE),
            system_prompt_text=getattr(args, 'system_prompt', None),
            user_prompt_text=getattr(args, 'user_prompt', None),
            source_language=getattr(args, 'source_lang', DEFAULT_SOURCE_LANGUAGE),
            target_language=getattr(args, 'target_lang', DEFAULT_TARGET_LANGUAGE),
            api_endpoint=getattr(args, 'api_endpoint', API_ENDPOINT),
            timeout=getattr(args, 'timeout', REQUEST_TIMEOUT)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for logging (the credential is masked)"""
        return {
            'api_key': '***' + self.api_key[-4:] if self.api_key else '(not set)',
            'model': str(self.model),
            'max_tokens': self.max_tokens,
            'temperature': self.temperature,
            'frequency_penalty': self.frequency_penalty,
            'system_prompt_file': self.system_prompt_file,
            'user_prompt_file': self.user_prompt_file,
            'source_language': self.source_language,
            'target_language': self.target_language,
            'api_endpoint': self.api_endpoint,
            'timeout': self.timeout
        }
