"""
Console logging for md-translator

Everything is written to stderr so that stdout only ever carries the
translated document. The translation core reports through a plain
log_callback(message, details, data) function; create_log_callback() turns
those calls into structured log entries.
"""
import re
import sys
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any, Callable, TextIO
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(Enum):
    """Kinds of log entries, each with its own console layout"""
    GENERAL = "general"
    LLM_REQUEST = "llm_request"
    LLM_RESPONSE = "llm_response"
    PROGRESS = "progress"
    FILE_OPERATION = "file_operation"
    TRANSLATION_START = "translation_start"
    TRANSLATION_END = "translation_end"
    ERROR_DETAIL = "error_detail"


class Palette:
    """ANSI escape codes, empty when colors are off"""

    _CODES = {
        'header': '\033[93m',
        'text': '\033[97m',
        'muted': '\033[90m',
        'prompt': '\033[38;5;214m',
        'reply': '\033[92m',
        'error': '\033[91m',
        'reset': '\033[0m',
    }

    def __init__(self, enabled: bool):
        for name, code in self._CODES.items():
            setattr(self, name, code if enabled else '')

    @classmethod
    def for_stream(cls, stream: TextIO, enable_colors: bool = True) -> 'Palette':
        isatty = getattr(stream, 'isatty', None)
        tty = bool(isatty and isatty())
        return cls(enable_colors and tty and 'NO_COLOR' not in os.environ)


@dataclass
class TranslationState:
    """What the logger knows about the run in progress"""
    current_fragment: int = 0
    total_fragments: int = 0
    source_lang: str = ''
    target_lang: str = ''
    model: str = ''
    started_at: Optional[datetime] = None
    in_progress: bool = False

    def start(self, data: Dict[str, Any]):
        self.source_lang = data.get('source_lang', 'Unknown')
        self.target_lang = data.get('target_lang', 'Unknown')
        self.model = data.get('model', 'Unknown')
        self.total_fragments = data.get('total_fragments', 0)
        self.current_fragment = 0
        self.started_at = datetime.now()
        self.in_progress = True

    def advance(self, current: int, total: Optional[int] = None):
        self.current_fragment = current
        if total is not None:
            self.total_fragments = total

    def finish(self):
        self.in_progress = False


class UnifiedLogger:
    """Structured logger shared by the CLI and the translation core"""

    def __init__(self,
                 name: str = "md-translator",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO,
                 storage_callback: Optional[Callable[[Dict[str, Any]], None]] = None,
                 stream: Optional[TextIO] = None):
        """
        Args:
            name: Logger name
            console_output: Whether entries are printed at all
            enable_colors: Use ANSI colors when the stream is a terminal
            min_level: Entries below this level are dropped
            storage_callback: Receives every kept entry as a dict
                (timestamp, level, type, message, data)
            stream: Console stream, sys.stderr at write time when not given
        """
        self.name = name
        self.console_output = console_output
        self.min_level = min_level
        self.storage_callback = storage_callback
        self._stream = stream
        self.palette = Palette.for_stream(self.stream, enable_colors)
        self.state = TranslationState()

        self._renderers = {
            LogType.LLM_REQUEST: self._render_llm_request,
            LogType.LLM_RESPONSE: self._render_llm_response,
            LogType.PROGRESS: self._render_progress,
            LogType.TRANSLATION_START: self._render_translation_start,
            LogType.TRANSLATION_END: self._render_translation_end,
            LogType.ERROR_DETAIL: self._render_error_detail,
        }

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    @staticmethod
    def _clock() -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _render_general(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        color = {
            LogLevel.DEBUG: p.muted,
            LogLevel.WARNING: p.header,
            LogLevel.ERROR: p.error,
            LogLevel.CRITICAL: p.error,
        }.get(level, p.text)
        prefix = "" if level == LogLevel.INFO else f"[{level.name}] "
        return f"{color}[{self._clock()}] {prefix}{message}{p.reset}"

    def _render_llm_request(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        lines = [f"{p.header}{'-' * 60}{p.reset}",
                 f"{p.header}[{self._clock()}] REQUEST{p.reset}"]
        if self.state.in_progress and self.state.total_fragments:
            lines.append(f"{p.header}Fragment {self.state.current_fragment}/{self.state.total_fragments}{p.reset}")
        if data.get('model'):
            lines.append(f"{p.muted}Model: {data['model']}{p.reset}")
        for role in ('system', 'user'):
            text = data.get(f'{role}_prompt')
            if text:
                lines.append(f"{p.muted}[{role.upper()}]{p.reset}")
                lines.append(f"{p.prompt}{text}{p.reset}")
        return '\n'.join(lines)

    def _render_llm_response(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        lines = [f"{p.reply}[{self._clock()}] RESPONSE{p.reset}"]
        if 'execution_time' in data:
            lines.append(f"{p.muted}Took {data['execution_time']:.2f}s{p.reset}")
        if data.get('response'):
            lines.append(f"{p.reply}{data['response']}{p.reset}")
        return '\n'.join(lines)

    def _render_progress(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        current = data.get('current', self.state.current_fragment)
        total = data.get('total', self.state.total_fragments)
        done = (current / total) if total else 0.0
        width = 20
        filled = int(width * done)
        bar = '#' * filled + '.' * (width - filled)
        return f"{p.text}[{self._clock()}] {message} [{bar}]{p.reset}"

    def _render_translation_start(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        lines = [f"{p.header}{message}{p.reset}",
                 f"{p.text}{self.state.source_lang} -> {self.state.target_lang}{p.reset}",
                 f"{p.muted}Model: {self.state.model}{p.reset}"]
        if data.get('input_file'):
            lines.append(f"{p.muted}Input: {data['input_file']}{p.reset}")
        return '\n'.join(lines)

    def _render_translation_end(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        lines = [f"{p.header}{message}{p.reset}"]
        if 'fragments' in data:
            lines.append(f"{p.text}Fragments: {data['fragments']}{p.reset}")
        if self.state.started_at:
            lines.append(f"{p.muted}Duration: {datetime.now() - self.state.started_at}{p.reset}")
        if data.get('output_file'):
            lines.append(f"{p.text}Saved to {data['output_file']}{p.reset}")
        return '\n'.join(lines)

    def _render_error_detail(self, level: LogLevel, message: str, data: Dict[str, Any]) -> str:
        p = self.palette
        lines = [f"{p.error}[{self._clock()}] ERROR: {message}{p.reset}"]
        if data.get('details') and data['details'] != message:
            lines.append(f"{p.error}Cause: {data['details']}{p.reset}")
        if data.get('input_file'):
            lines.append(f"{p.muted}Input: {data['input_file']}{p.reset}")
        return '\n'.join(lines)

    def _track(self, log_type: LogType, data: Dict[str, Any]):
        if log_type == LogType.TRANSLATION_START:
            self.state.start(data)
        elif log_type == LogType.PROGRESS and 'current' in data:
            self.state.advance(data['current'], data.get('total'))
        elif log_type == LogType.TRANSLATION_END:
            self.state.finish()

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Record one entry.

        Args:
            level: Log level
            message: Log message
            log_type: Selects the console layout
            data: Structured details kept with the entry
        """
        if level.value < self.min_level.value:
            return

        data = data or {}
        if log_type != LogType.TRANSLATION_END:
            self._track(log_type, data)

        if self.console_output:
            render = self._renderers.get(log_type, self._render_general)
            text = render(level, message, data)
            try:
                print(text, file=self.stream, flush=True)
            except UnicodeEncodeError:
                # Legacy console code pages
                print(text.encode('ascii', 'replace').decode('ascii'), file=self.stream, flush=True)

        if log_type == LogType.TRANSLATION_END:
            self._track(log_type, data)

        if self.storage_callback:
            self.storage_callback({
                'timestamp': datetime.now().isoformat(),
                'level': level.name,
                'type': log_type.value,
                'message': message,
                'data': data
            })

    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)

    def critical(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.CRITICAL, message, log_type, data)

    def create_log_callback(self) -> Callable[..., None]:
        """
        Build the log_callback(message, details, data) function passed to the core.

        The data 'type' key picks the entry kind. Without data, the message key
        decides: keys naming an error or warning get that level, and the
        segment count announcement sets the fragment total.
        """
        kinds = {
            'llm_request': (LogLevel.DEBUG, LogType.LLM_REQUEST),
            'llm_response': (LogLevel.DEBUG, LogType.LLM_RESPONSE),
            'progress': (LogLevel.INFO, LogType.PROGRESS),
        }

        def log_callback(message: str, details: str = "", data: Optional[Dict[str, Any]] = None):
            text = details or message
            if isinstance(data, dict) and data.get('type') in kinds:
                level, log_type = kinds[data['type']]
                self.log(level, text, log_type, data)
                return

            key = message.lower()
            if "error" in key:
                self.error(text, data=data)
            elif "warning" in key:
                self.warning(text, data=data)
            else:
                if message == "txt_translation_info_chunks1":
                    match = re.search(r'(\d+)\s+main segments', text)
                    if match:
                        self.state.total_fragments = int(match.group(1))
                self.info(text, data=data)

        return log_callback


_global_logger: Optional[UnifiedLogger] = None


def get_logger(name: str = "md-translator", **kwargs) -> UnifiedLogger:
    """Return the process-wide logger, creating it on first use"""
    global _global_logger
    if _global_logger is None:
        _global_logger = UnifiedLogger(name, **kwargs)
    elif 'storage_callback' in kwargs:
        _global_logger.storage_callback = kwargs['storage_callback']
    return _global_logger


def setup_cli_logger(enable_colors: bool = True) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    from md_translator.config import DEBUG_MODE

    return get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    )
