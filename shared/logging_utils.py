import logging
import os
import re
from typing import Iterable, Optional, Sequence, Set

_REDACTED_PLACEHOLDER = "[REDACTED]"
_SENSITIVE_KEY_PARTS = ("TOKEN", "SECRET", "KEY", "PASS", "PWD")
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# drawings travel as base64 data URLs; keep only the media type and size
_DATA_URL_RE = re.compile(r"data:(image/[\w.+-]+);base64,([A-Za-z0-9+/=]{32,})")


def _is_sensitive_env_var(name: str) -> bool:
    upper_name = name.upper()
    return any(part in upper_name for part in _SENSITIVE_KEY_PARTS)


def collect_secrets(extra_values: Optional[Iterable[Optional[str]]] = None) -> Sequence[str]:
    """Return secret-looking environment values plus ``extra_values``."""

    secrets: Set[str] = {
        value for key, value in os.environ.items() if value and _is_sensitive_env_var(key)
    }
    for value in extra_values or ():
        if isinstance(value, str) and value:
            secrets.add(value)
    # longest first so a key that contains another key is masked whole
    return tuple(sorted(secrets, key=len, reverse=True))


def _shorten_data_url(match: "re.Match[str]") -> str:
    return f"data:{match.group(1)};base64,<{len(match.group(2))} chars>"


class RedactingFormatter(logging.Formatter):
    """Wrap another formatter; mask API keys and shorten inline drawings."""

    def __init__(
        self,
        base_formatter: Optional[logging.Formatter] = None,
        secrets: Optional[Sequence[str]] = None,
        placeholder: str = _REDACTED_PLACEHOLDER,
    ) -> None:
        super().__init__()
        self._base_formatter = base_formatter or logging.Formatter(_DEFAULT_FORMAT)
        self._secrets: Sequence[str] = tuple(secrets or ())
        self._placeholder = placeholder
        self.converter = self._base_formatter.converter

    def update_secrets(self, secrets: Sequence[str]) -> None:
        self._secrets = tuple(secrets)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, self._placeholder)
        return _DATA_URL_RE.sub(_shorten_data_url, text)

    def format(self, record: logging.LogRecord) -> str:
        return self.redact(self._base_formatter.format(record))

    def formatException(self, ei):
        return self.redact(self._base_formatter.formatException(ei))

    def formatTime(self, record, datefmt=None):
        return self._base_formatter.formatTime(record, datefmt)


def _install(handler: logging.Handler, secrets: Sequence[str]) -> None:
    formatter = handler.formatter
    if isinstance(formatter, RedactingFormatter):
        formatter.update_secrets(secrets)
    else:
        handler.setFormatter(RedactingFormatter(formatter, secrets))


def configure_logging(
    *,
    level: Optional[str] = None,
    extra_values: Optional[Iterable[Optional[str]]] = None,
) -> None:
    """Set the root level from ``LOG_LEVEL`` and redact secrets on every handler."""

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_FORMAT)
    root_logger.setLevel(level)

    secrets = collect_secrets(extra_values)

    for handler in root_logger.handlers:
        _install(handler, secrets)

    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            for handler in logger_obj.handlers:
                _install(handler, secrets)
