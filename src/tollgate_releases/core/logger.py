"""
Structured logging with key=value and JSON output support.

Wraps the standard library ``logging`` module so that every log line is a
snake_case event name followed by structured fields, either as
human-readable ``key=value`` pairs (default) or as one JSON object per line.

The [StructuredFormatter][tollgate_releases.core.logger.StructuredFormatter]
reads the ``structured_kv`` extra attached by
[Logger][tollgate_releases.core.logger.Logger]. When installed on the root
handler it unifies output from ``Logger`` and from the plain
``logging.getLogger(__name__)`` calls used in the ``nips`` and ``utils``
layers.

Examples:
    ```python
    from tollgate_releases.core.logger import Logger

    logger = Logger("browser")
    logger.info("event_ingested", id="ab12cd34", version="0.1.0")
    # Output: info browser event_ingested id=ab12cd34 version=0.1.0

    json_logger = Logger("browser", json_output=True)
    json_logger.info("subscription_started", relays=4)
    # Output: {"timestamp": "...", "level": "info", "service": "browser", ...}
    ```
"""

import datetime
import json
import logging
from typing import Any, ClassVar


def _truncate(value: str, max_value_length: int | None) -> str:
    if max_value_length and len(value) > max_value_length:
        return value[:max_value_length] + f"...<truncated {len(value) - max_value_length} chars>"
    return value


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values longer than ``max_value_length`` are truncated. Values that are
    empty or contain whitespace, equals signs or quotes are escaped and
    wrapped in double quotes.

    Args:
        kwargs: Key-value pairs to format.
        max_value_length: Maximum characters per value before truncation.
            Pass None to disable truncation.
        prefix: String prepended to the output (default: single space).

    Returns:
        Formatted string, e.g. ``' version=1.0 url="a b"'``, or an empty
        string if ``kwargs`` is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = _truncate(str(v), max_value_length)
        if not s or " " in s or "=" in s or '"' in s or "'" in s:
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")

    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Formats log records as ``level name message key=value ...``.

    Records without ``structured_kv`` (plain ``logging.getLogger()`` calls)
    are emitted with the same prefix and no trailing pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        return base


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    All public methods mirror the standard logging API with an added
    ``**kwargs`` parameter holding the structured fields.

    Examples:
        ```python
        logger = Logger("catalogue")
        logger.debug("event_duplicate", id="ab12cd34")
        logger.warning("subscription_failed", error="relay unreachable")
        ```
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        """Initialize a structured logger.

        Args:
            name: Logger name, typically the service or component name.
            json_output: If True, emit JSON objects instead of key=value pairs.
            max_value_length: Maximum character length for individual values
                before truncation. Defaults to 1000.
        """
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = max_value_length

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_json(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        """Format message and kwargs as a JSON string for log aggregators."""
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **kwargs,
        }
        return json.dumps(record, default=str)

    def _make_extra(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Build the ``extra`` dict with values pre-truncated for the formatter."""
        if not kwargs:
            return {}
        truncated = {
            k: _truncate(str(v), self._max_value_length)
            if self._max_value_length and len(str(v)) > self._max_value_length
            else v
            for k, v in kwargs.items()
        }
        return {"structured_kv": truncated}

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._json_output:
            name = "error" if exc_info else logging.getLevelName(level).lower()
            self._logger.log(level, self._format_json(msg, name, kwargs), exc_info=exc_info)
        else:
            self._logger.log(level, msg, extra=self._make_extra(kwargs), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a DEBUG level message with optional key=value pairs."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an INFO level message with optional key=value pairs."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log a WARNING level message with optional key=value pairs."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with optional key=value pairs."""
        self._log(logging.ERROR, msg, kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log a CRITICAL level message with optional key=value pairs."""
        self._log(logging.CRITICAL, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with the current exception traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
