"""
Centralized logging configuration for the ConfTree package.

Every ConfTree module obtains its logger through get_logger(), so the output
format (JSON records or plain text lines), level and destination are decided
in one place. The defaults below can be overridden through the CONFTREE_LOG_* environment variables or by calling
configure_logging() / set_log_level() at runtime.
"""

import json
import logging
import os
import socket
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, Union, List

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Environment variables that override the defaults below
LOG_LEVEL_ENV_VAR = 'CONFTREE_LOG_LEVEL'
LOG_FORMAT_ENV_VAR = 'CONFTREE_LOG_FORMAT'  # 'json' or 'text'
LOG_FILE_ENV_VAR = 'CONFTREE_LOG_FILE'

LOGGING_DEFAULTS: Dict[str, Any] = {
    "level": "info",
    "format": "json",
    "file": None,
    "max_bytes": 10 * 1024 * 1024,  # 10 MB
    "backup_count": 5,
}

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

_logging_configured = False

# Fields attached to every JSON record
_service_info = {
    'service_name': 'conftree',
    'service_version': None,  # filled in by configure_logging()
    'hostname': socket.gethostname(),
}


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': self.formatTime(record, '%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in _service_info.items():
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info),
            }

        extras = getattr(record, 'extras', None)
        if extras:
            for key, value in extras.items():
                log_data.setdefault(key, value)

        return json.dumps(log_data, default=str)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that attaches a fixed set of context fields to every record.

    Fields passed through ``extra=`` on an individual call are merged on top
    of the adapter's own context and exposed to JsonFormatter as ``extras``.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extras = dict(self.extra)
        extras.update(kwargs.get('extra') or {})

        kwargs = dict(kwargs)
        kwargs['extra'] = {'extras': extras}
        return msg, kwargs


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR) or LOGGING_DEFAULTS['level']
    if isinstance(level, str):
        return LOG_LEVELS.get(level.lower(), logging.INFO)
    return level


def configure_logging(level: Optional[Union[int, str]] = None,
                      format_str: Optional[str] = None,
                      use_json: Optional[bool] = None,
                      log_file: Optional[str] = None) -> None:
    """
    Configure logging for the ConfTree package.

    Calling this more than once without arguments is a no-op; passing any
    argument reconfigures the handlers.

    Args:
        level: Log level (default: CONFTREE_LOG_LEVEL or 'info')
        format_str: Log format string used for text output
        use_json: Whether to emit JSON records (default: CONFTREE_LOG_FORMAT or 'json')
        log_file: Optional path to a rotating log file (default: CONFTREE_LOG_FILE)
    """
    global _logging_configured

    if _logging_configured and level is None and format_str is None and use_json is None and log_file is None:
        return

    resolved_level = _resolve_level(level)
    format_str = format_str or DEFAULT_LOG_FORMAT

    if use_json is None:
        env_format = os.environ.get(LOG_FORMAT_ENV_VAR, '').lower()
        use_json = (env_format or LOGGING_DEFAULTS['format']) == 'json'

    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV_VAR) or LOGGING_DEFAULTS['file']

    # Handlers are installed on the package logger, not the root logger,
    # so applications embedding ConfTree keep control of their own output.
    package_logger = logging.getLogger('ConfTree')
    package_logger.setLevel(resolved_level)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        try:
            handlers.append(RotatingFileHandler(
                log_file,
                maxBytes=LOGGING_DEFAULTS['max_bytes'],
                backupCount=LOGGING_DEFAULTS['backup_count'],
            ))
        except OSError as e:
            print(f"Warning: Could not create log file {log_file}: {e}", file=sys.stderr)

    for handler in handlers:
        if use_json:
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(logging.Formatter(format_str))
        package_logger.addHandler(handler)

    _logging_configured = True

    try:
        from ConfTree import __version__
        _service_info['service_version'] = __version__
    except ImportError:
        pass

    log_mode = 'JSON structured' if use_json else 'text'
    package_logger.debug(f"Logging configured with level: {logging.getLevelName(resolved_level)}, format: {log_mode}")


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the log level for ConfTree loggers.

    Args:
        level: A level name ('debug', 'info', 'warning', 'error', 'critical')
               or a logging module constant.

    Raises:
        ValueError: If a level name is not recognised.
    """
    if isinstance(level, str):
        level_str = level.lower()
        if level_str not in LOG_LEVELS:
            valid_levels = ", ".join(LOG_LEVELS.keys())
            raise ValueError(f"Invalid log level: {level}. Valid levels are: {valid_levels}")
        level = LOG_LEVELS[level_str]

    configure_logging()
    logging.getLogger('ConfTree').setLevel(level)


def get_logger(name: str, extra: Optional[Dict[str, Any]] = None) -> Union[logging.Logger, StructuredLoggerAdapter]:
    """
    Get a logger for the specified name with the ConfTree configuration.

    Returns a StructuredLoggerAdapter when JSON logging is active, otherwise
    a standard Logger.

    Example:
        >>> from ConfTree.utils.logging import get_logger
        >>> logger = get_logger(__name__, {'component': 'parser'})
        >>> logger.debug("Parsed document", extra={'keys': 3})
    """
    configure_logging()

    logger = logging.getLogger(name)

    package_logger = logging.getLogger('ConfTree')
    if package_logger.handlers and isinstance(package_logger.handlers[0].formatter, JsonFormatter):
        return StructuredLoggerAdapter(logger, extra)

    return logger
