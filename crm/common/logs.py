import json
import logging
import sys
from typing import Any

from loguru import logger

from crm import settings
from crm.common import context

# Stdlib loggers that only repeat what the request middleware already logs,
# or chatter at INFO (pymongo heartbeats)
QUIET_LOGGERS = {
    'uvicorn.access': logging.CRITICAL,
    'pymongo': logging.WARNING,
}

LEVEL_ICONS = {
    'DEBUG': '🔬',
    'WARNING': '⚠️',
    'ERROR': '💣💥',
    'CRITICAL': '🚨',
}


class InterceptHandler(logging.Handler):
    """
    Forwards stdlib records (uvicorn, pymongo, starlette) to loguru so every
    line shares one format and carries the request id.
    See https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller, not the logging module
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def deployed_log_formatter(record: dict[str, Any]) -> str:
    """
    One JSON object per line for the log shipper
    """
    payload = dict(record['extra'])
    payload.update(
        timestamp=record['time'].strftime('%Y-%m-%dT%H:%M:%S,%f'),
        level=record['level'].name,
        logger=record['name'],
        message=record['message'],
    )
    # Lines logged outside the middleware's contextualize block
    payload.setdefault('request_id', context.get_safe_request_id() or '')

    exc = record['exception']
    if exc is not None:
        # Tracebacks go to sentry, the log line keeps the summary
        record['exception'] = None
        payload['error'] = {
            'exception_type': type(exc.value).__name__,
            'message': str(exc.value),
        }

    record['extra']['serialized'] = json.dumps(payload, default=str)
    return '{extra[serialized]}\n'


def local_log_formatter(record: dict[str, Any]) -> str:
    """
    Coloured console lines, access lines show the request duration
    """
    duration = record['extra'].get('duration')
    if duration is None:
        icon = LEVEL_ICONS.get(record['level'].name, '✏️')
        log_format = (
            '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> '
            f'| {icon} '
            ' <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> '
            '- <level>{message}</level>\n'
        )
    else:
        log_format = (
            '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> '
            f'| <magenta>⏱️ {duration}s</magenta> '
            '- <level>{message}</level>\n'
        )

    if record['exception'] is not None:
        log_format += '{exception}\n'
    return log_format


def configure_logging() -> None:
    # Everything through the root logger into loguru
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)
    for name in list(logging.root.manager.loggerDict):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logger.remove()
    logger.add(
        sys.stdout,
        serialize=False,
        backtrace=False,
        diagnose=False,
        level=settings.LOG_LEVEL,
        format=deployed_log_formatter if settings.IS_DEPLOYED_ENV else local_log_formatter,
    )
    logger.info(f'logging level: {settings.LOG_LEVEL} ({settings.ENVIRONMENT})')
