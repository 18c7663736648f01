"""
loguru setup for StagePass.

One stdout sink, plus an hourly file under LOG_DIR when DEBUG is on. Every
line carries the worker that wrote it and the traced call site; reservation
and catalog events also carry the concert, user and reservation they are about.
"""

from enum import StrEnum
import logging
import os
import sys
from typing import Any

from loguru import logger as loguru_logger

from stagepass.platform.config.core_setting import settings
from stagepass.platform.constant.path import LOG_DIR
from stagepass.platform.logging.service_context import get_service_context


class LogField(StrEnum):
    WORKER = 'worker'
    CALL_TARGET = 'call_target'
    TICKETING = 'ticketing'


LOG_FORMAT = (
    f'<c>{{extra[{LogField.WORKER}]}}</> | <lvl>{{level:<8}}</> | '
    f'<y>{{extra[{LogField.CALL_TARGET}]}}</> | {{message}}'
    f'<m>{{extra[{LogField.TICKETING}]}}</> | <lk>{{elapsed}}</>'
)


def ticketing_tag(
    *, concert_id: Any = None, user_id: Any = None, reservation_id: Any = None
) -> str:
    parts = [
        f'{name}={value}'
        for name, value in (
            ('concert', concert_id),
            ('user', user_id),
            ('reservation', reservation_id),
        )
        if value is not None
    ]
    return f' [{" ".join(parts)}]' if parts else ''


class InterceptHandler(logging.Handler):
    """Forward stdlib records (granian, sqlalchemy, alembic) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _configure() -> None:
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    handlers: list[dict[str, Any]] = [
        {'sink': sys.stdout, 'format': LOG_FORMAT, 'level': level, 'enqueue': True}
    ]
    if settings.DEBUG:
        log_dir = os.environ.get('TEST_LOG_DIR', str(LOG_DIR))
        handlers.append(
            {
                'sink': f'{log_dir}/stagepass_{{time:YYYY-MM-DD_HH}}.log',
                'format': LOG_FORMAT,
                'level': level,
                'rotation': '1 hour',
                'retention': '7 days',
                'compression': 'gz',
                'enqueue': True,
            }
        )

    loguru_logger.configure(
        handlers=handlers,
        extra={
            LogField.WORKER: get_service_context(),
            LogField.CALL_TARGET: '-',
            LogField.TICKETING: '',
        },
    )
    # Library DEBUG chatter (asyncio selector, aiosqlite statements) stays out
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)


_configure()
custom_logger = loguru_logger
