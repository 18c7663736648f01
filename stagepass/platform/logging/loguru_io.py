"""
Call tracing for use cases, repositories and controllers.

`@Logger.io` logs masked arguments on entry and the masked result with its
duration on return (both at DEBUG). A failure is logged once, at the
innermost traced frame: CustomBaseError as a one-line ERROR, anything else
with its traceback. The exception always propagates.
"""

from functools import wraps
from inspect import iscoroutinefunction
from time import perf_counter
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from stagepass.platform.config.core_setting import settings
from stagepass.platform.exception.exceptions import CustomBaseError
from stagepass.platform.logging.loguru_io_config import LogField, custom_logger, ticketing_tag
from stagepass.platform.logging.loguru_io_utils import describe_call_target, masked


_P = ParamSpec('_P')
_T = TypeVar('_T')

_LOGGED_FLAG = '_stagepass_logged'


class _CallTrace:
    def __init__(self, func: Callable[..., Any], *, truncate: bool) -> None:
        self.log = custom_logger.bind(**{LogField.CALL_TARGET: describe_call_target(func)})
        self.truncate = truncate

    def enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> float:
        if settings.DEBUG:
            self.log.debug(
                f'-> args={masked(args, truncate=self.truncate)} '
                f'kwargs={masked(kwargs, truncate=self.truncate)}'
            )
        return perf_counter()

    def leave(self, result: Any, started: float) -> None:
        if settings.DEBUG:
            elapsed_ms = (perf_counter() - started) * 1000
            self.log.debug(f'<- {masked(result, truncate=self.truncate)} ({elapsed_ms:.1f}ms)')

    def fail(self, exc: Exception) -> None:
        if getattr(exc, _LOGGED_FLAG, False):
            return
        setattr(exc, _LOGGED_FLAG, True)
        if isinstance(exc, CustomBaseError):
            self.log.error(f'{type(exc).__name__}({exc.status_code}): {exc.message}')
        else:
            self.log.opt(exception=exc).error(f'{type(exc).__name__}: {exc}')


def _traced(func: Callable[_P, _T], *, truncate: bool) -> Callable[_P, _T]:
    trace = _CallTrace(func, truncate=truncate)

    if iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            started = trace.enter(args, kwargs)
            try:
                result = await func(*args, **kwargs)  # type: ignore[misc]
            except Exception as exc:
                trace.fail(exc)
                raise
            trace.leave(result, started)
            return result

        return cast(Callable[_P, _T], async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        started = trace.enter(args, kwargs)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            trace.fail(exc)
            raise
        trace.leave(result, started)
        return result

    return cast(Callable[_P, _T], sync_wrapper)


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(
        func: None = ..., *, truncate: bool = ...
    ) -> Callable[[Callable[_P, _T]], Callable[_P, _T]]: ...

    @staticmethod
    def io(func: Callable[..., Any] | None = None, *, truncate: bool = True) -> Any:
        if func is not None:
            return _traced(func, truncate=truncate)
        return lambda f: _traced(f, truncate=truncate)

    @staticmethod
    def ticketing(
        *, concert_id: Any = None, user_id: Any = None, reservation_id: Any = None
    ) -> 'LoguruLogger':
        """Logger whose lines are tagged with the concert/user/reservation involved."""
        return custom_logger.bind(
            **{
                LogField.TICKETING: ticketing_tag(
                    concert_id=concert_id, user_id=user_id, reservation_id=reservation_id
                )
            }
        )
