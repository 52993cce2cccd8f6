import functools
import time
from typing import Any, Callable, TypeVar, cast

from calcengine.logger import session_logger

F = TypeVar("F", bound=Callable[..., Any])

MAX_ARG_LENGTH = 500


def _truncate(value: Any) -> str:
    text = str(value)
    if len(text) > MAX_ARG_LENGTH:
        return text[:MAX_ARG_LENGTH] + "...(truncated)"
    return text


def log_execution_time(func: F) -> F:
    """Decorator to log execution time and arguments of a function.

    Logs:
    - Start of execution with arguments (truncated if too large)
    - End of execution with duration
    - Exceptions if they occur, which are then re-raised
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        func_name = func.__qualname__

        session_logger.debug(
            f"Starting {func_name}",
            args=[_truncate(a) for a in args],
            kwargs={k: _truncate(v) for k, v in kwargs.items()},
        )

        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            session_logger.error(
                f"Failed {func_name}",
                duration_seconds=round(time.perf_counter() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                success=False,
            )
            raise

        session_logger.info(
            f"Completed {func_name}",
            duration_seconds=round(time.perf_counter() - start_time, 4),
            success=True,
        )
        return result

    return cast(F, wrapper)
