import asyncio
import functools
from typing import TypeVar, Callable, Optional
from loguru import logger
from ..exceptions import MultiStorageException

T = TypeVar('T')


def log_exceptions(
    log_level: str = "ERROR",
    include_traceback: bool = True,
    custom_message: Optional[str] = None
):
    """
    Decorator to log exceptions.

    Args:
        log_level: Log level for exception logging
        include_traceback: Whether to include traceback in log
        custom_message: Custom message to include in log
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                message = custom_message or f"Exception in {func.__name__}"
                if include_traceback:
                    logger.opt(exception=True).log(log_level, f"{message}: {e}")
                else:
                    logger.log(log_level, f"{message}: {e}")
                raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                message = custom_message or f"Exception in {func.__name__}"
                if include_traceback:
                    logger.opt(exception=True).log(log_level, f"{message}: {e}")
                else:
                    logger.log(log_level, f"{message}: {e}")
                raise

        # Return appropriate wrapper based on function type
        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator


def _convert(e: Exception, exception_map: dict):
    for source_exc, target_exc in exception_map.items():
        if isinstance(e, source_exc):
            details = {"original_exception": type(e).__name__}
            error_code = getattr(e, "error_code", None)
            if error_code is not None:
                details["service_error_code"] = str(error_code)
            return target_exc(str(e), details=details)
    return None


def convert_exceptions(exception_map: dict):
    """
    Decorator to convert third-party exceptions to adapter exceptions.

    Adapter exceptions pass through untouched; converted exceptions keep the
    original as ``__cause__``.

    Args:
        exception_map: Dictionary mapping exception types to adapter exception types
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except MultiStorageException:
                raise
            except Exception as e:
                converted = _convert(e, exception_map)
                if converted is None:
                    raise
                raise converted from e

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except MultiStorageException:
                raise
            except Exception as e:
                converted = _convert(e, exception_map)
                if converted is None:
                    raise
                raise converted from e

        # Return appropriate wrapper based on function type
        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator
