"""Observability framework for rift-coach.

This module configures structured logging and provides the tracing
decorators used across the adapter and service layers.
"""

import asyncio
import functools
import json
import re
import sys
import time
import traceback
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        structlog.processors.dict_tracebacks,
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),  # type: ignore[list-item]
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

# Get logger instance
logger = structlog.get_logger()

# Type variable for generic decorator
F = TypeVar("F", bound=Callable[..., Any])

# Sensitive data redaction pattern
_SENSITIVE_KEY_RE = re.compile(r"(token|key|secret|password|pass|authorization|auth)", re.IGNORECASE)


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _redact_obj(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: (_mask_scalar(v) if _SENSITIVE_KEY_RE.search(str(k)) else _redact_obj(v)) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_redact_obj(i) for i in obj]
    return obj


def _safe_serialize_kv(key: str, value: Any, max_length: int) -> Any:
    ser = _serialize_value(value, max_length)
    if _SENSITIVE_KEY_RE.search(str(key)):
        if isinstance(ser, dict | list):
            return _redact_obj(ser)
        return _mask_scalar(ser)
    return ser


class FunctionTrace(BaseModel):
    """Execution trace of a single decorated call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None, description="Execution duration in milliseconds")

    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    result: Any | None = Field(default=None)

    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)

    is_async: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging.

    Args:
        value: Value to serialize
        max_length: Maximum string length for truncation

    Returns:
        Serializable representation of the value
    """
    try:
        if isinstance(value, BaseModel):
            json_str = value.model_dump_json()
        else:
            json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def _new_trace(func: Callable[..., Any], is_async: bool, metadata: dict[str, Any] | None) -> FunctionTrace:
    function_name = f"{func.__module__}.{func.__qualname__}"
    return FunctionTrace(
        function_name=function_name,
        execution_id=f"{function_name}_{int(time.time() * 1000000)}",
        is_async=is_async,
        metadata=metadata or {},
    )


def _capture_args(trace: FunctionTrace, args: tuple[Any, ...], kwargs: dict[str, Any], max_length: int) -> None:
    trace.args = [_serialize_value(arg, max_length) for arg in args]
    trace.kwargs = {k: _safe_serialize_kv(k, v, max_length) for k, v in kwargs.items()}


def _log_failure(trace: FunctionTrace, exc: Exception, start_time: float, capture_args: bool) -> None:
    trace.duration_ms = (time.perf_counter() - start_time) * 1000
    trace.is_success = False
    trace.error_type = type(exc).__name__
    trace.error_message = str(exc)

    logger.error(
        f"Error in function: {trace.function_name}",
        execution_id=trace.execution_id,
        duration_ms=trace.duration_ms,
        error_type=trace.error_type,
        error_message=trace.error_message,
        traceback=traceback.format_exc(),
        args=trace.args if capture_args else None,
        kwargs=trace.kwargs if capture_args else None,
        **trace.metadata,
    )


def llm_debug_wrapper(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 1000,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator for function tracing and debugging.

    Logs entry, exit, duration and errors for both sync and async callables.
    Keyword arguments whose names look like credentials are masked. Errors
    are logged and re-raised unchanged.

    Args:
        capture_result: Whether to capture and log the return value
        capture_args: Whether to capture and log input arguments
        max_arg_length: Maximum length for serialized arguments
        log_level: Log level for successful executions
        add_metadata: Additional metadata to include in logs

    Example:
        >>> @llm_debug_wrapper(capture_result=False)
        ... async def fetch_match(match_id: str) -> dict:
        ...     return {"match_id": match_id}
    """
    level = log_level.lower()

    def decorator(func: F) -> F:
        is_async = asyncio.iscoroutinefunction(func)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _new_trace(func, True, add_metadata)
            if capture_args:
                _capture_args(trace, args, kwargs, max_arg_length)

            bind_contextvars(execution_id=trace.execution_id)
            getattr(logger, level)(
                f"Executing async function: {trace.function_name}",
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            start_time = time.perf_counter()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(trace, e, start_time, capture_args)
                raise
            finally:
                unbind_contextvars("execution_id")

            trace.duration_ms = (time.perf_counter() - start_time) * 1000
            if capture_result:
                trace.result = _redact_obj(_serialize_value(result, max_arg_length))
            getattr(logger, level)(
                f"Successfully executed: {trace.function_name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _new_trace(func, False, add_metadata)
            if capture_args:
                _capture_args(trace, args, kwargs, max_arg_length)

            bind_contextvars(execution_id=trace.execution_id)
            getattr(logger, level)(
                f"Executing function: {trace.function_name}",
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_failure(trace, e, start_time, capture_args)
                raise
            finally:
                unbind_contextvars("execution_id")

            trace.duration_ms = (time.perf_counter() - start_time) * 1000
            if capture_result:
                trace.result = _redact_obj(_serialize_value(result, max_arg_length))
            getattr(logger, level)(
                f"Successfully executed: {trace.function_name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )
            return result

        if is_async:
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on performance monitoring."""
    return llm_debug_wrapper(
        capture_result=False,
        capture_args=False,
        log_level="DEBUG",
    )(func)


def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return llm_debug_wrapper(
        capture_result=False,
        capture_args=True,
        log_level="INFO",
        add_metadata={"layer": "adapter"},
    )(func)
