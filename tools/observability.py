"""Instrumentation for planner entry points."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Mapping, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from trip_app.logging_config import ensure_correlation_id, get_logger, log_event, redact_for_log

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

_PREVIEW_KEYS = 6


def _summarize_kwargs(kwargs: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep scalar arguments and reduce collections to their size."""

    summary: Dict[str, Any] = {
        key: f"<{len(value)} entries>" if isinstance(value, (list, tuple, dict)) else value
        for key, value in list(kwargs.items())[:_PREVIEW_KEYS]
    }
    if len(kwargs) > _PREVIEW_KEYS:
        summary["truncated"] = True
    return redact_for_log(summary)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_operation(
    operation: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Validate keyword arguments, then time and log the wrapped call.

    With ``input_model`` the call receives the model's dump instead of the raw
    kwargs. Invalid input is handed to ``on_validation_error`` when given and
    re-raised otherwise. The ``status`` of dict results is logged on success.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()
            fields = {"operation": operation, "correlation_id": correlation_id}

            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "operation_validation_failed",
                        error_count=exc.error_count(),
                        invalid_fields=[".".join(str(part) for part in error["loc"]) for error in exc.errors()],
                        **fields,
                    )
                    if on_validation_error is None:
                        raise
                    return on_validation_error(exc)

            log_event(LOGGER, logging.INFO, "operation_call_started", kwargs=_summarize_kwargs(kwargs), **fields)
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_call_failed",
                    duration_ms=_elapsed_ms(start),
                    exc_info=True,
                    **fields,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "operation_call_completed",
                duration_ms=_elapsed_ms(start),
                status=result.get("status") if isinstance(result, dict) else None,
                **fields,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
