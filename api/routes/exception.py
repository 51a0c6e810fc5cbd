"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and converts
engine errors into :class:`fastapi.HTTPException` responses.  HTTPExceptions
raised by the handler are propagated untouched.  Engine errors are mapped by
type:

* :class:`~engine.exceptions.InsufficientDataError` becomes ``422``, since the
  request was well formed but the series is too short for the analysis.
* :class:`~engine.exceptions.InvalidConfigurationError` and any other
  :class:`~engine.exceptions.AnalyticsError` become ``400``.
* Everything else becomes ``500`` with the exception message as the detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from engine.exceptions import AnalyticsError, InsufficientDataError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def status_for(exc: Exception) -> int:
    if isinstance(exc, InsufficientDataError):
        return 422
    if isinstance(exc, AnalyticsError):
        return 400
    return 500


def _translate(func: Callable[..., Any], exc: Exception) -> HTTPException:
    code = status_for(exc)
    if code == 500:
        log.exception("Unhandled error in %s", func.__name__)
    else:
        log.debug("%s rejected request: %s", func.__name__, exc)
    return HTTPException(status_code=code, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(func, exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _translate(func, exc) from exc

    return cast(F, sync_wrapper)
