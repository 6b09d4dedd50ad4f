"""Discriminated results returned across the engine boundary."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from django.db import DatabaseError

from vaxi_backend.vaccines.exceptions import PersistenceError, VaccineEngineError


@dataclass
class ServiceResult:
    """Outcome of a public engine operation.

    ``success`` is True and ``data`` carries the payload (``added_count``,
    ``planner`` ...), or ``success`` is False and ``error`` holds the exception.
    """
    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: VaccineEngineError | None = None

    @classmethod
    def ok(cls, **data: Any) -> ServiceResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: VaccineEngineError) -> ServiceResult:
        return cls(success=False, error=error)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {'success': True, **self.data}
        return {'success': False, 'error': self.error.to_dict() if self.error else None}


def service_boundary(operation: str) -> Callable:
    """Turn engine exceptions raised by ``func`` into a failed ``ServiceResult``.

    Database errors are wrapped into ``PersistenceError``. Anything else
    propagates.
    """

    def decorator(func: Callable[..., ServiceResult]) -> Callable[..., ServiceResult]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ServiceResult:
            try:
                return func(*args, **kwargs)
            except VaccineEngineError as exc:
                logger.info('%s failed: %s', operation, exc)
                return ServiceResult.fail(exc)
            except DatabaseError as exc:
                logger.exception('%s failed in the data store', operation)
                return ServiceResult.fail(PersistenceError(str(exc), operation=operation))

        return wrapper

    return decorator
