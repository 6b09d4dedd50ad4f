"""
Exceptions for the vaccine scheduling engine.

These exceptions are raised inside the engine services. The public service
functions catch them at their boundary and return a failed ``ServiceResult``;
views translate that into the matching HTTP status.
"""

from __future__ import annotations

from typing import Any


class VaccineEngineError(Exception):
    """Base exception for all engine errors."""

    code = 'engine_error'

    def to_dict(self) -> dict[str, Any]:
        return {'detail': str(self), 'code': self.code}


class ValidationError(VaccineEngineError):
    """
    Raised when input is unusable: missing date of birth, invalid status
    value, missing identifiers, malformed dates or times.
    """

    code = 'validation_error'

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result['field'] = self.field
        return result


class NotFoundError(VaccineEngineError):
    """
    Raised when a subject, vaccine, dose instance, reminder or planner entry
    does not exist or is inactive.

    Attributes:
        model: Name of the missing model ('Subject', 'DoseInstance', ...)
        object_id: The identifier that was looked up
    """

    code = 'not_found'

    def __init__(self, model: str, object_id: Any, message: str | None = None):
        self.model = model
        self.object_id = object_id
        super().__init__(message or f'{model} not found')

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result['model'] = self.model
        if self.object_id is not None:
            result['id'] = self.object_id
        return result


class PersistenceError(VaccineEngineError):
    """
    Raised when the underlying data-store operation failed.

    Work already committed before the failure is not rolled back.
    """

    code = 'persistence_error'

    def __init__(self, message: str, operation: str | None = None):
        self.operation = operation
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.operation:
            result['operation'] = self.operation
        return result
