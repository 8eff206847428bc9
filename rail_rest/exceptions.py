"""
Exceptions raised by rail-rest and their RFC 7807 representation.

Malformed client input surfaces as ``NotFoundError`` or ``ValidationError``
(both ``RailRestError``). Misuse of the library API raises the standard
``TypeError``/``ValueError`` subclasses defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from django.http import JsonResponse


class RailRestError(Exception):
    """Base exception for errors reported to API clients."""

    status_code = 400
    title = "Bad Request"

    def __init__(self, message: str = "", resource: Optional[str] = None):
        self.message = message or self.title
        self.resource = resource
        super().__init__(self.message)


class NotFoundError(RailRestError):
    """Raised when a resource or an identifier does not exist."""

    status_code = 404
    title = "Not Found"


class ValidationError(RailRestError):
    """Raised with the complete list of violations rejecting an input."""

    status_code = 422
    title = "Validation Failed"

    def __init__(
        self,
        violations: Sequence[Any],
        message: str = "",
        resource: Optional[str] = None,
    ):
        self.violations = list(violations)
        super().__init__(message or f"{len(self.violations)} violation(s)", resource)


class MetadataError(ValueError):
    """Raised for inconsistent metadata declarations."""


class UnsupportedValueError(TypeError):
    """Raised when the serializer receives a value it cannot serialize."""


class SerializationError(ValueError):
    """Raised when an embedded value graph refers back to itself."""


@dataclass
class ProblemDetails:
    """
    RFC 7807 problem document.

    ``extensions`` holds additional members (``violations`` for validation
    errors) rendered at the top level of the document.
    """

    status: int
    title: str
    detail: Optional[str] = None
    type: str = "about:blank"
    instance: Optional[str] = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(
        cls, exc: RailRestError, instance: Optional[str] = None
    ) -> "ProblemDetails":
        extensions: dict[str, Any] = {}
        if isinstance(exc, ValidationError):
            extensions["violations"] = [
                v.to_dict() if hasattr(v, "to_dict") else v for v in exc.violations
            ]
        return cls(
            status=exc.status_code,
            title=exc.title,
            detail=exc.message,
            instance=instance,
            extensions=extensions,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.instance:
            payload["instance"] = self.instance
        payload.update(self.extensions)
        return payload


def problem_response(
    exc: RailRestError, instance: Optional[str] = None
) -> JsonResponse:
    """Render ``exc`` as an ``application/problem+json`` response."""
    problem = ProblemDetails.from_exception(exc, instance=instance)
    return JsonResponse(
        problem.to_dict(),
        status=problem.status,
        content_type="application/problem+json",
    )
