"""
Errors raised by the categories app.

Every error is a rejected request rather than a system fault, so each kind
carries a stable ``code`` that API clients and forms can branch on.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.exceptions import NON_FIELD_ERRORS
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler


class CategoriesError(Exception):
    """Base class for categorization errors."""

    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None, code=None):
        self.message = message or self.__class__.__doc__.strip()
        if code:
            self.code = code
        super().__init__(self.message)

    def as_dict(self):
        return {"error": self.message, "code": self.code}


class ValidationError(CategoriesError):
    """Invalid or missing data."""

    code = "invalid"

    def __init__(self, message=None, errors=None, code=None):
        self.errors = errors or {}
        if message is None and self.errors:
            message = "; ".join(
                f"{field}: {' '.join(msgs)}" for field, msgs in self.errors.items()
            )
        super().__init__(message, code)

    def as_dict(self):
        data = super().as_dict()
        data["errors"] = self.errors
        return data


class DuplicateError(CategoriesError):
    """A record with the same unique value already exists."""

    code = "duplicate"


class NotFoundError(CategoriesError):
    """The requested record does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class SetNotFoundError(NotFoundError):
    """Category set not found."""


class CategorizationNotFoundError(NotFoundError):
    """The model has no categorized field with that name."""


class CreationNotAllowedError(CategoriesError):
    """New categories cannot be created in a set that is not editable."""

    code = "creation_not_allowed"


class LimitError(CategoriesError):
    """The categorized field cannot hold more categories."""

    code = "limit_exceeded"


UNIQUE_ERROR_CODES = {"unique", "unique_together", "unique_constraint"}


def from_django_validation_error(error: DjangoValidationError) -> CategoriesError:
    """Translate a ``full_clean`` failure into a categories error."""
    if not hasattr(error, "error_dict"):
        return ValidationError(errors={NON_FIELD_ERRORS: error.messages})

    errors = {}
    codes = set()
    for field, field_errors in error.error_dict.items():
        for item in field_errors:
            codes.add(item.code)
            errors.setdefault(field, []).extend(item.messages)

    # Only a pure uniqueness failure is a duplicate
    if codes and codes <= UNIQUE_ERROR_CODES:
        return DuplicateError(
            "; ".join(msg for msgs in errors.values() for msg in msgs)
        )
    return ValidationError(errors=errors)


def categories_exception_handler(exc, context):
    """DRF exception handler that renders categories errors by kind."""
    if isinstance(exc, CategoriesError):
        return Response(exc.as_dict(), status=exc.status_code)
    return exception_handler(exc, context)
