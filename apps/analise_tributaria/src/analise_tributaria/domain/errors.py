"""Domain exceptions used across API and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(DomainError):
    """Raised when user sends semantically invalid input."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_REQUEST",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class MalformedSpreadsheetError(DomainError):
    """Raised when an uploaded workbook cannot be read or parsed."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="MALFORMED_SPREADSHEET",
            message=message
            or compose_error_message(
                cause="The spreadsheet could not be processed.",
                action="Check the file format (.xlsx) and upload it again.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )


class AuthenticationError(DomainError):
    """Raised when credentials or bearer token are missing or invalid."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="UNAUTHENTICATED",
            message=message
            or compose_error_message(
                cause="Authentication token is missing, invalid or expired.",
                action="Log in again and send the token as a Bearer header.",
            ),
            status_code=HTTPStatus.UNAUTHORIZED,
            details=details or {},
        )


class PermissionDeniedError(DomainError):
    """Raised when the authenticated user lacks access to a resource."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="FORBIDDEN",
            message=message
            or compose_error_message(
                cause="Access is restricted to administrators.",
                action="Ask an administrator to perform this operation.",
            ),
            status_code=HTTPStatus.FORBIDDEN,
            details=details or {},
        )


class CompanyNotFoundError(DomainError):
    """Raised when a company identifier does not resolve."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="COMPANY_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="Company was not found.",
                action="Check the company identifier and retry.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class UserNotFoundError(DomainError):
    """Raised when a user identifier does not resolve."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="USER_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="User was not found.",
                action="Check the user identifier and retry.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class UserAlreadyExistsError(DomainError):
    """Raised when a username is already taken."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="USER_ALREADY_EXISTS",
            message=message
            or compose_error_message(
                cause="Username is already registered.",
                action="Choose a different username.",
            ),
            status_code=HTTPStatus.CONFLICT,
            details=details or {},
        )
