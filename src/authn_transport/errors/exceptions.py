"""Exceptions for responses the server rejected after all credentials were tried."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class AuthenticationRejectedError(APIError):
    """The server refused every credential offered."""

    pass


class UnauthorizedError(AuthenticationRejectedError):
    """401 Unauthorized."""

    pass


class ForbiddenError(AuthenticationRejectedError):
    """403 Forbidden."""

    pass
