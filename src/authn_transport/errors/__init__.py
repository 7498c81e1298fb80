"""Error handling for rejected authentication."""

from authn_transport.errors.exceptions import (
    APIError,
    AuthenticationRejectedError,
    ForbiddenError,
    UnauthorizedError,
)
from authn_transport.errors.handler import raise_for_auth_status

__all__ = [
    "APIError",
    "AuthenticationRejectedError",
    "ForbiddenError",
    "UnauthorizedError",
    "raise_for_auth_status",
]
