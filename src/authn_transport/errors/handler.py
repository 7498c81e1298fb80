"""Turn a final authentication rejection into an exception."""

import httpx

from authn_transport.errors.exceptions import ForbiddenError, UnauthorizedError

_REJECTION_EXCEPTIONS = {
    401: UnauthorizedError,
    403: ForbiddenError,
}


def raise_for_auth_status(response: httpx.Response) -> None:
    """Raise if the response is a 401 or 403.

    The authenticating transports return the last rejection as a normal
    response; call this where a rejection should abort instead. Any other
    status, including other errors, is left to the caller.

    Args:
        response: HTTP response object (its body must be readable)

    Raises:
        UnauthorizedError: On 401.
        ForbiddenError: On 403.
    """
    exc_class = _REJECTION_EXCEPTIONS.get(response.status_code)
    if exc_class is None:
        return

    response_text = response.text[:200]
    message = f"HTTP {response.status_code}"
    if response_text:
        message += f": {response_text}"

    raise exc_class(message, status_code=response.status_code, response=response)
