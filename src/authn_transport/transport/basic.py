"""Authenticating transports with credential fallback.

The transports attach an ``Authorization`` header to requests bound for one
target host and, when the server answers 401 or 403, replay the request with
the next candidate credential set until one is accepted or none are left.

## Header encoding

| Active shape | Header |
|--------------|--------|
| `registry_token` | `Bearer <token>` |
| `username` + `password` | `Basic base64(<username>:<password>)` |
| `auth` | `Basic <auth>` (already encoded, sent verbatim) |

## Host gating

httpx follows redirects above the transport layer, so a redirected request
reaches the transport again with a different host. Credentials are only
attached when the ``Host`` header or the URL authority equals ``target``
exactly, which keeps them from leaking to the redirect destination.

## Example

```python
import httpx

from authn_transport.auth import Basic, Bearer, MultiCredentials
from authn_transport.transport.basic import BasicAuthTransport

transport = BasicAuthTransport(
    target="registry.example.com",
    credentials=MultiCredentials(Bearer(token), Basic("robot", "s3cret")),
)

async with httpx.AsyncClient(transport=transport) as client:
    response = await client.get("https://registry.example.com/v2/")
```

A request rejected by every candidate is returned as-is; callers inspect the
status themselves (see ``authn_transport.errors.raise_for_auth_status``).

## Request bodies

Fallback sends the same request object again, so its body must be replayable.
Bodies given as `content=bytes`, `json=`, `data=` or `files=` are; a body
given as a generator or async iterator can be sent only once, and httpx raises
`httpx.StreamConsumed` when the next candidate is tried. Read such a body into
memory first (`content=b"".join(chunks)`) when more than one candidate may be
needed.
"""

import base64
import logging

import httpx

from authn_transport.auth.credentials import CredentialSet, CredentialSource, MultiCredentialSource
from authn_transport.auth.exceptions import NoCredentialsError

logger = logging.getLogger(__name__)

# Responses that hand over to the next candidate
AUTH_FAILURE_STATUS_CODES: frozenset[int] = frozenset([401, 403])


def authorization_header(credential_set: CredentialSet) -> str | None:
    """Encode a credential set as an ``Authorization`` header value.

    Returns:
        The header value, or None if the set holds no usable credentials.
    """
    shape = credential_set.active_shape
    if shape == "bearer":
        return f"Bearer {credential_set.registry_token}"
    if shape == "basic":
        delimited = f"{credential_set.username}:{credential_set.password}"
        return f"Basic {base64.b64encode(delimited.encode('utf-8')).decode('ascii')}"
    if shape == "auth":
        return f"Basic {credential_set.auth}"
    return None


def host_matches(request: httpx.Request, target: str) -> bool:
    """Check whether a request is addressed to ``target``.

    Compares against the ``Host`` header and the URL authority (``host[:port]``,
    default ports omitted).
    """
    if request.headers.get("Host") == target:
        return True
    return request.url.netloc.decode("ascii") == target


def gather_candidates(source: CredentialSource) -> list[CredentialSet]:
    """Collect the ordered candidate credential sets for one request.

    Raises:
        NoCredentialsError: If a multi-candidate source returns nothing.
    """
    if isinstance(source, MultiCredentialSource):
        candidates = list(source.get_all_credentials())
    else:
        candidates = [source.get_credentials()]

    if not candidates:
        raise NoCredentialsError(f"Credential source {type(source).__name__} returned no candidates")
    return candidates


def _apply_credentials(
    request: httpx.Request, credential_set: CredentialSet, target: str, original: str | None
) -> None:
    if not host_matches(request, target):
        return

    header = authorization_header(credential_set)
    if header is not None:
        request.headers["Authorization"] = header
    elif original is not None:
        request.headers["Authorization"] = original
    else:
        # Don't resend a header set for an earlier candidate
        request.headers.pop("Authorization", None)


def _log_rejection(request: httpx.Request, response: httpx.Response, attempt: int, total: int) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        f"Request {request.method} {request.url} rejected with {response.status_code} "
        f"(credentials {attempt}/{total}), trying next credentials. Response body: {response.text}"
    )


class BasicAuthTransport(httpx.AsyncHTTPTransport):
    """Async transport that authenticates requests to a single host.

    Args:
        target: Host (``host`` or ``host:port``) allowed to receive credentials.
        credentials: Single- or multi-candidate credential source, queried on
            every request.
        wrapped_transport: The underlying transport (default: a new
            ``httpx.AsyncHTTPTransport``).

    Errors raised by the credential source or the wrapped transport propagate
    unchanged; no further candidates are tried after a transport error.
    """

    def __init__(
        self,
        *,
        target: str,
        credentials: CredentialSource,
        wrapped_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport or httpx.AsyncHTTPTransport()
        self.target = target
        self.credentials = credentials

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, falling back through candidates on 401/403.

        Args:
            request: The HTTP request to send; its ``Authorization`` header is
                modified in place.

        Returns:
            The first response that is not a 401/403, or the last candidate's
            response.
        """
        candidates = gather_candidates(self.credentials)
        original = request.headers.get("Authorization")

        for attempt, candidate in enumerate(candidates[:-1], start=1):
            _apply_credentials(request, candidate, self.target, original)
            response = await self._wrapped_transport.handle_async_request(request)
            if response.status_code not in AUTH_FAILURE_STATUS_CODES:
                return response

            await response.aread()
            await response.aclose()
            _log_rejection(request, response, attempt, len(candidates))

        _apply_credentials(request, candidates[-1], self.target, original)
        return await self._wrapped_transport.handle_async_request(request)


class SyncBasicAuthTransport(httpx.HTTPTransport):
    """Blocking counterpart of ``BasicAuthTransport`` for ``httpx.Client``.

    Takes the same arguments; ``wrapped_transport`` defaults to a new
    ``httpx.HTTPTransport``.
    """

    def __init__(
        self,
        *,
        target: str,
        credentials: CredentialSource,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport or httpx.HTTPTransport()
        self.target = target
        self.credentials = credentials

    def __enter__(self):
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return self._wrapped_transport.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        candidates = gather_candidates(self.credentials)
        original = request.headers.get("Authorization")

        for attempt, candidate in enumerate(candidates[:-1], start=1):
            _apply_credentials(request, candidate, self.target, original)
            response = self._wrapped_transport.handle_request(request)
            if response.status_code not in AUTH_FAILURE_STATUS_CODES:
                return response

            response.read()
            response.close()
            _log_rejection(request, response, attempt, len(candidates))

        _apply_credentials(request, candidates[-1], self.target, original)
        return self._wrapped_transport.handle_request(request)
