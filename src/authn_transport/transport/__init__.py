"""Transport layers for authenticated HTTP clients.

The transports wrap another httpx transport (by default the real network
transport) and add credential handling, so they can be layered with any other
transport that speaks the same interface.

Modules:
    basic: Host-gated credential injection with 401/403 fallback

Example:
    ```python
    import httpx

    from authn_transport.auth import EnvCredentials
    from authn_transport.transport import BasicAuthTransport

    transport = BasicAuthTransport(
        target="registry.example.com",
        credentials=EnvCredentials(prefix="REGISTRY_"),
    )
    client = httpx.AsyncClient(transport=transport)
    ```
"""

from authn_transport.transport.basic import (
    AUTH_FAILURE_STATUS_CODES,
    BasicAuthTransport,
    SyncBasicAuthTransport,
    authorization_header,
    gather_candidates,
    host_matches,
)

__all__ = [
    "AUTH_FAILURE_STATUS_CODES",
    "BasicAuthTransport",
    "SyncBasicAuthTransport",
    "authorization_header",
    "gather_candidates",
    "host_matches",
]
