"""authn-transport - credential-injecting transports for httpx.

This library attaches credentials to requests for one target host:
- Bearer, Basic, and pre-encoded Basic credentials
- Ordered fallback across candidate credentials on 401/403
- Host gating so redirects never carry credentials elsewhere
- Environment and .env based credential configuration

Example:
    ```python
    import httpx

    from authn_transport.auth import Basic, Bearer, MultiCredentials
    from authn_transport.errors import raise_for_auth_status
    from authn_transport.transport import BasicAuthTransport

    transport = BasicAuthTransport(
        target="registry.example.com",
        credentials=MultiCredentials(Bearer(token), Basic("robot", "s3cret")),
    )

    async with httpx.AsyncClient(transport=transport) as client:
        response = await client.get("https://registry.example.com/v2/")
        raise_for_auth_status(response)
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
