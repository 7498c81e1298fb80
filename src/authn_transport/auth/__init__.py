"""Credential sets and credential sources.

This module provides:
- ``CredentialSet``, the authentication material for one attempt
- Single- and multi-candidate source protocols
- Stock sources (anonymous, basic, bearer, fixed, chained, environment)
- ``CredentialResolver`` for value → env → .env → default configuration

Example:
    ```python
    from authn_transport.auth import Bearer, EnvCredentials, MultiCredentials

    source = MultiCredentials(Bearer(token), EnvCredentials(prefix="REGISTRY_"))
    ```
"""

from authn_transport.auth.credentials import (
    Anonymous,
    Basic,
    Bearer,
    CredentialSet,
    CredentialSource,
    EnvCredentials,
    FromConfig,
    MultiCredentials,
    MultiCredentialSource,
    SingleCredentialSource,
)
from authn_transport.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
    NoCredentialsError,
)
from authn_transport.auth.resolver import CredentialResolver

__all__ = [
    "Anonymous",
    "Basic",
    "Bearer",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "CredentialSet",
    "CredentialSource",
    "EnvCredentials",
    "FromConfig",
    "MultiCredentialSource",
    "MultiCredentials",
    "NoCredentialsError",
    "SingleCredentialSource",
]
