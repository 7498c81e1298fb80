"""Custom exceptions for credential acquisition.

Any of these raised by a credential source aborts the request before a single
byte goes over the wire.

Example:
    ```python
    from authn_transport.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("Registry token not found", env_var_name="REGISTRY_TOKEN")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).

    Example:
        ```python
        try:
            creds = EnvCredentials(prefix="REGISTRY_", required=True).get_credentials()
        except CredentialNotFoundError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        """Initialize CredentialNotFoundError.

        Args:
            message: Error message describing what credential is missing.
            env_var_name: Optional environment variable name for reference.
        """
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""

    pass


class NoCredentialsError(CredentialError):
    """Raised when a credential source yields no candidate credential sets.

    A source with nothing to offer should return an empty ``CredentialSet``
    (anonymous access) rather than an empty list.
    """

    pass
