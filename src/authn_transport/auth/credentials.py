"""Credential sets and the sources that supply them.

A credential source hands the transport either a single ``CredentialSet``
(``SingleCredentialSource``) or an ordered list of candidates to fall back
through (``MultiCredentialSource``). Sources are queried on every request, so
anything that rotates credentials only has to return fresh values.

Example:
    ```python
    from authn_transport.auth import Basic, Bearer, MultiCredentials

    # Try the short-lived token first, then the robot account
    source = MultiCredentials(Bearer("eyJ..."), Basic("robot", "s3cret"))
    ```
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from authn_transport.auth.exceptions import CredentialNotFoundError
from authn_transport.auth.resolver import CredentialResolver

logger = logging.getLogger(__name__)

Shape = Literal["bearer", "basic", "auth"]


@dataclass(frozen=True)
class CredentialSet:
    """One set of authentication material for a single attempt.

    At most one shape is used, by fixed priority:

    1. ``registry_token`` sent as ``Bearer <token>``
    2. ``username`` and ``password`` (both non-empty) sent as Basic
    3. ``auth``, an already base64-encoded ``user:pass``, sent as ``Basic <auth>``

    An empty set means anonymous access.
    """

    username: str = ""
    password: str = ""
    auth: str = ""
    registry_token: str = ""

    @property
    def active_shape(self) -> Shape | None:
        if self.registry_token:
            return "bearer"
        if self.username and self.password:
            return "basic"
        if self.auth:
            return "auth"
        return None

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={'***' if getattr(self, name) else ''!r}"
            for name in ("username", "password", "auth", "registry_token")
        )
        return f"{type(self).__name__}({fields})"


@runtime_checkable
class SingleCredentialSource(Protocol):
    """Supplies exactly one credential set per request."""

    def get_credentials(self) -> CredentialSet: ...


@runtime_checkable
class MultiCredentialSource(Protocol):
    """Supplies an ordered list of candidate credential sets per request.

    Order matters: the transport tries candidates first to last.
    """

    def get_all_credentials(self) -> list[CredentialSet]: ...


CredentialSource = SingleCredentialSource | MultiCredentialSource


class FromConfig:
    """Serve a fixed credential set."""

    def __init__(self, credential_set: CredentialSet):
        self._credential_set = credential_set

    def get_credentials(self) -> CredentialSet:
        return self._credential_set

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._credential_set!r})"


class Anonymous(FromConfig):
    """No credentials.

    The transport adds nothing for this candidate; an ``Authorization`` header
    the caller set on the request itself is sent unchanged.
    """

    def __init__(self):
        super().__init__(CredentialSet())


class Basic(FromConfig):
    """Username and password, sent as HTTP Basic."""

    def __init__(self, username: str, password: str):
        super().__init__(CredentialSet(username=username, password=password))


class Bearer(FromConfig):
    """An opaque bearer token."""

    def __init__(self, token: str):
        super().__init__(CredentialSet(registry_token=token))


class MultiCredentials:
    """Chain several sources into one ordered candidate list.

    Each member contributes its candidates in order; members that are
    themselves multi-candidate contribute all of theirs.

    Example:
        ```python
        source = MultiCredentials(
            EnvCredentials(prefix="REGISTRY_"),
            Anonymous(),
        )
        ```
    """

    def __init__(self, *sources: CredentialSource):
        self._sources = sources

    def get_all_credentials(self) -> list[CredentialSet]:
        candidates: list[CredentialSet] = []
        for source in self._sources:
            if isinstance(source, MultiCredentialSource):
                candidates.extend(source.get_all_credentials())
            else:
                candidates.append(source.get_credentials())
        return candidates


class EnvCredentials:
    """Read a credential set from prefixed environment variables.

    With ``prefix="REGISTRY_"`` the following variables are consulted:

    - ``REGISTRY_USERNAME``
    - ``REGISTRY_PASSWORD`` (or a file named by ``REGISTRY_PASSWORD_FILE``)
    - ``REGISTRY_AUTH``
    - ``REGISTRY_TOKEN`` (bearer token)

    Values are re-read on every call, so a rotated secret is picked up by the
    next request. A ``.env`` file is honoured through the resolver.

    Args:
        prefix: Prefix shared by the variable names.
        required: Raise ``CredentialNotFoundError`` when no variable is set.
        resolver: Resolver to use; one loading ``dotenv_path`` is created if omitted.
        dotenv_path: Path to a .env file for the default resolver.
    """

    # Credential set field -> variable name after the prefix
    FIELDS: dict[str, str] = {
        "username": "USERNAME",
        "password": "PASSWORD",
        "auth": "AUTH",
        "registry_token": "TOKEN",
    }

    def __init__(
        self,
        prefix: str = "",
        *,
        required: bool = False,
        resolver: CredentialResolver | None = None,
        dotenv_path: str | Path | None = None,
    ):
        self.prefix = prefix
        self.required = required
        self._resolver = resolver or CredentialResolver(dotenv_path=dotenv_path)

    def _env_var(self, field_name: str) -> str:
        return f"{self.prefix}{self.FIELDS[field_name]}"

    def get_credentials(self) -> CredentialSet:
        values = {name: self._resolver.resolve(env_var_name=self._env_var(name)) for name in self.FIELDS}
        if values["password"] is None:
            values["password"] = self._resolver.resolve_from_file(env_var_name=f"{self._env_var('password')}_FILE")

        if not any(values.values()):
            if self.required:
                raise CredentialNotFoundError(
                    f"No credentials found in environment (prefix '{self.prefix}')",
                    env_var_name=self._env_var("username"),
                )
            logger.debug(f"No credentials in environment for prefix '{self.prefix}', using anonymous")

        return CredentialSet(**{name: value or "" for name, value in values.items()})
