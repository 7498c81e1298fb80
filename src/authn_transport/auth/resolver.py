"""Environment-driven credential configuration.

Values are looked up in priority order:
1. Explicitly provided value
2. Environment variable (``.env`` entries are loaded into the environment)
3. Default value

Secrets can also live in files whose path is given directly or through an
environment variable (the ``*_FILE`` convention used by container runtimes).

Security Considerations:
    - Resolved values are never logged, only the source they came from
    - File-based secrets have surrounding whitespace stripped
    - ``.env`` loading happens once per resolver, under a lock
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import find_dotenv, load_dotenv

from authn_transport.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve single credential values from parameters, environment, or files.

    Example:
        ```python
        resolver = CredentialResolver(dotenv_path="/app/.env")

        username = resolver.resolve(env_var_name="REGISTRY_USERNAME")
        password = resolver.resolve_from_file(env_var_name="REGISTRY_PASSWORD_FILE")
        ```
    """

    def __init__(self, dotenv_path: str | Path | None = None, use_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to a .env file. If None, the nearest .env file
                found searching upwards from the working directory is used.
            use_dotenv: Whether to load a .env file at all.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._use_dotenv = use_dotenv

        if self._use_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path or find_dotenv(usecwd=True))
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                # A broken .env file leaves the process environment usable
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve one credential value.

        Args:
            value: Explicit value; wins over every other source when not None.
            env_var_name: Environment variable to consult.
            default: Fallback when neither of the above yields a value.
            required: Raise instead of returning None when nothing resolves.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If required=True and nothing resolved.
        """
        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"
        else:
            result, source = None, None

        if result is not None:
            logger.debug(f"Resolved credential from {source}: ***")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential from a file.

        The path may come from ``file_path`` or from the environment variable
        ``env_var_name``; ``~`` and ``$VAR`` references in it are expanded.

        Raises:
            CredentialFileError: If required=True and the file cannot be read.
        """
        path_str = str(file_path) if file_path is not None else None
        if path_str is None and env_var_name:
            path_str = self.resolve(env_var_name=env_var_name)

        if not path_str:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path = Path(os.path.expanduser(os.path.expandvars(path_str)))

        try:
            content = path.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path} (***)")
        return content
