"""Tests for credential sets and credential sources."""

import pytest

from authn_transport.auth import (
    Anonymous,
    Basic,
    Bearer,
    CredentialResolver,
    CredentialSet,
    EnvCredentials,
    FromConfig,
    MultiCredentials,
    MultiCredentialSource,
    SingleCredentialSource,
)
from authn_transport.auth.exceptions import CredentialNotFoundError


class TestCredentialSet:
    """Test shape priority and masking."""

    def test_empty_set_has_no_shape(self):
        assert CredentialSet().active_shape is None

    def test_bearer_wins_over_everything(self):
        credential_set = CredentialSet(username="u", password="p", auth="dTpw", registry_token="tok")

        assert credential_set.active_shape == "bearer"

    def test_basic_wins_over_auth(self):
        assert CredentialSet(username="u", password="p", auth="dTpw").active_shape == "basic"

    def test_basic_needs_both_halves(self):
        assert CredentialSet(username="u").active_shape is None
        assert CredentialSet(password="p").active_shape is None
        assert CredentialSet(username="u", auth="dTpw").active_shape == "auth"

    def test_repr_masks_secrets(self):
        text = repr(CredentialSet(username="robot", password="hunter2"))

        assert "hunter2" not in text
        assert "robot" not in text
        assert "password='***'" in text
        assert "auth=''" in text

    def test_is_immutable(self):
        credential_set = CredentialSet(registry_token="tok")

        with pytest.raises(AttributeError):
            credential_set.registry_token = "other"  # type: ignore[misc]


class TestStockSources:
    """Test the fixed credential sources."""

    def test_anonymous(self):
        assert Anonymous().get_credentials() == CredentialSet()

    def test_basic(self):
        assert Basic("u", "p").get_credentials() == CredentialSet(username="u", password="p")

    def test_bearer(self):
        assert Bearer("tok").get_credentials() == CredentialSet(registry_token="tok")

    def test_from_config(self):
        credential_set = CredentialSet(auth="dTpw")

        assert FromConfig(credential_set).get_credentials() is credential_set

    def test_single_sources_are_not_multi(self):
        source = Basic("u", "p")

        assert isinstance(source, SingleCredentialSource)
        assert not isinstance(source, MultiCredentialSource)


class TestMultiCredentials:
    """Test ordered candidate chaining."""

    def test_is_multi_source(self):
        assert isinstance(MultiCredentials(), MultiCredentialSource)

    def test_preserves_order(self):
        source = MultiCredentials(Bearer("abc"), Basic("u", "p"), Anonymous())

        assert source.get_all_credentials() == [
            CredentialSet(registry_token="abc"),
            CredentialSet(username="u", password="p"),
            CredentialSet(),
        ]

    def test_flattens_nested_multi_sources(self):
        inner = MultiCredentials(Bearer("one"), Bearer("two"))
        source = MultiCredentials(inner, Bearer("three"))

        tokens = [c.registry_token for c in source.get_all_credentials()]

        assert tokens == ["one", "two", "three"]

    def test_empty(self):
        assert MultiCredentials().get_all_credentials() == []


class TestEnvCredentials:
    """Test environment-based credentials."""

    def _source(self, **kwargs):
        return EnvCredentials(prefix="REGISTRY_", resolver=CredentialResolver(use_dotenv=False), **kwargs)

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("REGISTRY_USERNAME", "robot")
        monkeypatch.setenv("REGISTRY_PASSWORD", "s3cret")

        assert self._source().get_credentials() == CredentialSet(username="robot", password="s3cret")

    def test_reads_token_and_auth(self, monkeypatch):
        monkeypatch.setenv("REGISTRY_AUTH", "dTpw")
        monkeypatch.setenv("REGISTRY_TOKEN", "tok")

        assert self._source().get_credentials() == CredentialSet(auth="dTpw", registry_token="tok")

    def test_password_file_fallback(self, tmp_path, monkeypatch):
        password_file = tmp_path / "password"
        password_file.write_text("from-file\n")
        monkeypatch.setenv("REGISTRY_USERNAME", "robot")
        monkeypatch.setenv("REGISTRY_PASSWORD_FILE", str(password_file))

        assert self._source().get_credentials().password == "from-file"

    def test_password_variable_wins_over_file(self, tmp_path, monkeypatch):
        password_file = tmp_path / "password"
        password_file.write_text("from-file")
        monkeypatch.setenv("REGISTRY_PASSWORD", "from-env")
        monkeypatch.setenv("REGISTRY_PASSWORD_FILE", str(password_file))

        assert self._source().get_credentials().password == "from-env"

    def test_rereads_on_every_call(self, monkeypatch):
        source = self._source()
        monkeypatch.setenv("REGISTRY_TOKEN", "first")
        assert source.get_credentials().registry_token == "first"

        monkeypatch.setenv("REGISTRY_TOKEN", "rotated")
        assert source.get_credentials().registry_token == "rotated"

    def test_anonymous_when_nothing_set(self):
        assert self._source().get_credentials() == CredentialSet()

    def test_required_raises_when_nothing_set(self):
        with pytest.raises(CredentialNotFoundError) as exc_info:
            self._source(required=True).get_credentials()

        assert exc_info.value.env_var_name == "REGISTRY_USERNAME"

    def test_reads_dotenv_file(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("REGISTRY_TOKEN=from-dotenv\n")

        source = EnvCredentials(prefix="REGISTRY_", dotenv_path=dotenv_file)

        assert source.get_credentials().registry_token == "from-dotenv"

    def test_reads_dotenv_from_working_directory(self, tmp_path, monkeypatch):
        """The default resolver picks up the application's .env file."""
        (tmp_path / ".env").write_text("REGISTRY_USERNAME=robot\nREGISTRY_PASSWORD=s3cret\n")
        monkeypatch.chdir(tmp_path)

        credential_set = EnvCredentials(prefix="REGISTRY_").get_credentials()

        assert credential_set == CredentialSet(username="robot", password="s3cret")
