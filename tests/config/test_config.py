from __future__ import annotations

from pathlib import Path

import pytest

from collabsync.adapters.http_resilience import ResilientClient, cache_database_path
from collabsync.config import (
    ApiConfig,
    CacheConfig,
    ConfigurationError,
    MissingConfigurationError,
    collaboration_resilience,
    contacts_resilience,
    get_http_cache_path,
    get_storage_config,
    optional_float_env,
    require_env_vars,
)
from collabsync.config.http_resilience import IDEMPOTENT_METHODS, RetryPolicy

API_VARS = ("COLLABSYNC_BASE_URL", "COLLABSYNC_API_TOKEN", "COLLABSYNC_USER_ID")


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.delenv("MISSING_A", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_vars_treats_blank_values_as_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_vars(["EXAMPLE_VAR"])


def test_optional_float_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLOAT", raising=False)

    assert optional_float_env("EXAMPLE_FLOAT", 2.5) == 2.5


@pytest.mark.parametrize("raw", ["abc", "0", "-1"])
def test_optional_float_env_rejects_invalid(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("EXAMPLE_FLOAT", raw)

    with pytest.raises(ConfigurationError, match="EXAMPLE_FLOAT"):
        optional_float_env("EXAMPLE_FLOAT", 2.5)


def test_api_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLLABSYNC_BASE_URL", "https://groupware.test/api/")
    monkeypatch.setenv("COLLABSYNC_API_TOKEN", "secret")
    monkeypatch.setenv("COLLABSYNC_USER_ID", "123")
    monkeypatch.setenv("COLLABSYNC_TIMEOUT_SECONDS", "4")

    config = ApiConfig.from_environment()

    assert config == ApiConfig(
        base_url="https://groupware.test/api",
        api_token="secret",
        user_id="123",
        timeout_seconds=4.0,
    )
    assert config.auth_headers["Authorization"] == "Bearer secret"


def test_api_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in API_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COLLABSYNC_BASE_URL", "https://groupware.test/api")

    with pytest.raises(MissingConfigurationError) as exc:
        ApiConfig.from_environment()

    assert "COLLABSYNC_API_TOKEN" in str(exc.value)
    assert "COLLABSYNC_USER_ID" in str(exc.value)


def test_missing_configuration_is_a_configuration_error() -> None:
    assert issubclass(MissingConfigurationError, ConfigurationError)


def test_retries_never_replay_non_idempotent_methods() -> None:
    policy = RetryPolicy()

    assert "POST" not in policy.allowed_methods
    assert "PROPPATCH" not in policy.allowed_methods
    assert policy.allowed_methods == IDEMPOTENT_METHODS


def test_resilience_profiles(api_config: ApiConfig) -> None:
    contacts = contacts_resilience(api_config)
    collaboration = collaboration_resilience(api_config)

    assert contacts.base_url == api_config.base_url
    assert contacts.cache is None
    assert collaboration.cache is not None
    assert collaboration.cache.backend == "sqlite"
    assert collaboration.cache.methods == frozenset({"GET"})
    assert dict(contacts.default_headers or {}) == api_config.auth_headers


def test_resilient_client_sends_auth_headers(api_config: ApiConfig) -> None:
    client = ResilientClient(contacts_resilience(api_config))

    assert client._client.headers["Authorization"] == "Bearer token"  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert str(client._client.base_url) == "https://groupware.test/api/"  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_storage_respects_data_dir_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("COLLABSYNC_DATA_DIR", str(tmp_path / "data"))

    assert get_storage_config().data_dir == tmp_path / "data"
    assert get_http_cache_path() == (tmp_path / "data").resolve() / "http_cache.db"
    assert (tmp_path / "data").is_dir()


def test_directory_cache_lives_in_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, api_config: ApiConfig
) -> None:
    monkeypatch.setenv("COLLABSYNC_DATA_DIR", str(tmp_path / "data"))
    cache = collaboration_resilience(api_config).cache
    assert cache is not None

    database = cache_database_path(cache)

    assert database == str((tmp_path / "data").resolve() / "http_cache.db")
    assert (tmp_path / "data").is_dir()


def test_explicit_cache_locations() -> None:
    assert cache_database_path(CacheConfig(backend="memory")) == ":memory:"
    assert cache_database_path(CacheConfig(sqlite_path="/tmp/x.db", backend="sqlite")) == (
        "/tmp/x.db"
    )
