"""Tests for ClientConfig behaviour."""

from pathlib import Path

import pytest

from dexpaprika_sdk import __version__
from dexpaprika_sdk.config import (
    DEFAULT_BASE_URL,
    DEFAULT_RETRY_DELAYS_MS,
    BooleanEnvVarError,
    ClientConfig,
    IntegerEnvVarError,
    NonNegativeIntegerEnvVarError,
    PositiveNumberEnvVarError,
    RetryDelaysEnvVarError,
)
from dexpaprika_sdk.config_file import ClientConfigFile


def _empty_dotenv(tmp_path: Path) -> str:
    path = tmp_path / ".env"
    path.write_text("", encoding="utf-8")
    return str(path)


def test_defaults() -> None:
    config = ClientConfig()

    assert config.base_url == "https://api.dexpaprika.com"
    assert config.timeout_seconds == 30.0
    assert config.max_retries == 5
    assert config.retry_delays_ms == (100, 500, 1000, 2500, 5000)
    assert config.cache_enabled is False
    assert config.cache_ttl_seconds == 3600
    assert config.shape_responses is False


def test_user_agent_carries_version() -> None:
    assert ClientConfig().user_agent == f"dexpaprika-sdk-python/{__version__}"


def test_resolved_cache_dir(tmp_path: Path) -> None:
    assert ClientConfig(cache_dir=str(tmp_path)).resolved_cache_dir() == tmp_path
    assert ClientConfig().resolved_cache_dir().name == "dexpaprika_cache"


def test_from_env_without_variables_uses_defaults(tmp_path: Path) -> None:
    config = ClientConfig.from_env(dotenv_path=_empty_dotenv(tmp_path))

    assert config == ClientConfig()


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEXPAPRIKA_BASE_URL", " https://proxy.example.com/v1/ ")
    monkeypatch.setenv("DEXPAPRIKA_TIMEOUT_SECONDS", "5.5")
    monkeypatch.setenv("DEXPAPRIKA_MAX_RETRIES", "2")
    monkeypatch.setenv("DEXPAPRIKA_RETRY_DELAYS_MS", "10, 20,30")
    monkeypatch.setenv("DEXPAPRIKA_RETRY_JITTER_MS", "0")
    monkeypatch.setenv("DEXPAPRIKA_CACHE_ENABLED", "yes")
    monkeypatch.setenv("DEXPAPRIKA_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("DEXPAPRIKA_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("DEXPAPRIKA_SHAPE_RESPONSES", "on")

    config = ClientConfig.from_env(dotenv_path=_empty_dotenv(tmp_path))

    assert config.base_url == "https://proxy.example.com/v1"
    assert config.timeout_seconds == 5.5
    assert config.max_retries == 2
    assert config.retry_delays_ms == (10, 20, 30)
    assert config.retry_jitter_ms == 0
    assert config.cache_enabled is True
    assert config.cache_ttl_seconds == 60
    assert config.cache_dir == str(tmp_path)
    assert config.shape_responses is True


def test_from_env_loads_dotenv_file(tmp_path: Path) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("DEXPAPRIKA_MAX_RETRIES=1\n", encoding="utf-8")

    assert ClientConfig.from_env(dotenv_path=str(dotenv)).max_retries == 1


@pytest.mark.parametrize(
    ("name", "value", "error_type"),
    [
        ("DEXPAPRIKA_MAX_RETRIES", "-1", NonNegativeIntegerEnvVarError),
        ("DEXPAPRIKA_MAX_RETRIES", "many", NonNegativeIntegerEnvVarError),
        ("DEXPAPRIKA_RETRY_JITTER_MS", "-5", NonNegativeIntegerEnvVarError),
        ("DEXPAPRIKA_RETRY_DELAYS_MS", "100,soon", RetryDelaysEnvVarError),
        ("DEXPAPRIKA_RETRY_DELAYS_MS", "100,-1", RetryDelaysEnvVarError),
        ("DEXPAPRIKA_CACHE_ENABLED", "maybe", BooleanEnvVarError),
        ("DEXPAPRIKA_TIMEOUT_SECONDS", "soon", PositiveNumberEnvVarError),
        ("DEXPAPRIKA_TIMEOUT_SECONDS", "0", PositiveNumberEnvVarError),
        ("DEXPAPRIKA_TIMEOUT_SECONDS", "nan", PositiveNumberEnvVarError),
        ("DEXPAPRIKA_CACHE_TTL_SECONDS", "1h", IntegerEnvVarError),
    ],
)
def test_from_env_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    name: str,
    value: str,
    error_type: type[ValueError],
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(error_type) as exc_info:
        ClientConfig.from_env(dotenv_path=_empty_dotenv(tmp_path))
    assert name in str(exc_info.value)


def test_from_env_blank_delay_table_uses_default(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DEXPAPRIKA_RETRY_DELAYS_MS", " , ")

    config = ClientConfig.from_env(dotenv_path=_empty_dotenv(tmp_path))

    assert config.retry_delays_ms == DEFAULT_RETRY_DELAYS_MS


def test_with_overrides_preserves_other_fields() -> None:
    base = ClientConfig(max_retries=2, cache_ttl_seconds=10, retry_jitter_ms=0)

    updated = base.with_overrides(cache_enabled=True, base_url="https://example.com/")

    assert updated.cache_enabled is True
    assert updated.base_url == "https://example.com"
    assert updated.max_retries == 2
    assert updated.cache_ttl_seconds == 10
    assert updated.retry_jitter_ms == 0
    assert base.cache_enabled is False


def test_with_overrides_blank_base_url_restores_default() -> None:
    config = ClientConfig(base_url="https://example.com").with_overrides(base_url="  ")

    assert config.base_url == DEFAULT_BASE_URL


def test_with_file_overrides_applies_only_set_values() -> None:
    base = ClientConfig(max_retries=4, cache_ttl_seconds=99)
    file_config = ClientConfigFile(max_retries=1, retry_delays_ms=(5,), cache_enabled=True)

    updated = base.with_file_overrides(file_config)

    assert updated.max_retries == 1
    assert updated.retry_delays_ms == (5,)
    assert updated.cache_enabled is True
    assert updated.cache_ttl_seconds == 99
    assert updated.base_url == DEFAULT_BASE_URL


def test_from_env_allows_non_expiring_cache_ttl(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DEXPAPRIKA_CACHE_TTL_SECONDS", "-1")

    assert ClientConfig.from_env(dotenv_path=_empty_dotenv(tmp_path)).cache_ttl_seconds == -1
