from __future__ import annotations

import asyncio
import logging
from pathlib import Path  # noqa: TC003

import pytest

from bumpkit.adapters.http_resilience import ResilientClient
from bumpkit.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_raw_content_config,
    get_storage_config,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_reports_all_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert exc.value.names == ("MISSING_A", "MISSING_B")
    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("BUMPKIT_DATA_DIR", str(tmp_path / "data"))

    storage = get_storage_config()
    cache_path = storage.http_cache_path()

    assert cache_path == (tmp_path / "data" / "http_cache.db").resolve()
    assert cache_path.parent.exists()


def test_storage_config_defaults_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    storage = get_storage_config()

    assert storage.resolve_data_dir() == (tmp_path / "bumpkit").resolve()


def test_raw_content_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{ref}/{path}")
    monkeypatch.setenv("BUMPKIT_RAW_TOKEN", "secret")

    config = get_raw_content_config()

    assert config.default_ref == "main"
    assert config.url_for("/src/app.py", "dev") == "https://raw.example.org/dev/src/app.py"
    assert config.url_for("README.md") == "https://raw.example.org/main/README.md"
    assert config.resilience.default_headers == {"Authorization": "Bearer secret"}


def test_raw_content_cache_defaults_to_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{ref}/{path}")

    cache = get_raw_content_config().resilience.cache

    assert cache is not None
    assert cache.backend == "memory"


def test_raw_content_cache_backend_sqlite_uses_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{ref}/{path}")
    monkeypatch.setenv("BUMPKIT_RAW_CACHE_BACKEND", "SQLite")
    monkeypatch.setenv("BUMPKIT_DATA_DIR", str(tmp_path / "data"))

    resilience = get_raw_content_config().resilience

    assert resilience.cache is not None
    assert resilience.cache.backend == "sqlite"
    assert resilience.cache.sqlite_path == str((tmp_path / "data" / "http_cache.db").resolve())
    asyncio.run(ResilientClient(resilience).aclose())


def test_raw_content_cache_backend_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{ref}/{path}")
    monkeypatch.setenv("BUMPKIT_RAW_CACHE_BACKEND", "off")

    assert get_raw_content_config().resilience.cache is None


def test_raw_content_cache_backend_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{ref}/{path}")
    monkeypatch.setenv("BUMPKIT_RAW_CACHE_BACKEND", "redis")

    with pytest.raises(ConfigurationError, match="BUMPKIT_RAW_CACHE_BACKEND"):
        get_raw_content_config()


def test_raw_content_config_requires_template(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(MissingConfigurationError):
        get_raw_content_config()


def test_raw_content_config_validates_placeholders(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_RAW_URL_TEMPLATE", "https://raw.example.org/{path}")

    with pytest.raises(ConfigurationError, match="ref"):
        get_raw_content_config()


def test_configure_logging_reads_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUMPKIT_LOG_LEVEL", "debug")

    configure_logging(force=True)

    assert logging.getLogger().level == logging.DEBUG
    configure_logging(level=logging.WARNING, force=True)
    assert logging.getLogger().level == logging.WARNING
