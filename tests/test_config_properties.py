"""
Property-based tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ens_resolver.config import (
    DEFAULT_RESOLVER_URL,
    LoggingConfig,
    ResolverConfig,
    Settings,
    load_config_from_env,
    validate_config,
)


ENV_VARS = (
    "ENS_RESOLVER_URL",
    "ENS_NETWORK",
    "ENS_SOURCE",
    "ENS_TIMEOUT",
    "ENS_SEARCH_URL",
    "ENS_EXPLORER_URL",
    "ENS_LOG_LEVEL",
    "ENS_LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every ENS_* variable and restore the environment afterwards."""
    for name in ENV_VARS:
        # setenv first so the prior state is recorded even when unset
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def write_env(tmp_path: Path, lines: list[str]) -> Path:
    env_file = tmp_path / ".env"
    env_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_file


class TestLoadFromEnv:
    """Settings come from the environment and an optional dotenv file."""

    def test_defaults(self, clean_env, tmp_path: Path) -> None:
        loaded = load_config_from_env(tmp_path / "missing.env")
        assert loaded == Settings()
        assert loaded.resolver.base_url == DEFAULT_RESOLVER_URL
        assert loaded.resolver.network == "mainnet"
        assert loaded.resolver.timeout_seconds == 10.0

    def test_environment_values(self, clean_env, tmp_path: Path) -> None:
        clean_env.setenv("ENS_RESOLVER_URL", "https://resolver.example")
        clean_env.setenv("ENS_NETWORK", "sepolia")
        clean_env.setenv("ENS_SOURCE", "keyboard")
        clean_env.setenv("ENS_TIMEOUT", "2.5")
        clean_env.setenv("ENS_LOG_LEVEL", "DEBUG")
        clean_env.setenv("ENS_LOG_FORMAT", "JSON")

        loaded = load_config_from_env(tmp_path / "missing.env")

        assert loaded.resolver.base_url == "https://resolver.example"
        assert loaded.resolver.network == "sepolia"
        assert loaded.resolver.source == "keyboard"
        assert loaded.resolver.timeout_seconds == 2.5
        assert loaded.logging == LoggingConfig(level="debug", output_format="json")

    def test_dotenv_file(self, clean_env, tmp_path: Path) -> None:
        env_file = write_env(tmp_path, [
            "ENS_SEARCH_URL=https://duckduckgo.com/",
            "ENS_EXPLORER_URL=https://basescan.org",
            "ENS_TIMEOUT=4",
        ])

        loaded = load_config_from_env(env_file)

        assert loaded.resolver.search_url == "https://duckduckgo.com/"
        assert loaded.resolver.explorer_url == "https://basescan.org"
        assert loaded.resolver.timeout_seconds == 4.0

    def test_environment_wins_over_dotenv(self, clean_env, tmp_path: Path) -> None:
        env_file = write_env(tmp_path, ["ENS_NETWORK=sepolia"])
        clean_env.setenv("ENS_NETWORK", "holesky")

        assert load_config_from_env(env_file).resolver.network == "holesky"

    @pytest.mark.parametrize("value", ["", "fast", "10s", "nan-ish"])
    def test_malformed_timeout_uses_default(self, clean_env, tmp_path: Path, value: str) -> None:
        clean_env.setenv("ENS_TIMEOUT", value)
        assert load_config_from_env(tmp_path / "missing.env").resolver.timeout_seconds == 10.0

    def test_blank_values_use_defaults(self, clean_env, tmp_path: Path) -> None:
        clean_env.setenv("ENS_NETWORK", "")
        clean_env.setenv("ENS_SOURCE", "")
        loaded = load_config_from_env(tmp_path / "missing.env")
        assert loaded.resolver.network == "mainnet"
        assert loaded.resolver.source == "python"


class TestValidateConfigProperty:
    """
    Property: validate_config reports a problem for each unusable setting
    and nothing for usable ones.
    """

    def test_defaults_are_valid(self) -> None:
        assert validate_config(Settings()) == []

    @given(timeout=st.floats(min_value=0.001, max_value=600.0))
    @settings(max_examples=50)
    def test_positive_timeouts_accepted(self, timeout: float) -> None:
        config = Settings(resolver=ResolverConfig(timeout_seconds=timeout))
        assert validate_config(config) == []

    @given(timeout=st.floats(max_value=0.0, allow_nan=False))
    @settings(max_examples=50)
    def test_non_positive_timeouts_rejected(self, timeout: float) -> None:
        problems = validate_config(Settings(resolver=ResolverConfig(timeout_seconds=timeout)))
        assert len(problems) == 1
        assert "Timeout" in problems[0]

    @pytest.mark.parametrize("base_url", [
        "http://api.fusionens.com",
        "ftp://api.fusionens.com",
        "api.fusionens.com",
    ])
    def test_insecure_resolver_url(self, base_url: str) -> None:
        problems = validate_config(Settings(resolver=ResolverConfig(base_url=base_url)))
        assert len(problems) == 1

    def test_http_allowed_when_insecure_enabled(self) -> None:
        resolver = ResolverConfig(base_url="http://localhost:8080", allow_insecure=True)
        assert validate_config(Settings(resolver=resolver)) == []

    def test_empty_network_and_source(self) -> None:
        problems = validate_config(Settings(resolver=ResolverConfig(network="", source="")))
        assert len(problems) == 2

    def test_search_and_explorer_schemes(self) -> None:
        resolver = ResolverConfig(search_url="google.com/search", explorer_url="javascript:alert(1)")
        problems = validate_config(Settings(resolver=resolver))
        assert len(problems) == 2

    @given(
        level=st.text(max_size=10).filter(lambda s: s not in ("debug", "info", "warn", "error")),
        output_format=st.text(max_size=10).filter(lambda s: s not in ("json", "text", "both")),
    )
    @settings(max_examples=50)
    def test_unknown_logging_settings(self, level: str, output_format: str) -> None:
        problems = validate_config(Settings(logging=LoggingConfig(level=level, output_format=output_format)))
        assert len(problems) == 2
