"""
Configuration dataclasses for the ENS resolver.

Settings can be built directly or loaded from the environment (and an
optional ``.env`` file) with ``load_config_from_env``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

from dotenv import load_dotenv


DEFAULT_RESOLVER_URL = "https://api.fusionens.com"
DEFAULT_NETWORK = "mainnet"
DEFAULT_SOURCE = "python"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_SEARCH_URL = "https://google.com/search"
DEFAULT_EXPLORER_URL = "https://etherscan.io"

LOG_FORMATS = ("json", "text", "both")
LOG_LEVELS = ("debug", "info", "warn", "error")


@dataclass
class ResolverConfig:
    """Remote resolver and URL synthesis settings."""

    base_url: str = DEFAULT_RESOLVER_URL
    network: str = DEFAULT_NETWORK
    source: str = DEFAULT_SOURCE  # Client tag sent as ?source=
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    search_url: str = DEFAULT_SEARCH_URL  # Fallback for non-URL text records
    explorer_url: str = DEFAULT_EXPLORER_URL  # Address pages for browser actions
    allow_insecure: bool = False  # Permit http:// resolver endpoints (tests only)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class Settings:
    """Complete package configuration."""

    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _str_env(name: str, default: str) -> str:
    return (os.getenv(name, default) or default).strip()


def load_config_from_env(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from environment variables.

    Variables from ``env_file`` (or a ``.env`` found by python-dotenv) are
    loaded first without overriding the real environment.

    Args:
        env_file: Optional path to a dotenv file

    Returns:
        Settings with defaults for anything unset or malformed
    """
    load_dotenv(dotenv_path=env_file, override=False)

    resolver = ResolverConfig(
        base_url=_str_env("ENS_RESOLVER_URL", DEFAULT_RESOLVER_URL),
        network=_str_env("ENS_NETWORK", DEFAULT_NETWORK),
        source=_str_env("ENS_SOURCE", DEFAULT_SOURCE),
        timeout_seconds=_float_env("ENS_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        search_url=_str_env("ENS_SEARCH_URL", DEFAULT_SEARCH_URL),
        explorer_url=_str_env("ENS_EXPLORER_URL", DEFAULT_EXPLORER_URL),
    )
    logging_config = LoggingConfig(
        level=_str_env("ENS_LOG_LEVEL", "info").lower(),
        output_format=_str_env("ENS_LOG_FORMAT", "text").lower(),
    )
    return Settings(resolver=resolver, logging=logging_config)


def validate_config(settings: Settings) -> list[str]:
    """
    Check settings for problems.

    Returns:
        Human-readable problems; empty if the settings are usable
    """
    problems: list[str] = []
    resolver = settings.resolver

    parsed = urlparse(resolver.base_url)
    if not parsed.netloc:
        problems.append(f"Resolver URL has no host: {resolver.base_url!r}")
    elif parsed.scheme.lower() != "https" and not (
        resolver.allow_insecure and parsed.scheme.lower() == "http"
    ):
        problems.append(f"Resolver URL must use HTTPS: {resolver.base_url!r}")

    if resolver.timeout_seconds <= 0:
        problems.append(f"Timeout must be positive: {resolver.timeout_seconds}")
    if not resolver.network:
        problems.append("Network must not be empty")
    if not resolver.source:
        problems.append("Source tag must not be empty")

    for name, url in (("Search", resolver.search_url), ("Explorer", resolver.explorer_url)):
        if urlparse(url).scheme.lower() not in ("http", "https"):
            problems.append(f"{name} URL must be http(s): {url!r}")

    if settings.logging.level not in LOG_LEVELS:
        problems.append(f"Unknown log level: {settings.logging.level!r}")
    if settings.logging.output_format not in LOG_FORMATS:
        problems.append(f"Unknown log format: {settings.logging.output_format!r}")

    return problems
