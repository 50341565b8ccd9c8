"""Configuration for the WordPress / WooCommerce MCP server"""

import os
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Required startup configuration is missing or malformed."""


@dataclass(frozen=True)
class SiteConfig:
    """Connection details for one WordPress site."""

    base_url: str
    username: str
    password: str

    def __repr__(self) -> str:
        return f"SiteConfig(base_url={self.base_url!r}, username={self.username!r}, password='***')"


def _env_number(env, name: str, default, kind=float):
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


class Config:
    # Server identity
    SERVER_NAME = "wp-mcp"
    SERVER_VERSION = "1.0.0"
    PROTOCOL_VERSION = "2024-11-05"

    # Required site credentials (env var names)
    URL_VAR = "WORDPRESS_URL"
    USERNAME_VAR = "WORDPRESS_USERNAME"
    PASSWORD_VAR = "WORDPRESS_APP_PASSWORD"

    # Outbound HTTP
    REQUEST_TIMEOUT = 30.0

    # HTTP listener
    HTTP_HOST = "127.0.0.1"
    HTTP_PORT = 8000
    HTTP_PATH = "/mcp"

    # Logging (NEVER to stdout)
    LOG_DIR = Path(os.environ.get("WP_MCP_LOG_DIR", str(Path.home() / ".wp-mcp" / "logs")))
    LOG_FILE = LOG_DIR / "wp-mcp.log"
    ERROR_LOG = LOG_DIR / "wp-mcp-errors.log"
    LOG_LEVEL = os.environ.get("WP_MCP_LOG_LEVEL", "DEBUG").upper()

    @classmethod
    def ensure_dirs(cls):
        """Create required directories"""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_runtime(cls, environ=None):
        """Apply the optional WP_MCP_* overrides; raise ConfigError on a malformed value."""
        env = os.environ if environ is None else environ
        timeout = _env_number(env, "WP_MCP_TIMEOUT", cls.REQUEST_TIMEOUT)
        port = _env_number(env, "WP_MCP_PORT", cls.HTTP_PORT, kind=int)
        cls.REQUEST_TIMEOUT = timeout
        cls.HTTP_PORT = port
        cls.HTTP_HOST = (env.get("WP_MCP_HOST") or "").strip() or cls.HTTP_HOST

    @classmethod
    def load_site_config(cls, environ=None) -> SiteConfig:
        """Read the three required site values; raise ConfigError naming any that are missing."""
        env = os.environ if environ is None else environ
        values = {
            var: (env.get(var) or "").strip()
            for var in (cls.URL_VAR, cls.USERNAME_VAR, cls.PASSWORD_VAR)
        }
        missing = [var for var, value in values.items() if not value]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        return SiteConfig(
            base_url=values[cls.URL_VAR].rstrip("/"),
            username=values[cls.USERNAME_VAR],
            password=values[cls.PASSWORD_VAR],
        )
