"""
Layered configuration for FruitLink.

Sources, lowest precedence first:

  config/default.toml   defaults checked into the repo
  config/local.toml     per-machine overrides next to it (gitignored)
  .env                  exported into the process environment by python-dotenv
  FRUITLINK_* vars      see ``_ENV_OVERRIDES``

``load_config()`` merges them and validates the result as one frozen
``AppConfig``. Secrets (``GEMINI_API_KEY``, ``GIVVABLE_API_KEY``) are never
part of the TOML; the clients that need them read the environment directly.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ApiConfig(BaseModel):
    """Where the collaborator backend lives, as seen from the client side."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "http://localhost:3001"
    timeout_seconds: float = 30.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}.")
        return v


class ServerConfig(BaseModel):
    """Proxy backend settings (FastAPI app served by uvicorn)."""

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 3001
    frontend_base_url: str = "http://localhost:5173"
    model_name: str = "gemini-1.5-flash"
    givvable_url: str = "https://api.givvable.com/v1/companies/search"


class ForecastConfig(BaseModel):
    """Price forecast engine settings."""

    model_config = ConfigDict(frozen=True)

    cache_ttl_seconds: float = 600.0
    horizon_months: int = 6
    default_fruit: str = "apple"

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"cache_ttl_seconds must be positive, got {v}.")
        return v

    @field_validator("horizon_months")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"horizon_months must be >= 1, got {v}.")
        return v


class MatchingConfig(BaseModel):
    """Matcher behaviour.

    ``normalize_fruit_names`` switches fruit comparison from exact string
    equality to ``strip().casefold()`` equality on both sides.
    """

    model_config = ConfigDict(frozen=True)

    normalize_fruit_names: bool = False


class ChatConfig(BaseModel):
    """Chat session settings."""

    model_config = ConfigDict(frozen=True)

    navigation_delay_seconds: float = 1.0

    @field_validator("navigation_delay_seconds")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"navigation_delay_seconds must be >= 0, got {v}.")
        return v


class InsightsConfig(BaseModel):
    """Memoization for the directory-wide business insight."""

    model_config = ConfigDict(frozen=True)

    cache_ttl_seconds: float = 120.0

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"cache_ttl_seconds must be positive, got {v}.")
        return v


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Root logger level, optional log file and JSON-lines switch."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LOG_LEVELS)}; got {v!r}.")
        return level


class AppConfig(BaseModel):
    """Everything the CLI, proxy server and dashboard are configured with."""

    model_config = ConfigDict(frozen=True)

    api: ApiConfig = ApiConfig()
    server: ServerConfig = ServerConfig()
    forecast: ForecastConfig = ForecastConfig()
    matching: MatchingConfig = MatchingConfig()
    chat: ChatConfig = ChatConfig()
    insights: InsightsConfig = InsightsConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

# (variable, section or None for top level, key, cast)
_ENV_OVERRIDES: tuple[tuple[str, Optional[str], str, Callable[[str], Any]], ...] = (
    ("FRUITLINK_API_BASE_URL", "api", "base_url", str),
    ("FRUITLINK_FRONTEND_BASE_URL", "server", "frontend_base_url", str),
    ("FRUITLINK_PORT", "server", "port", int),
    ("FRUITLINK_LOG_LEVEL", "logging", "level", str),
    ("FRUITLINK_DEBUG", None, "debug", lambda v: v.strip().lower() in ("1", "true", "yes")),
)


def project_root() -> Path:
    """Nearest ancestor of this package holding a ``pyproject.toml``.

    Falls back to the package's parent directory for non-editable installs.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents[:4]):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _merge(current, value)
        merged[key] = value
    return merged


def _env_layer() -> dict[str, Any]:
    """Collect ``FRUITLINK_*`` variables into a TOML-shaped dict."""
    layer: dict[str, Any] = {}
    for var, section, key, cast in _ENV_OVERRIDES:
        value = os.environ.get(var)
        if not value:
            continue
        target = layer if section is None else layer.setdefault(section, {})
        target[key] = cast(value)
    return layer


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the application config from TOML, ``.env`` and the environment.

    Args:
        config_path: TOML file to start from. ``config/default.toml`` under
            the project root when omitted. A ``local.toml`` next to it is
            merged on top if present.

    Raises:
        FileNotFoundError: ``config_path`` does not exist.
        pydantic.ValidationError: A merged value is rejected by a validator.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\nCreate config/default.toml or pass --config."
        )

    raw = _read_toml(path)
    local = path.with_name("local.toml")
    if local.is_file() and local != path:
        raw = _merge(raw, _read_toml(local))
    raw = _merge(raw, _env_layer())

    return AppConfig.model_validate(raw)
