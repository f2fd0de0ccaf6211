"""Configuration helpers for the Confluence REST client."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, HttpUrl, ValidationError, model_validator


DEFAULT_EXPAND_CONTENT = ["body.storage", "version", "ancestors", "space"]


class ConfluenceCredentials(BaseModel):
    """Connection information for the Confluence REST API."""

    base_url: HttpUrl = Field(..., description="Base URL of the Confluence instance, e.g. https://acme.atlassian.net/wiki")
    username: Optional[str] = Field(None, description="Account email or user name for basic authentication")
    api_token: Optional[str] = Field(None, description="API token or password for basic authentication")
    bearer_token: Optional[str] = Field(None, description="Personal access token sent as a bearer token")

    @model_validator(mode="after")
    def _check_auth(self) -> "ConfluenceCredentials":
        if self.bearer_token:
            return self
        if not (self.username and self.api_token):
            raise ValueError("Provide either username and api_token, or bearer_token")
        return self


class ExpandDefaults(BaseModel):
    """Expand values used when a call does not pass its own list."""

    get_content: Optional[list[str]] = Field(default_factory=lambda: list(DEFAULT_EXPAND_CONTENT))
    get_content_by_title: Optional[list[str]] = Field(default_factory=lambda: list(DEFAULT_EXPAND_CONTENT))
    get_children: Optional[list[str]] = Field(default_factory=lambda: ["version", "space"])
    search: Optional[list[str]] = Field(default_factory=lambda: ["version", "space"])
    get_space: Optional[list[str]] = Field(default_factory=lambda: ["description.plain"])
    get_spaces: Optional[list[str]] = None
    get_space_contents: Optional[list[str]] = None
    get_attachments: Optional[list[str]] = Field(default_factory=lambda: ["version", "container"])
    get_user: Optional[list[str]] = None

    @classmethod
    def none(cls) -> "ExpandDefaults":
        """Defaults that never add an expand parameter."""

        return cls(**{name: None for name in cls.model_fields})


class ClientSettings(BaseModel):
    """Per-client HTTP behaviour."""

    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    deployment: Optional[Literal["cloud", "server"]] = Field(
        None, description="Skip the deployment probe by declaring the deployment type"
    )
    user_agent: str = Field("confluence-rest", description="User-Agent header value")
    expand: ExpandDefaults = Field(default_factory=ExpandDefaults)


class ConfluenceConfig(BaseModel):
    """Aggregate configuration for the client and CLI."""

    credentials: ConfluenceCredentials
    client: ClientSettings = Field(default_factory=ClientSettings)


ENV_PREFIX = "CONFLUENCE"
DEFAULT_CONFIG_PATHS = (
    Path.cwd() / "confluence-rest.toml",
    Path.home() / ".config" / "confluence-rest" / "config.toml",
)


@dataclasses.dataclass
class ConfigSource:
    """Result of attempting to resolve configuration data."""

    config: Optional[ConfluenceConfig]
    path: Optional[Path]
    error: Optional[Exception]


def _load_from_env() -> dict[str, object]:
    """Return configuration values extracted from ``CONFLUENCE_*`` environment variables."""

    def _get(name: str) -> Optional[str]:
        return os.getenv(f"{ENV_PREFIX}_{name}")

    credentials: dict[str, object] = {}
    for key in ("BASE_URL", "USERNAME", "API_TOKEN", "BEARER_TOKEN"):
        value = _get(key)
        if value:
            credentials[key.lower()] = value

    if not credentials:
        return {}

    client: dict[str, object] = {}
    for key in ("DEPLOYMENT", "TIMEOUT"):
        value = _get(key)
        if value:
            client[key.lower()] = value

    return {"credentials": credentials, "client": client}


def _load_toml(path: Path) -> Optional[dict]:
    if not path.exists():
        return None

    with path.open("rb") as handle:
        return tomllib.load(handle)


def resolve_config(explicit_path: Optional[Path] = None) -> ConfigSource:
    """Discover configuration using the first available source.

    The priority order is:
    1. Explicit path provided by the caller.
    2. Default configuration files in the working directory or the user's config directory.
    3. Environment variables with the `CONFLUENCE_` prefix.
    """

    errors: list[Exception] = []
    sources: list[tuple[Optional[Path], dict]] = []

    if explicit_path:
        try:
            data = _load_toml(explicit_path)
            if data is not None:
                sources.append((explicit_path, data))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            errors.append(exc)

    if not sources:
        for path in DEFAULT_CONFIG_PATHS:
            try:
                data = _load_toml(path)
            except (OSError, tomllib.TOMLDecodeError) as exc:  # pragma: no cover
                errors.append(exc)
                continue
            if data is not None:
                sources.append((path, data))
                break

    if not sources:
        env_data = _load_from_env()
        if env_data:
            sources.append((None, env_data))

    for path, data in sources:
        try:
            config = ConfluenceConfig.model_validate(data)
            return ConfigSource(config=config, path=path, error=None)
        except ValidationError as exc:
            errors.append(exc)

    error = errors[0] if errors else None
    return ConfigSource(config=None, path=None, error=error)


def ensure_config(
    *,
    base_url: Optional[str] = None,
    username: Optional[str] = None,
    api_token: Optional[str] = None,
    bearer_token: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> ConfluenceConfig:
    """Resolve configuration from precedence order and apply explicit overrides."""

    source = resolve_config(config_path)

    if source.config:
        data = source.config.model_dump(mode="json")
    else:
        if not base_url:
            hint = " or configuration file" if config_path else ""
            raise RuntimeError(
                "Missing Confluence credentials. Provide them via CLI options, environment variables" + hint
            )
        data = {"credentials": {}}

    overrides = {
        "base_url": base_url,
        "username": username,
        "api_token": api_token,
        "bearer_token": bearer_token,
    }
    data["credentials"].update({key: value for key, value in overrides.items() if value})

    return ConfluenceConfig.model_validate(data)
