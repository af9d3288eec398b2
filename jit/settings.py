"""Settings resolution: environment, .env files and named profiles."""

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

import tomlkit
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from jit.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "jit"
CONFIG_PATH = CONFIG_DIR / "config.toml"
HOME_ENV_PATH = CONFIG_DIR / ".env"

_REQUIRED = {
    "base_url": "JIRA_BASE_URL",
    "api_token": "JIRA_API_TOKEN",
    "user_email": "JIRA_USER_EMAIL",
}


class JitSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JIRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str | None = None  # https://acme.atlassian.net
    api_token: SecretStr | None = None
    user_email: str | None = None
    sprint_field: str = "customfield_10020"  # Jira Cloud's sprint custom field


@lru_cache(maxsize=1)
def _load_toml() -> tomlkit.TOMLDocument:
    """Load ~/.config/jit/config.toml, returning empty document if missing."""
    if not CONFIG_PATH.exists():
        return tomlkit.document()
    return tomlkit.load(CONFIG_PATH.open())


def _list_profiles(config: Mapping) -> list[str]:
    # tomlkit Table implements MutableMapping but not dict, so check Mapping
    return [k for k, v in config.items() if isinstance(v, Mapping)]


def _env_files(env_file: Path | None) -> tuple[Path, ...]:
    """Return the .env files to read, lowest priority first."""
    if env_file is not None:
        if env_file.exists():
            return (env_file,)
        logger.warning("Specified .env file not found at: %s", env_file)
    return (HOME_ENV_PATH, Path(".env"))


def _profile_defaults(profile: str | None) -> dict:
    toml_config = _load_toml()
    active = (
        profile
        or os.environ.get("JIT_PROFILE")
        or toml_config.get("default_profile")
        or ((_profiles := _list_profiles(toml_config)) and _profiles[0] or None)
    )
    if not active:
        return {}
    if active in toml_config and isinstance(toml_config[active], Mapping):
        logger.debug("Using profile '%s' from %s", active, CONFIG_PATH)
        return dict(toml_config[active])
    profiles = _list_profiles(toml_config)
    raise ConfigError(f"Profile '{active}' not found in {CONFIG_PATH}. Available: {profiles or '(none)'}")


def get_settings(profile: str | None = None, env_file: Path | None = None) -> JitSettings:
    """Resolve the Jira connection settings.

    Precedence (highest to lowest):
    1. JIRA_* environment variables
    2. .env files: --env-file alone if it exists, else ./.env over ~/.config/jit/.env
    3. the active profile table in ~/.config/jit/config.toml
       (--profile, JIT_PROFILE, default_profile, then the first table)
    4. field defaults
    """
    env_files = _env_files(env_file)
    logger.debug("Reading .env files: %s", ", ".join(str(p) for p in env_files if p.exists()) or "(none)")

    from_env = JitSettings(_env_file=env_files)  # type: ignore[call-arg]
    merged = {**_profile_defaults(profile), **from_env.model_dump(exclude_unset=True)}
    settings = JitSettings(_env_file=env_files, **merged)  # type: ignore[call-arg]

    missing = [var for field, var in _REQUIRED.items() if not getattr(settings, field)]
    if missing:
        raise ConfigError(
            f"{', '.join(missing)} not set. Set them as environment variables, in a .env file "
            f"or in {HOME_ENV_PATH}:\n"
            "  JIRA_BASE_URL=https://your-company.atlassian.net\n"
            "  JIRA_API_TOKEN=your_api_token_here\n"
            "  JIRA_USER_EMAIL=your_email@example.com"
        )
    return settings
