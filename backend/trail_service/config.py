import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .datasource import (
    ConfigurationError,
    ConnectionDescriptor,
    RawEnvironmentInput,
    ResolutionPolicy,
    URL_SCHEME_PREFIX,
    resolve,
)

# Default keeps local development simple (SQLite file). Override for Postgres.
DEFAULT_DATABASE_URL = "jdbc:sqlite:///trails.db"
DEFAULT_PROFILE = "local"

# Profiles where a default descriptor is guaranteed; everything else requires DATABASE_URL.
FALLBACK_PROFILES = frozenset({"local", "dev", "test"})


class Settings(BaseModel):
    """Process configuration, read once by the composition root."""

    model_config = ConfigDict(frozen=True)

    raw: RawEnvironmentInput = RawEnvironmentInput()
    profile: str = DEFAULT_PROFILE
    policy: ResolutionPolicy = ResolutionPolicy.FALLBACK_SILENT
    default_url: str = DEFAULT_DATABASE_URL
    api_token: Optional[str] = None


def policy_for_profile(profile: str) -> ResolutionPolicy:
    if profile.lower() in FALLBACK_PROFILES:
        return ResolutionPolicy.FALLBACK_SILENT
    return ResolutionPolicy.FAIL_FAST


def _parse_policy(value: str) -> ResolutionPolicy:
    try:
        return ResolutionPolicy(value.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in ResolutionPolicy)
        raise ConfigurationError(f"unknown DATASOURCE_POLICY {value!r}; expected one of: {allowed}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    profile = env.get("DEPLOYMENT_PROFILE") or DEFAULT_PROFILE
    policy_override = env.get("DATASOURCE_POLICY")
    policy = _parse_policy(policy_override) if policy_override else policy_for_profile(profile)

    return Settings(
        raw=RawEnvironmentInput(
            primary_url=env.get("DATASOURCE_URL"),
            fallback_url=env.get("DATABASE_URL"),
            username=env.get("SPRING_DATASOURCE_USERNAME"),
            password=env.get("SPRING_DATASOURCE_PASSWORD"),
        ),
        profile=profile,
        policy=policy,
        default_url=env.get("DEFAULT_DATABASE_URL") or DEFAULT_DATABASE_URL,
        api_token=env.get("API_TOKEN") or None,
    )


def default_descriptor(url: str) -> ConnectionDescriptor:
    if not url.startswith(URL_SCHEME_PREFIX):
        url = URL_SCHEME_PREFIX + url
    driver_id = url[len(URL_SCHEME_PREFIX):].split(":", 1)[0].split("+", 1)[0]
    return ConnectionDescriptor(driver_id=driver_id, url=url)


def resolve_datasource(settings: Settings) -> ConnectionDescriptor:
    """Apply the configured policy, substituting the default descriptor when allowed."""

    descriptor = resolve(settings.raw, settings.policy)
    if descriptor is None:
        return default_descriptor(settings.default_url)
    return descriptor
