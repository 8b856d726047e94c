"""Runtime settings resolved from ``CRICKSTATS_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

_ENV_PREFIX = "CRICKSTATS_"

DEFAULT_BASE_URL = "https://plapi.perfectlineup.in"
DEFAULT_PLAYER_CARD_PATH = "/fantasy/stats/get_perfectlineup_playercard"
DEFAULT_FIXTURE_URL = (
    "https://plineup-prod.blr1.digitaloceanspaces.com/appstatic/plprod_match_7_{match_uid}.json"
)
DEFAULT_TIMEOUT = 10.0
DEFAULT_OFFSET_MINUTES = 330


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    player_card_path: str = DEFAULT_PLAYER_CARD_PATH
    fixture_url: str = DEFAULT_FIXTURE_URL
    timeout: float = DEFAULT_TIMEOUT
    session_key: Optional[str] = None
    module_access: str = "7"
    website_id: int = 1
    sports_id: Optional[int] = None
    offset_minutes: int = DEFAULT_OFFSET_MINUTES

    @property
    def timezone_offset(self) -> timedelta:
        return timedelta(minutes=self.offset_minutes)

    def headers(self) -> dict[str, str]:
        headers = {"moduleaccess": self.module_access, "Content-Type": "application/json"}
        if self.session_key:
            headers["sessionkey"] = self.session_key
        return headers

    def with_overrides(self, overrides: Mapping[str, object]) -> "Settings":
        known = {key: value for key, value in overrides.items() if key in self.__dataclass_fields__}
        unknown = set(overrides) - set(known)
        if unknown:
            logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
        return replace(self, **known)


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    raw = environ.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _env_float(environ: Mapping[str, str], name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = _env(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s%s: %s; using default %.2f", _ENV_PREFIX, name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(environ: Mapping[str, str], name: str, default: Optional[int], *, min_value: int | None = None) -> Optional[int]:
    raw = _env(environ, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s%s: %s; using default %s", _ENV_PREFIX, name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from the environment, falling back to defaults."""

    environ = os.environ if environ is None else environ
    return Settings(
        base_url=_env(environ, "BASE_URL") or DEFAULT_BASE_URL,
        player_card_path=_env(environ, "PLAYER_CARD_PATH") or DEFAULT_PLAYER_CARD_PATH,
        fixture_url=_env(environ, "FIXTURE_URL") or DEFAULT_FIXTURE_URL,
        timeout=_env_float(environ, "TIMEOUT", DEFAULT_TIMEOUT, clamp_min=0.1),
        session_key=_env(environ, "SESSION_KEY"),
        module_access=_env(environ, "MODULE_ACCESS") or "7",
        website_id=_env_int(environ, "WEBSITE_ID", 1) or 1,
        sports_id=_env_int(environ, "SPORTS_ID", None),
        offset_minutes=_env_int(environ, "OFFSET_MINUTES", DEFAULT_OFFSET_MINUTES) or 0,
    )
