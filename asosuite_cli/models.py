"""
Typed value objects for app targets, login sessions and stored credentials.
"""

from __future__ import annotations

import math
import urllib.parse
from dataclasses import dataclass

from asosuite_cli import config
from asosuite_cli.exceptions import CliError


def _positive_number(value, default):
    """Coerce a server-issued number; absent or non-positive values get *default*."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return int(number) if number.is_integer() else number


def _clean_str(value):
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class AppLocator:
    """A store app (numeric id) or a planned app (free-text id). Exactly one is set."""

    app_id: str | None = None
    planned_app_id: str | None = None

    def __post_init__(self):
        if (self.app_id is None) == (self.planned_app_id is None):
            raise ValueError("AppLocator needs exactly one of app_id / planned_app_id")

    @property
    def is_planned(self) -> bool:
        return self.planned_app_id is not None

    def to_payload(self) -> dict:
        if self.planned_app_id is not None:
            return {"plannedTrackedAppId": self.planned_app_id}
        return {"appId": self.app_id}


@dataclass(frozen=True)
class DeviceAuthSession:
    """Server-issued device-code handshake data for one login invocation."""

    user_code: str
    device_code: str
    poll_interval_seconds: float
    expires_in_seconds: float

    @property
    def verification_url(self) -> str:
        code = urllib.parse.quote(self.user_code, safe="")
        return f"{config.WEB_BASE_URL}/cli/auth?code={code}"

    @classmethod
    def from_start_response(cls, value):
        if not isinstance(value, dict):
            value = {}
        user_code = _clean_str(value.get("userCode"))
        device_code = _clean_str(value.get("deviceCode"))
        if not user_code or not device_code:
            raise CliError("[ERROR] Server returned an invalid authentication payload")
        return cls(
            user_code=user_code,
            device_code=device_code,
            poll_interval_seconds=_positive_number(
                value.get("pollIntervalSeconds"), config.DEFAULT_POLL_INTERVAL_SECONDS
            ),
            expires_in_seconds=_positive_number(
                value.get("expiresInSeconds"), config.DEFAULT_LOGIN_EXPIRES_SECONDS
            ),
        )


@dataclass(frozen=True)
class Credential:
    """Bearer token persisted between invocations."""

    access_token: str
    expires_at: str

    @classmethod
    def from_token_response(cls, value):
        if not isinstance(value, dict):
            value = {}
        access_token = _clean_str(value.get("accessToken"))
        expires_at = _clean_str(value.get("expiresAt"))
        if not access_token or not expires_at:
            raise CliError("[ERROR] Server returned an invalid token response")
        return cls(access_token=access_token, expires_at=expires_at)

    def to_dict(self) -> dict:
        return {"accessToken": self.access_token, "expiresAt": self.expires_at}
