"""Typed response definitions for AsoSuiteClient methods.

These TypedDicts document the fields the CLI reads from server payloads.
They are optional — runtime behavior is unchanged (plain dicts), and the
server may send more keys than listed here.
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Auth / account
# ---------------------------------------------------------------------------


class DeviceAuthStart(TypedDict, total=False):
    """Return type of AsoSuiteClient.start_device_auth()."""

    userCode: str
    deviceCode: str
    pollIntervalSeconds: int
    expiresInSeconds: int


class TokenResponse(TypedDict, total=False):
    """Return type of AsoSuiteClient.poll_device_token()."""

    accessToken: str
    expiresAt: str


class SubscriptionStatus(TypedDict, total=False):
    """Return type of AsoSuiteClient.get_subscription()."""

    plan: str
    active: bool
    isSubscriber: bool
    billingPeriod: str | None
    expiresAt: str | None
    subscribeUrl: str | None


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


class KeywordMetric(TypedDict, total=False):
    keyword: str
    popularity: int | None
    popularityPending: bool
    difficulty: int | None
    difficultyPending: bool
    position: int | None


class KeywordMetricsResult(TypedDict, total=False):
    """Return type of AsoSuiteClient.keyword_metrics()."""

    region: str
    keywordCount: int
    appId: str | None
    platform: str
    metrics: list[KeywordMetric]


class TrackedKeyword(KeywordMetric, total=False):
    positionChange: int | None


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------


class ChartEntry(TypedDict, total=False):
    rank: int
    appId: str
    name: str
    developer: str


class ChartsResult(TypedDict, total=False):
    """Return type of AsoSuiteClient.get_charts()."""

    region: str
    platform: str
    chart: str
    category: str | None
    date: str
    entries: list[ChartEntry]
