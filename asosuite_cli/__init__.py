"""asosuite-cli — command-line client for ASO Suite keyword, chart and app tracking data."""

from asosuite_cli.client import AsoSuiteClient
from asosuite_cli.config import VERSION
from asosuite_cli.exceptions import ApiError, CliError, LoginError, SetupError
from asosuite_cli.models import AppLocator, Credential, DeviceAuthSession
from asosuite_cli.types import (
    ChartEntry,
    ChartsResult,
    KeywordMetric,
    KeywordMetricsResult,
    SubscriptionStatus,
    TrackedKeyword,
)

__all__ = [
    "VERSION",
    "AsoSuiteClient",
    "ApiError",
    "AppLocator",
    "CliError",
    "Credential",
    "DeviceAuthSession",
    "LoginError",
    "SetupError",
    "ChartEntry",
    "ChartsResult",
    "KeywordMetric",
    "KeywordMetricsResult",
    "SubscriptionStatus",
    "TrackedKeyword",
]
