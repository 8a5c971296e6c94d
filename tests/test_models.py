"""Tests for models.py — AppLocator, DeviceAuthSession, Credential."""

import pytest

from asosuite_cli.exceptions import CliError
from asosuite_cli.models import AppLocator, Credential, DeviceAuthSession


class TestAppLocator:
    def test_store_app_payload(self):
        assert AppLocator(app_id="1606429298").to_payload() == {"appId": "1606429298"}

    def test_planned_payload(self):
        locator = AppLocator(planned_app_id="next")
        assert locator.is_planned is True
        assert locator.to_payload() == {"plannedTrackedAppId": "next"}

    def test_requires_exactly_one(self):
        with pytest.raises(ValueError):
            AppLocator()
        with pytest.raises(ValueError):
            AppLocator(app_id="1606429298", planned_app_id="next")

    def test_frozen(self):
        locator = AppLocator(app_id="1606429298")
        with pytest.raises(AttributeError):
            locator.app_id = "1"


class TestDeviceAuthSession:
    def test_from_start_response(self):
        session = DeviceAuthSession.from_start_response(
            {
                "userCode": "ABCD-EFGH",
                "deviceCode": "dev-1",
                "pollIntervalSeconds": 5,
                "expiresInSeconds": 300,
            }
        )
        assert session.user_code == "ABCD-EFGH"
        assert session.device_code == "dev-1"
        assert session.poll_interval_seconds == 5
        assert session.expires_in_seconds == 300

    def test_defaults_for_missing_numbers(self):
        session = DeviceAuthSession.from_start_response({"userCode": "U", "deviceCode": "D"})
        assert session.poll_interval_seconds == 3
        assert session.expires_in_seconds == 600

    @pytest.mark.parametrize("bad", [0, -1, "abc", None, float("nan"), float("inf")])
    def test_non_positive_interval_falls_back(self, bad):
        session = DeviceAuthSession.from_start_response(
            {"userCode": "U", "deviceCode": "D", "pollIntervalSeconds": bad}
        )
        assert session.poll_interval_seconds == 3

    def test_fractional_interval_kept(self):
        session = DeviceAuthSession.from_start_response(
            {"userCode": "U", "deviceCode": "D", "pollIntervalSeconds": 1.5}
        )
        assert session.poll_interval_seconds == 1.5

    @pytest.mark.parametrize(
        "payload",
        [
            {"deviceCode": "D"},
            {"userCode": "U"},
            {"userCode": "  ", "deviceCode": "D"},
            [],
            None,
            "text",
        ],
    )
    def test_invalid_payload(self, payload):
        with pytest.raises(CliError, match="invalid authentication payload"):
            DeviceAuthSession.from_start_response(payload)

    def test_verification_url_encodes_code(self):
        session = DeviceAuthSession("AB CD", "D", 3, 600)
        assert session.verification_url == "https://www.asosuite.com/cli/auth?code=AB%20CD"


class TestCredential:
    def test_from_token_response(self):
        cred = Credential.from_token_response(
            {"accessToken": "tok", "expiresAt": "2026-12-01T00:00:00.000Z"}
        )
        assert cred.to_dict() == {
            "accessToken": "tok",
            "expiresAt": "2026-12-01T00:00:00.000Z",
        }

    @pytest.mark.parametrize(
        "payload",
        [{"accessToken": "tok"}, {"expiresAt": "x"}, {"accessToken": "", "expiresAt": "x"}, None],
    )
    def test_invalid(self, payload):
        with pytest.raises(CliError, match="invalid token response"):
            Credential.from_token_response(payload)
