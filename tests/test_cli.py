"""Tests for cli.py — global flags, argument parsing, error rendering, exit codes."""

import json
from unittest.mock import patch

import pytest

from asosuite_cli import config
from asosuite_cli.cli import (
    _describe_api_error,
    _extract_global_flags,
    _retry_after_seconds,
    main,
    parse_command,
)
from asosuite_cli.exceptions import ApiError, CliError

# ---------------------------------------------------------------------------
# _extract_global_flags
# ---------------------------------------------------------------------------


class TestExtractGlobalFlags:
    def test_no_flags(self):
        assert _extract_global_flags(["keywords", "a"]) == ("table", False, ["keywords", "a"])

    def test_json_anywhere(self):
        fmt, verbose, remaining = _extract_global_flags(["keywords", "--json", "a"])
        assert fmt == "json"
        assert remaining == ["keywords", "a"]

    def test_format_flag(self):
        fmt, _, remaining = _extract_global_flags(["--format", "json", "subscription"])
        assert fmt == "json"
        assert remaining == ["subscription"]

    def test_invalid_format(self):
        with pytest.raises(CliError, match="Invalid format 'xml'"):
            _extract_global_flags(["subscription", "--format", "xml"])

    def test_verbose(self):
        _, verbose, remaining = _extract_global_flags(["-v", "list-apps"])
        assert verbose is True
        assert remaining == ["list-apps"]

    def test_double_dash_passthrough(self):
        fmt, _, remaining = _extract_global_flags(["keywords", "--", "--json"])
        assert fmt == "table"
        assert remaining == ["keywords", "--", "--json"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _extract_global_flags(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"asosuite-cli {config.VERSION}"


# ---------------------------------------------------------------------------
# parse_command
# ---------------------------------------------------------------------------


class TestParseCommand:
    def test_intermixed_options(self):
        ns = parse_command(
            ["keywords", "--region", "SE", "run tracker", "--app", "1606429298", "calorie"]
        )
        assert ns.command == "keywords"
        assert ns.region == "SE"
        assert ns.app == "1606429298"
        assert ns.args == ["run tracker", "calorie"]

    def test_unknown_command(self):
        with pytest.raises(CliError, match="Unknown command: frobnicate"):
            parse_command(["frobnicate"])

    def test_missing_positional(self):
        with pytest.raises(CliError):
            parse_command(["track-app"])

    def test_invalid_action(self):
        with pytest.raises(CliError):
            parse_command(["tracked-keywords", "rename"])

    def test_page_must_be_positive(self):
        with pytest.raises(CliError):
            parse_command(["list-apps", "--page", "0"])

    def test_events_date_flags(self):
        ns = parse_command(["events", "list", "--from", "2026-01-01", "--to", "2026-01-31"])
        assert ns.action == "list"
        assert ns.date_from == "2026-01-01"
        assert ns.date_to == "2026-01-31"

    def test_charts_default(self):
        assert parse_command(["charts"]).chart == "free"

    def test_login_no_open(self):
        assert parse_command(["login", "--no-open"]).no_open is True

    def test_double_dash_keeps_dash_keywords(self):
        ns = parse_command(["keywords", "--region", "SE", "run", "--", "-foo", "--app"])
        assert ns.region == "SE"
        assert ns.app is None
        assert ns.args == ["run", "-foo", "--app"]

    def test_double_dash_with_action(self):
        ns = parse_command(["tracked-keywords", "add", "--planned", "next", "--", "-x"])
        assert ns.action == "add"
        assert ns.args == ["-x"]

    def test_double_dash_without_positionals(self):
        with pytest.raises(CliError, match="unrecognized arguments: -x"):
            parse_command(["list-apps", "--", "-x"])


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------


class TestDescribeApiError:
    def test_401(self):
        assert _describe_api_error(ApiError("Unauthorized", 401)) == [
            "Authentication failed. Run `asosuite login` again."
        ]

    def test_402_with_subscribe_url(self):
        err = ApiError("Subscription required", 402, {"subscribeUrl": "https://x/sub"})
        assert _describe_api_error(err) == ["Subscription required", "Subscribe: https://x/sub"]

    def test_402_without_url(self):
        assert _describe_api_error(ApiError("Subscription required", 402, {})) == [
            "Subscription required"
        ]

    def test_429_rounds_up(self):
        err = ApiError("Rate limited", 429, {"retryAfterSeconds": 2.2})
        assert _describe_api_error(err) == ["Rate limited", "Retry after: 3s"]

    def test_404(self):
        assert _describe_api_error(ApiError("Not Found", 404)) == [
            "CLI endpoint not found on server.",
            "Expected server URL: https://server.asosuite.com",
        ]

    def test_other_status_uses_message(self):
        assert _describe_api_error(ApiError("Invalid keywords", 400)) == ["Invalid keywords"]

    @pytest.mark.parametrize(
        "payload", [None, {}, {"retryAfterSeconds": "x"}, {"retryAfterSeconds": 0}]
    )
    def test_retry_after_absent(self, payload):
        assert _retry_after_seconds(payload) is None


# ---------------------------------------------------------------------------
# main() exit codes
# ---------------------------------------------------------------------------


class TestMain:
    def test_no_args_prints_help(self, capsys):
        main([])
        assert "ASO Suite CLI" in capsys.readouterr().out

    def test_help_flag_after_command(self, capsys):
        main(["keywords", "--help"])
        assert "Usage:" in capsys.readouterr().out

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_dash_keyword_after_double_dash(self, MockClient, capsys):
        MockClient.return_value.keyword_metrics.return_value = {"metrics": []}
        main(["keywords", "--", "-h", "--json"])
        MockClient.return_value.keyword_metrics.assert_called_once_with(
            keywords=["-h", "--json"], app=None, region=None, platform=None
        )

    def test_verbose_enables_http_log(self, capsys):
        main(["-v", "help"])
        assert config.HTTP_LOG_ENABLED is True

    def test_not_logged_in(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["subscription"])
        assert exc_info.value.code == 1
        assert "[SETUP_NEEDED] Not authenticated" in capsys.readouterr().err

    def test_not_logged_in_json(self, capsys):
        with pytest.raises(SystemExit):
            main(["--json", "subscription"])
        payload = json.loads(capsys.readouterr().err)
        assert payload["ok"] is False
        assert payload["error"]["type"] == "setup_needed"
        assert payload["error"]["exit_code"] == 1

    def test_unknown_command_exit_1(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 1
        assert "Unknown command: frobnicate" in capsys.readouterr().err

    def test_validation_error_before_network(self, capsys):
        config.save_config({"accessToken": "tok", "expiresAt": "x"})
        with patch("asosuite_cli.client.api_request") as mock_api:
            with pytest.raises(SystemExit):
                main(["keywords", "--region", "USA", "run tracker"])
        mock_api.assert_not_called()
        assert "Invalid --region value 'USA'" in capsys.readouterr().err

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_api_error_rendered(self, MockClient, capsys):
        MockClient.return_value.get_subscription.side_effect = ApiError(
            "Rate limited", 429, {"retryAfterSeconds": 5}
        )
        with pytest.raises(SystemExit) as exc_info:
            main(["subscription"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err == "Rate limited\nRetry after: 5s\n"

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_api_error_json(self, MockClient, capsys):
        MockClient.return_value.get_subscription.side_effect = ApiError("Payment", 402, {})
        with pytest.raises(SystemExit):
            main(["subscription", "--json"])
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"]["type"] == "subscription_required"
        assert payload["error"]["status"] == 402

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_keyboard_interrupt_130(self, MockClient, capsys):
        MockClient.return_value.get_subscription.side_effect = KeyboardInterrupt
        with pytest.raises(SystemExit) as exc_info:
            main(["subscription"])
        assert exc_info.value.code == 130

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_stored_token_passed_to_client(self, MockClient, capsys):
        config.save_config({"accessToken": "tok", "expiresAt": "x"})
        MockClient.return_value.get_subscription.return_value = {"plan": "pro"}
        main(["subscription"])
        MockClient.assert_called_once_with(access_token="tok")
        assert "Plan: pro" in capsys.readouterr().out

    @patch("asosuite_cli.cli.AsoSuiteClient")
    def test_login_end_to_end(self, MockClient, capsys):
        client = MockClient.return_value
        client.start_device_auth.return_value = {"userCode": "ABCD", "deviceCode": "dev"}
        client.poll_device_token.return_value = {
            "accessToken": "new-token",
            "expiresAt": "2026-12-01T00:00:00.000Z",
        }
        main(["login", "--no-open"])
        assert config.load_config()["accessToken"] == "new-token"
        out = capsys.readouterr().out
        assert "Code: ABCD" in out
        assert "Authenticated successfully." in out
