"""
Device-code login flow.

    STARTING -> WAITING_APPROVAL -> AUTHENTICATED
                                 -> EXPIRED | INVALIDATED | TIMED_OUT | FAILED

The poll loop is the only retrying construct in the CLI. Time is read and
spent through an injected Clock so tests can run the loop instantly.
"""

from __future__ import annotations

import enum
import threading
import time
import webbrowser

from asosuite_cli.exceptions import ApiError, CliError, LoginError
from asosuite_cli.models import Credential, DeviceAuthSession

_STATUS_NOT_APPROVED = 428
_STATUS_EXPIRED = 410
_STATUS_INVALIDATED = frozenset({400, 409})


class LoginState(enum.Enum):
    STARTING = "starting"
    WAITING_APPROVAL = "waiting_approval"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"
    INVALIDATED = "invalidated"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


TERMINAL_STATES = frozenset(
    {
        LoginState.AUTHENTICATED,
        LoginState.EXPIRED,
        LoginState.INVALIDATED,
        LoginState.TIMED_OUT,
        LoginState.FAILED,
    }
)


class SystemClock:
    """Monotonic clock whose sleep can be interrupted with cancel()."""

    def __init__(self):
        self._cancelled = threading.Event()

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if self._cancelled.wait(max(0.0, seconds)):
            raise LoginError("[ERROR] Login cancelled.", LoginState.FAILED)

    def cancel(self) -> None:
        self._cancelled.set()


def open_in_browser(url) -> bool:
    """Best-effort browser launch. Never raises."""
    try:
        return bool(webbrowser.open(url))
    except (webbrowser.Error, OSError):
        return False


class DeviceLogin:
    """Runs one device-authorization handshake against an AsoSuiteClient.

    Args:
        client: object with start_device_auth() and poll_device_token(device_code).
        save_credential: callable receiving the Credential on success.
        clock: provides now() and sleep(seconds). Defaults to SystemClock.
        echo: callable for user-facing progress lines.
        open_browser: callable(url) -> bool, or None to skip opening.
    """

    def __init__(self, client, save_credential, *, clock=None, echo=print, open_browser=None):
        self.client = client
        self.save_credential = save_credential
        self.clock = clock or SystemClock()
        self.echo = echo
        self.open_browser = open_browser
        self.state = LoginState.STARTING
        self.session: DeviceAuthSession | None = None
        self.polls = 0

    def _fail(self, state, message):
        self.state = state
        return LoginError(f"[ERROR] {message}", state)

    def start(self) -> DeviceAuthSession:
        try:
            self.session = DeviceAuthSession.from_start_response(self.client.start_device_auth())
        except CliError:
            self.state = LoginState.FAILED
            raise
        return self.session

    def _announce(self, session):
        self.echo("To authenticate, open:")
        self.echo(f"  {session.verification_url}")
        self.echo(f"Code: {session.user_code}")
        if self.open_browser is not None:
            if self.open_browser(session.verification_url):
                self.echo("Opened browser for authentication.")
            else:
                self.echo("Could not open browser automatically. Open the URL above manually.")
        self.echo("Waiting for approval...")

    def _poll_once(self, session):
        """One token poll. Returns a Credential, or None to keep waiting."""
        self.polls += 1
        try:
            response = self.client.poll_device_token(session.device_code)
        except ApiError as e:
            if e.status == _STATUS_NOT_APPROVED:
                return None
            if e.status == _STATUS_EXPIRED:
                raise self._fail(
                    LoginState.EXPIRED,
                    "Authorization request expired. Run `asosuite login` again.",
                ) from e
            if e.status in _STATUS_INVALIDATED:
                raise self._fail(
                    LoginState.INVALIDATED,
                    "Authorization request is no longer valid. Run `asosuite login` again.",
                ) from e
            self.state = LoginState.FAILED
            raise
        except CliError:
            self.state = LoginState.FAILED
            raise
        try:
            return Credential.from_token_response(response)
        except CliError:
            self.state = LoginState.FAILED
            raise

    def run(self) -> Credential:
        """Drive the flow to a terminal state. Returns the saved Credential."""
        session = self.start()
        self._announce(session)

        deadline = self.clock.now() + session.expires_in_seconds
        self.state = LoginState.WAITING_APPROVAL
        while self.clock.now() < deadline:
            credential = self._poll_once(session)
            if credential is not None:
                self.save_credential(credential)
                self.state = LoginState.AUTHENTICATED
                return credential
            try:
                self.clock.sleep(session.poll_interval_seconds)
            except LoginError as e:
                self.state = e.state
                raise

        raise self._fail(
            LoginState.TIMED_OUT, "Authentication timed out. Run `asosuite login` again."
        )
