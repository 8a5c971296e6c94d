"""
asosuite-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, network, parse and server errors."""

    exit_code = 1


class SetupError(CliError):
    """No stored credential. Run `asosuite login` first."""


class ApiError(CliError):
    """Raised by the request gateway for non-2xx responses.

    Carries the HTTP status and the parsed error body (or None) so callers
    can branch on specific codes.
    """

    def __init__(self, message, status, payload=None, origin=None):
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.origin = origin


class LoginError(CliError):
    """Device login ended in a terminal failure state."""

    def __init__(self, message, state):
        super().__init__(message)
        self.state = state
