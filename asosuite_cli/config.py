"""
asosuite-cli shared configuration, constants, and the local credential store.
Standalone module — no imports from other project files.
"""

import json
import os
import tempfile

# ---------------------------------------------------------------------------
# Env helpers
# ---------------------------------------------------------------------------


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.0"

WEB_BASE_URL = os.environ.get("ASOSUITE_WEB_URL", "https://www.asosuite.com").rstrip("/")
API_BASE_URL = os.environ.get("ASOSUITE_API_URL", "https://server.asosuite.com").rstrip("/")

DEFAULT_REGION = "US"
DEFAULT_PLATFORM = "iphone"
SUPPORTED_PLATFORMS = ("iphone", "ipad", "mac", "appletv", "watch", "vision")
VALID_PERIODS = (7, 30, 90)
VALID_CHARTS = ("free", "paid", "grossing")

APP_ID_MIN_LENGTH = 6
PLANNED_ID_MAX_LENGTH = 64
MAX_METRICS_KEYWORDS = 50
MAX_TRACKED_KEYWORDS = 200

DEFAULT_POLL_INTERVAL_SECONDS = 3
DEFAULT_LOGIN_EXPIRES_SECONDS = 600

# None leaves the socket default in place (no per-request timeout).
HTTP_TIMEOUT_SECONDS = _env_float("ASOSUITE_HTTP_TIMEOUT_SECONDS", None)
HTTP_MAX_RESPONSE_BYTES = _env_int("ASOSUITE_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("ASOSUITE_HTTP_LOG", False)

# Stable shape of machine-readable output (CLI --json errors, MCP tool results).
CONTRACT_SCHEMA_VERSION = "1.0"
_mcp_mode = os.environ.get("ASOSUITE_MCP_RESPONSE_MODE", "legacy").strip().lower()
MCP_RESPONSE_MODE = _mcp_mode if _mcp_mode in {"legacy", "envelope"} else "legacy"

# ---------------------------------------------------------------------------
# Credential store
# ---------------------------------------------------------------------------

CONFIG_DIR = os.environ.get("ASOSUITE_CONFIG_DIR") or os.path.join(
    os.path.expanduser("~"), ".asosuite"
)
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")


def load_config():
    """Read the credential file. Missing, unreadable or non-object content yields {}."""
    try:
        with open(CONFIG_PATH, encoding="utf-8") as f:
            parsed = json.load(f)
    except (OSError, ValueError):
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


def save_config(data):
    """Replace the credential file wholesale (atomic write-then-rename)."""
    os.makedirs(CONFIG_DIR, mode=0o700, exist_ok=True)
    try:
        os.chmod(CONFIG_DIR, 0o700)
    except (OSError, NotImplementedError):
        pass
    fd, tmp_path = tempfile.mkstemp(dir=CONFIG_DIR, prefix=".config_tmp_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2) + "\n")
        os.replace(tmp_path, CONFIG_PATH)
    except Exception:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    # Restrict to owner-only on Unix/Mac. No-op on Windows.
    try:
        os.chmod(CONFIG_PATH, 0o600)
    except (OSError, NotImplementedError):
        pass


def get_access_token(data):
    """Return the stored bearer token, or None when absent or blank."""
    if not isinstance(data, dict):
        return None
    token = data.get("accessToken")
    if not isinstance(token, str) or not token.strip():
        return None
    return token.strip()
