"""Core helpers: client caching, _call dispatcher, response contract, input checks."""

from __future__ import annotations

from asosuite_cli import config
from asosuite_cli.client import AsoSuiteClient
from asosuite_cli.exceptions import ApiError, CliError, SetupError

_client: AsoSuiteClient | None = None

_MAX_TEXT_LENGTH = 500


def _get_client() -> AsoSuiteClient:
    """Return a cached AsoSuiteClient, rebuilding it when the stored token changes."""
    global _client
    token = config.get_access_token(config.load_config())
    if _client is None or _client.access_token != token:
        _client = AsoSuiteClient(access_token=token)
    return _client


def _contract_error(message: str, error_type: str = "error", **detail) -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    error_detail = {"type": error_type, "message": message}
    error_detail.update({k: v for k, v in detail.items() if v is not None})
    return {
        "ok": False,
        "schema_version": config.CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": error_detail,
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", config.CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        error_type = str(out.get("type", "error"))
        error_message = out.get("error", "Unknown error")
        if not isinstance(error_message, str):
            error_message = str(error_message)
            out["error"] = error_message
        out.setdefault("error_detail", {"type": error_type, "message": error_message})
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain contract metadata (ok/schema_version),
          other shapes pass through.
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict):
        normalized = _ensure_contract_dict(result)
        if normalized.get("ok") is False:
            return normalized
        if config.MCP_RESPONSE_MODE == "envelope":
            data = dict(normalized)
            data.pop("ok", None)
            data.pop("schema_version", None)
            return {"ok": True, "schema_version": config.CONTRACT_SCHEMA_VERSION, "data": data}
        return normalized
    if config.MCP_RESPONSE_MODE == "envelope":
        return {"ok": True, "schema_version": config.CONTRACT_SCHEMA_VERSION, "data": result}
    return result


_ALLOWED_METHODS = {
    "get_subscription",
    "search_apps",
    "list_apps",
    "track_app",
    "untrack_app",
    "plan_app",
    "unplan_app",
    "keyword_metrics",
    "list_tracked_keywords",
    "add_tracked_keywords",
    "remove_tracked_keywords",
    "list_related_apps",
    "add_related_app",
    "remove_related_app",
    "list_events",
    "add_event",
    "delete_event",
    "get_charts",
    "get_features",
    "get_ratings",
}


def _validate_text(value: str | None, field: str, max_length: int = _MAX_TEXT_LENGTH):
    """Reject oversized or control-character text before it reaches the server."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise CliError(f"[ERROR] {field} must be a string")
    if len(value) > max_length:
        raise CliError(f"[ERROR] {field} exceeds {max_length} characters")
    if any(ord(ch) < 32 and ch not in "\t\n" for ch in value):
        raise CliError(f"[ERROR] {field} contains control characters")
    return value


def _call(method_name: str, **kwargs):
    """Call an AsoSuiteClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except ApiError as e:
        payload = e.payload if isinstance(e.payload, dict) else {}
        return _contract_error(
            str(e),
            "api",
            status=e.status,
            subscribe_url=payload.get("subscribeUrl"),
            retry_after_seconds=payload.get("retryAfterSeconds"),
        )
    except CliError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
