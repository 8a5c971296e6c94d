"""Core output dispatchers."""

import json


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="table"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        pretty_print(data)


def mutation_response(summary, data=None, fmt="table"):
    """Print a mutation confirmation."""
    if fmt == "json":
        pretty_print(data if data else {"ok": True})
        return
    print(f"OK: {summary}")
    message = data.get("message") if isinstance(data, dict) else None
    if isinstance(message, str) and message.strip():
        print(message.strip())


def _header_block(pairs):
    """Render 'Label: value' lines, skipping empty values."""
    lines = []
    for label, value in pairs:
        if value is None or value == "":
            continue
        lines.append(f"{label}: {value}")
    return lines
