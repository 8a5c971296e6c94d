"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from table output.
    Preserves newlines (\\n) and tabs (\\t)."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _cell(value):
    if value is None:
        return "-"
    return _sanitize_str(value) if isinstance(value, str) else str(value)


def _table(columns, rows, footer=None):
    """Build a fixed-width table string.
    columns: list of (name, align) tuples, align "<" (left) or ">" (right).
    rows: list of tuples matching columns. Widths fit the widest cell.
    footer: optional footer line."""
    cells = [[_cell(v) for v in row] for row in rows]
    widths = [len(name) for name, _ in columns]
    for row in cells:
        for i, val in enumerate(row):
            widths[i] = max(widths[i], len(val))

    def _fmt(row):
        parts = []
        for i, val in enumerate(row):
            align = columns[i][1]
            parts.append(f"{val:{align}{widths[i]}}")
        return "  ".join(parts).rstrip()

    lines = [_fmt([name for name, _ in columns])]
    lines.append("  ".join("-" * w for w in widths))
    lines.extend(_fmt(row) for row in cells)
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)
