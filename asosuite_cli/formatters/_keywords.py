"""Formatters for keyword metrics and tracked keywords."""

from asosuite_cli._utils import _items
from asosuite_cli.formatters._core import _header_block
from asosuite_cli.formatters._table import _table


def _metric_value(value, pending):
    if pending:
        return "pending"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "n/a"
    return str(value)


def _position_value(position):
    if isinstance(position, bool) or not isinstance(position, (int, float)):
        return "-"
    return f"#{position}"


def _change_value(change):
    if isinstance(change, bool) or not isinstance(change, (int, float)) or change == 0:
        return "-"
    # Negative delta means the app climbed.
    return f"+{-change}" if change < 0 else f"-{change}"


def _metrics_table(metrics, show_position=False, show_change=False):
    cols = [("Keyword", "<"), ("Popularity", ">"), ("Difficulty", ">")]
    if show_position:
        cols.append(("Position", ">"))
    if show_change:
        cols.append(("Change", ">"))
    rows = []
    for m in metrics:
        row = [
            str(m.get("keyword", "")),
            _metric_value(m.get("popularity"), m.get("popularityPending")),
            _metric_value(m.get("difficulty"), m.get("difficultyPending")),
        ]
        if show_position:
            row.append(_position_value(m.get("position")))
        if show_change:
            row.append(_change_value(m.get("positionChange")))
        rows.append(tuple(row))
    return _table(cols, rows)


def format_keyword_metrics(result):
    """Header block plus Keyword/Popularity/Difficulty[/Position] table."""
    result = result if isinstance(result, dict) else {}
    metrics = _items(result, "metrics")
    app_id = result.get("appId")
    lines = _header_block(
        [
            ("Region", result.get("region")),
            ("Keywords", result.get("keywordCount", len(metrics))),
        ]
    )
    if app_id:
        lines.extend(_header_block([("App ID", app_id), ("Platform", result.get("platform"))]))
    lines.append("")
    lines.append(_metrics_table(metrics, show_position=bool(app_id)))
    return "\n".join(lines)


def format_tracked_keywords(result):
    keywords = _items(result, "keywords")
    header = []
    if isinstance(result, dict):
        header = _header_block(
            [
                ("App ID", result.get("appId")),
                ("Planned app", result.get("plannedTrackedAppId")),
                ("Region", result.get("region")),
                ("Platform", result.get("platform")),
            ]
        )
    if not keywords:
        return "\n".join(header + ["No tracked keywords."])
    show_position = any("position" in k for k in keywords)
    table = _metrics_table(keywords, show_position=show_position, show_change=show_position)
    footer = f"Total: {len(keywords)} keywords"
    return "\n".join(header + ([""] if header else []) + [table, "", footer])
