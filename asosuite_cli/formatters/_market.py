"""Formatters for charts, editorial features, ratings, and events."""

from asosuite_cli._utils import _items
from asosuite_cli.formatters._core import _header_block
from asosuite_cli.formatters._table import _table, _trunc


def format_charts(result):
    entries = _items(result, "entries") or _items(result, "rankings")
    header = []
    if isinstance(result, dict):
        header = _header_block(
            [
                ("Region", result.get("region")),
                ("Platform", result.get("platform")),
                ("Chart", result.get("chart")),
                ("Category", result.get("category")),
                ("Date", result.get("date")),
            ]
        )
    if not entries:
        return "\n".join(header + ["No chart entries."])
    cols = [("Rank", ">"), ("App ID", "<"), ("Name", "<"), ("Developer", "<")]
    rows = [
        (
            e.get("rank"),
            str(e.get("appId") or e.get("id") or ""),
            _trunc(e.get("name") or "", 40),
            _trunc(e.get("developer") or "", 30),
        )
        for e in entries
    ]
    return "\n".join(header + [""] + [_table(cols, rows)])


def format_features(result):
    features = _items(result, "features")
    if not features:
        return "No editorial features in this period."
    cols = [("Date", "<"), ("Region", "<"), ("Type", "<"), ("Title", "<")]
    rows = [
        (
            f.get("date") or "",
            f.get("region") or "",
            f.get("type") or f.get("kind") or "",
            _trunc(f.get("title") or "", 50),
        )
        for f in features
    ]
    return _table(cols, rows, f"Total: {len(features)} features")


def _average(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "n/a"
    return f"{value:.2f}"


def format_ratings(result):
    result = result if isinstance(result, dict) else {}
    lines = _header_block(
        [
            ("App ID", result.get("appId")),
            ("Region", result.get("region")),
            ("Period", f"{result['period']} days" if result.get("period") else None),
        ]
    )
    lines.append(f"Average: {_average(result.get('average'))}")
    lines.append(f"Ratings: {result.get('count', 'n/a')}")
    histogram = result.get("histogram")
    if isinstance(histogram, dict) and histogram:
        lines.append("")
        for star in ("5", "4", "3", "2", "1"):
            count = histogram.get(star, histogram.get(int(star), 0))
            lines.append(f"  {star}★ {count}")
    history = _items(result, "history")
    if history:
        lines.append("")
        cols = [("Date", "<"), ("Average", ">"), ("Ratings", ">")]
        rows = [(h.get("date") or "", _average(h.get("average")), h.get("count")) for h in history]
        lines.append(_table(cols, rows))
    return "\n".join(lines)


def format_events(result):
    events = _items(result, "events")
    if not events:
        return "No events."
    cols = [("ID", "<"), ("Date", "<"), ("App ID", "<"), ("Region", "<"), ("Title", "<")]
    rows = [
        (
            str(e.get("id") or ""),
            e.get("date") or "",
            str(e.get("appId") or ""),
            e.get("region") or "",
            _trunc(e.get("title") or "", 50),
        )
        for e in events
    ]
    return _table(cols, rows, f"Total: {len(events)} events")
