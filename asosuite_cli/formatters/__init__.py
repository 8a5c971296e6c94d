"""Output formatting package for asosuite-cli.

Re-exports all public names so consumers can do:
    from asosuite_cli.formatters import format_keyword_metrics
"""

from asosuite_cli.formatters._account import format_subscription
from asosuite_cli.formatters._apps import format_apps_table, format_related_apps
from asosuite_cli.formatters._core import mutation_response, output, pretty_print
from asosuite_cli.formatters._keywords import format_keyword_metrics, format_tracked_keywords
from asosuite_cli.formatters._market import (
    format_charts,
    format_events,
    format_features,
    format_ratings,
)
from asosuite_cli.formatters._table import _CONTROL_RE, _sanitize_str, _table, _trunc

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_apps_table",
    "format_charts",
    "format_events",
    "format_features",
    "format_keyword_metrics",
    "format_ratings",
    "format_related_apps",
    "format_subscription",
    "format_tracked_keywords",
    "mutation_response",
    "output",
    "pretty_print",
]
