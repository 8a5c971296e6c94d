"""Formatters for subscription status."""

from asosuite_cli._utils import _format_date


def _yes_no(value):
    return "yes" if value else "no"


def format_subscription(subscription):
    """Format the /subscription payload as readable text."""
    sub = subscription if isinstance(subscription, dict) else {}
    lines = [
        f"Plan: {sub.get('plan') or 'n/a'}",
        f"Active: {_yes_no(sub.get('active'))}",
        f"Subscriber: {_yes_no(sub.get('isSubscriber'))}",
        f"Billing period: {sub.get('billingPeriod') or 'n/a'}",
        f"Expires at: {_format_date(sub.get('expiresAt'))}",
    ]
    if not sub.get("isSubscriber") and sub.get("subscribeUrl"):
        lines.append("")
        lines.append(f"Subscribe: {sub['subscribeUrl']}")
    return "\n".join(lines)
