from decimal import Decimal

from django import template

register = template.Library()


@register.filter
def currency(amount_in_cents):
    """Format an amount in cents as US dollars, e.g. 155000 -> $1,550.00."""
    if amount_in_cents in (None, ""):
        return ""
    value = Decimal(amount_in_cents) / 100
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


@register.filter
def short_date(value):
    """Format a date as e.g. Jan 1, 2024."""
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value.year}"
