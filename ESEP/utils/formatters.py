"""
Formatting helpers shared across Streamlit pages.
Currency formatting, status badges, date helpers.
"""

from decimal import Decimal
from datetime import datetime, date
from typing import Union


def format_currency(amount: Union[int, float, Decimal, str]) -> str:
    """Format amount as Indian Rupee currency string."""
    try:
        if isinstance(amount, str):
            amount = Decimal(amount)
        elif isinstance(amount, (int, float)):
            amount = Decimal(str(amount))
        return f"₹{amount:,.2f}"
    except Exception:
        return f"₹{amount}"


def format_fee(amount: Union[int, float, Decimal]) -> str:
    """Offer fee label; zero fees read FREE."""
    if Decimal(str(amount)) == 0:
        return "FREE"
    return format_currency(amount)


def format_date(dt: Union[datetime, date, None]) -> str:
    """Format date for display."""
    if dt is None:
        return "N/A"
    if isinstance(dt, datetime):
        return dt.strftime("%d %b %Y, %I:%M %p")
    return dt.strftime("%d %b %Y")


def format_short_date(dt: Union[datetime, date, None]) -> str:
    """Day/month/year, used in exports."""
    if dt is None:
        return ""
    return dt.strftime("%d/%m/%Y")


def status_badge(status: str) -> str:
    """Return display text for registration and admin status values."""
    badges = {
        "pending": "Pending",
        "approved": "Approved",
        "rejected": "Rejected",
        "active": "Active",
        "inactive": "Inactive",
    }
    return badges.get(status, status.replace("_", " ").title())


STATUS_MESSAGES = {
    "pending": "Your registration is under review. We will contact you soon.",
    "approved": "Congratulations! Your registration has been approved.",
    "rejected": "Your registration was not approved. Please contact support for more information.",
}
