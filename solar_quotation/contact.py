"""
Contact hand-off — link to the sales chat. Only the fixed number is sent.
"""

from typing import Optional

from .config import settings

CHAT_BASE_URL = "https://wa.me/"


def contact_link(number: Optional[str] = None) -> str:
    """Chat URL for the configured contact number (digits only)."""
    number = settings.CONTACT_NUMBER if number is None else number
    digits = "".join(ch for ch in number if ch.isdigit())
    if not digits:
        raise ValueError("CONTACT_NUMBER must contain digits")
    return f"{CHAT_BASE_URL}{digits}"
