"""WhatsApp reminder messages and wa.me deep links."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from dateutil import parser

from dress_studio.config import DEFAULT_COUNTRY_CODE

WHATSAPP_BASE_URL = "https://wa.me"

_PHONE_NOISE = re.compile(r"[\s\-()]")


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Return the phone as international digits, as wa.me expects."""
    cleaned = _PHONE_NOISE.sub("", phone or "")
    if cleaned.startswith("0"):
        cleaned = country_code + cleaned[1:]
    return cleaned.lstrip("+")


def format_display_date(value: str) -> str:
    """Format an ISO date the way the studio writes it (``1.7.2024``)."""
    parsed = parser.isoparse(value).date()
    return f"{parsed.day}.{parsed.month}.{parsed.year}"


def render_template(
    template: str,
    customer_name: Optional[str] = None,
    date: Optional[str] = None,
    time: Optional[str] = None,
    dress_name: Optional[str] = None,
) -> str:
    """Fill the reminder placeholders; unknown braces are left untouched.

    ``{time}`` expands to `` בשעה HH:MM`` when a time is given and to nothing
    otherwise, so templates can place it right after the date.
    """
    replacements = {
        "{customer_name}": customer_name or "",
        "{date}": date or "",
        "{time}": f" בשעה {time}" if time else "",
        "{dress_name}": dress_name or "",
    }
    message = template
    for placeholder, value in replacements.items():
        message = message.replace(placeholder, value)
    return message


def build_whatsapp_link(
    phone: str,
    message: str,
    country_code: str = DEFAULT_COUNTRY_CODE,
) -> str:
    digits = normalize_phone(phone, country_code)
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(message, safe='')}"
