"""
Validation rules for incoming contact and booking records.

All functions are pure. A failed rule raises `ValidationFailed` carrying the
field name and a human readable reason; passing rules return the parsed value
where there is one.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional, Tuple

from errors import ValidationFailed

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.\S+")
PHONE_RE = re.compile(r"[\d\s\-\+\(\)]+")
INTEGER_RE = re.compile(r"[+-]?[0-9]+")

MIN_PHONE_LEN = 10
MIN_NAME_LEN = 2
MAX_NAME_LEN = 100
MIN_GUESTS = 1
MAX_GUESTS = 10

BOOKING_STATUSES = ("pending", "confirmed", "checked-in", "completed", "cancelled")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if is_blank(payload.get(f))]
    if missing:
        raise ValidationFailed(missing[0], f"Missing required fields: {', '.join(missing)}")


def clean_text(value: Any, field: str) -> str:
    """Trim a free-text value, rejecting anything that is not a string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationFailed(field, f"{field} must be a string")
    return value.strip()


def validate_email(value: Any, field: str = "email") -> str:
    """Check `local@domain.tld` shape and return the normalized address."""
    if not isinstance(value, str) or not EMAIL_RE.fullmatch(value.strip()):
        raise ValidationFailed(field, "Invalid email format")
    return value.strip().lower()


def validate_phone(value: Any, field: str = "guestPhone") -> str:
    if is_blank(value):
        return ""
    phone = value.strip() if isinstance(value, str) else None
    if phone is None or not PHONE_RE.fullmatch(phone):
        raise ValidationFailed(field, "Phone number may contain only digits, spaces and - + ( )")
    if len(phone) < MIN_PHONE_LEN:
        raise ValidationFailed(field, f"Phone number must be at least {MIN_PHONE_LEN} characters")
    return phone


def validate_name(value: Any, field: str = "name") -> str:
    name = clean_text(value, field)
    if not MIN_NAME_LEN <= len(name) <= MAX_NAME_LEN:
        raise ValidationFailed(field, f"Name must be between {MIN_NAME_LEN} and {MAX_NAME_LEN} characters")
    return name


def parse_date(value: Any, field: str) -> date:
    """
    Parse a calendar date from `YYYY-MM-DD` or an ISO datetime string.

    Any time component is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationFailed(field, f"Invalid date for {field}")
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationFailed(field, f"Invalid date for {field}")


def validate_dates(check_in: Any, check_out: Any, today: Optional[date] = None) -> Tuple[date, date]:
    check_in_date = parse_date(check_in, "checkInDate")
    check_out_date = parse_date(check_out, "checkOutDate")
    today = today or date.today()
    if check_in_date < today:
        raise ValidationFailed("checkInDate", "Check-in date cannot be in the past")
    if check_out_date <= check_in_date:
        raise ValidationFailed("checkOutDate", "Check-out date must be after check-in date")
    return check_in_date, check_out_date


def compute_duration(check_in, check_out) -> int:
    """Number of nights between two dates, rounded up to whole days."""
    return math.ceil((check_out - check_in) / timedelta(days=1))


def validate_guest_count(value: Any, field: str = "numberOfGuests") -> int:
    reason = f"Number of guests must be an integer between {MIN_GUESTS} and {MAX_GUESTS}"
    if isinstance(value, bool):
        raise ValidationFailed(field, reason)
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and value.is_integer():
        count = int(value)
    elif isinstance(value, str) and INTEGER_RE.fullmatch(value.strip()):
        count = int(value.strip())
    else:
        raise ValidationFailed(field, reason)
    if not MIN_GUESTS <= count <= MAX_GUESTS:
        raise ValidationFailed(field, reason)
    return count


def validate_price(value: Any, field: str = "totalPrice") -> float:
    reason = "Total price must be a non-negative number"
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationFailed(field, reason)
    try:
        price = float(value)
    except (ValueError, OverflowError):
        raise ValidationFailed(field, reason)
    if not math.isfinite(price) or price < 0:
        raise ValidationFailed(field, reason)
    return price


def validate_status(value: Any, field: str = "status") -> Optional[str]:
    """Return the status when one was provided, None otherwise."""
    if is_blank(value):
        return None
    if value not in BOOKING_STATUSES:
        raise ValidationFailed(field, f"Status must be one of: {', '.join(BOOKING_STATUSES)}")
    return value
