"""
sponsorapp/utils/helpers.py - Form parsing helpers shared by the actions

Contains:
- clean: trimmed text or None
- required_text / parse_date / parse_level: presence-only validation
- is_uuid: row id shape check for URL parameters
- flag: checkbox-style boolean
- utc_now: timestamp for updated_at columns
"""

import uuid
from datetime import date, datetime, timezone


def clean(value):
    """
    Trim a submitted value.

    Returns:
        str or None: stripped text, None when blank or missing
    """
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def required_text(form, name):
    """Trimmed required field, or None when it is missing or blank."""
    return clean(form.get(name))


def parse_date(value):
    """ISO date (YYYY-MM-DD) or None when it does not parse."""
    value = clean(value)
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_level(value):
    """Tier level: an integer >= 1, otherwise None."""
    value = clean(value)
    if not value:
        return None
    try:
        level = int(value)
    except ValueError:
        return None
    return level if level >= 1 else None


def is_uuid(value):
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def flag(form, name):
    return form.get(name) == 'true'


def utc_now():
    return datetime.now(timezone.utc)
