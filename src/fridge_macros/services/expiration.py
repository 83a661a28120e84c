"""Expiration classification for inventory lots."""

from datetime import date, timedelta

from fridge_macros.domain.inventory import ExpirationStatus

EXPIRING_SOON_DAYS = 2


def days_until(expiration_date: date, reference: date) -> int:
    """Return whole days from ``reference`` to ``expiration_date``."""
    return (expiration_date - reference).days


def get_expiration_status(
    expiration_date: date, today: date | None = None
) -> ExpirationStatus:
    """Classify an expiration date relative to today."""
    diff_days = days_until(expiration_date, today or date.today())
    if diff_days < 0:
        return ExpirationStatus.EXPIRED
    if diff_days == 0:
        return ExpirationStatus.DUE_TODAY
    if diff_days <= EXPIRING_SOON_DAYS:
        return ExpirationStatus.EXPIRING_SOON
    return ExpirationStatus.OK


def is_expired(expiration_date: date, today: date | None = None) -> bool:
    """Return True once the expiration date has passed."""
    return get_expiration_status(expiration_date, today) == ExpirationStatus.EXPIRED


def is_due_today_or_expired(expiration_date: date, today: date | None = None) -> bool:
    """Return True when the lot must be eaten today or is already expired."""
    return get_expiration_status(expiration_date, today) in {
        ExpirationStatus.EXPIRED,
        ExpirationStatus.DUE_TODAY,
    }


def is_expiring_for_tomorrow(expiration_date: date, today: date | None = None) -> bool:
    """Return True when the lot expires within two days of tomorrow."""
    tomorrow = (today or date.today()) + timedelta(days=1)
    return days_until(expiration_date, tomorrow) <= EXPIRING_SOON_DAYS
