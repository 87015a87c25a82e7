"""Lenient parsing of release dates found in plugin manifests.

Manifests in the wild carry dates as ISO-8601 strings, "Jan 1, 2020"
style strings or epoch milliseconds. Anything unparseable maps to the
epoch so a bad date never rejects a release.
"""

from datetime import datetime, timezone

from plugin_updater.constants import EPOCH, RELEASE_DATE_FORMATS


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_release_date(value: object) -> datetime:
    """Parse a manifest date value.

    Args:
        value: Raw JSON value (string, number or None)

    Returns:
        Timezone-aware datetime; EPOCH when missing or invalid

    """
    if value is None or isinstance(value, bool):
        return EPOCH

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return EPOCH

    if not isinstance(value, str) or not value.strip():
        return EPOCH

    text = value.strip()
    try:
        # Python 3.11+ accepts a trailing "Z"
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        pass

    for date_format in RELEASE_DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, date_format))
        except ValueError:
            continue

    return EPOCH


def is_epoch(value: datetime) -> bool:
    """Return True when the date is the epoch placeholder."""
    return value.timestamp() == 0
