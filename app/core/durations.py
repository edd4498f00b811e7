"""Parse human-readable lifetimes such as "1h", "15m" or "2 days"."""

import re
from datetime import timedelta

_DURATION_RE = re.compile(
    r"^\s*(?P<amount>-?\d+(?:\.\d+)?|-?\.\d+)\s*(?P<unit>[a-z]+)?\s*$",
    re.IGNORECASE,
)

# Unit aliases -> seconds per unit.
_UNIT_SECONDS: dict[str, float] = {}
for _aliases, _seconds in (
    (("ms", "msec", "msecs", "millisecond", "milliseconds"), 0.001),
    (("s", "sec", "secs", "second", "seconds"), 1),
    (("m", "min", "mins", "minute", "minutes"), 60),
    (("h", "hr", "hrs", "hour", "hours"), 3600),
    (("d", "day", "days"), 86400),
    (("w", "week", "weeks"), 604800),
    (("y", "yr", "yrs", "year", "years"), 31557600),
):
    for _alias in _aliases:
        _UNIT_SECONDS[_alias] = _seconds


def parse_duration(value: str) -> timedelta:
    """
    Convert a lifetime string to a timedelta.

    A bare number is read as seconds. Raises ValueError for anything else
    that is not "<number><unit>".
    """
    if value is None:
        raise ValueError("Duration must be a string such as '1h'")
    match = _DURATION_RE.match(str(value))
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount = float(match.group("amount"))
    unit = (match.group("unit") or "s").lower()
    if unit not in _UNIT_SECONDS:
        raise ValueError(f"Invalid duration unit in {value!r}")
    try:
        return timedelta(seconds=amount * _UNIT_SECONDS[unit])
    except OverflowError as e:
        raise ValueError(f"Duration out of range: {value!r}") from e
