"""Remaining-time formatting and display templates."""
from __future__ import annotations

import enum
import logging
import re

logger = logging.getLogger(__name__)

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR

# Explicit first-argument index, as in "%1$s".
_FIRST_ARG = re.compile(r"%1\$")


class TimeFormat(enum.Enum):
    """Which fields of a duration are shown. Values are the display patterns."""

    DAYS_HOURS_MIN_SEC = "dd:hh:mm:ss"
    HOURS_MIN_SEC = "hh:mm:ss"
    MIN_SEC = "mm:ss"
    SEC = "ss"

    @classmethod
    def parse(cls, value: TimeFormat | str) -> TimeFormat:
        """Accept a member, a member name, or a pattern (case-insensitive)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        try:
            return cls[key.upper()]
        except KeyError:
            pass
        try:
            return cls(key.lower())
        except ValueError:
            raise ValueError(f"Unknown time format {value!r}") from None


def split_duration(ms: int, fmt: TimeFormat) -> tuple[int, ...]:
    """Floor a duration into the fields shown by fmt.

    The leading field absorbs everything above it, so HOURS_MIN_SEC of 26
    hours is (26, 0, 0) and SEC of 61 seconds is (61,).
    """
    ms = max(int(ms), 0)
    if fmt is TimeFormat.DAYS_HOURS_MIN_SEC:
        days, rest = divmod(ms, _MS_PER_DAY)
        hours, rest = divmod(rest, _MS_PER_HOUR)
        minutes, rest = divmod(rest, _MS_PER_MINUTE)
        return (days, hours, minutes, rest // _MS_PER_SECOND)
    if fmt is TimeFormat.HOURS_MIN_SEC:
        hours, rest = divmod(ms, _MS_PER_HOUR)
        minutes, rest = divmod(rest, _MS_PER_MINUTE)
        return (hours, minutes, rest // _MS_PER_SECOND)
    if fmt is TimeFormat.MIN_SEC:
        minutes, rest = divmod(ms, _MS_PER_MINUTE)
        return (minutes, rest // _MS_PER_SECOND)
    return (ms // _MS_PER_SECOND,)


def format_time(ms: int, fmt: TimeFormat = TimeFormat.HOURS_MIN_SEC) -> str:
    return ":".join(f"{field:02d}" for field in split_duration(ms, fmt))


class DisplayFormatter:
    """Renders remaining time, optionally wrapped in a ``%s`` template.

    A template that fails to substitute is reported once per formatter and
    the bare time string is shown instead.
    """

    def __init__(
        self,
        time_format: TimeFormat = TimeFormat.HOURS_MIN_SEC,
        template: str | None = None,
    ) -> None:
        self.time_format = time_format
        self.template = template
        self._logged = False

    @property
    def logged(self) -> bool:
        return self._logged

    def render(self, ms: int) -> str:
        text = format_time(ms, self.time_format)
        if self.template is None:
            return text
        try:
            return _substitute(self.template, text)
        except (TypeError, ValueError):
            if not self._logged:
                logger.warning("Illegal format string: %r", self.template)
                self._logged = True
            return text


def _substitute(template: str, text: str) -> str:
    """printf-style substitution of one argument.

    ``%1$s`` may appear any number of times; a template with no conversion
    at all is shown as-is, the extra argument ignored.
    """
    if _FIRST_ARG.search(template):
        return _FIRST_ARG.sub("%(t)", template) % {"t": text}
    if "%" not in template.replace("%%", ""):
        return template % ()
    return template % (text,)
