"""Countdown configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from tick_countdown.format import TimeFormat


@dataclass(frozen=True)
class CountdownConfig:
    """Immutable settings for a CountdownView.

    Attributes:
        time_in_future: Countdown length in milliseconds.
        countdown_interval: Milliseconds between ticks.
        time_format: Fields shown in the display text.
        template: Optional ``%s`` template wrapped around the time text.
        auto_display_text: Push formatted text to the sink on each tick.
    """

    time_in_future: int = 0
    countdown_interval: int = 1000
    time_format: TimeFormat = TimeFormat.HOURS_MIN_SEC
    template: str | None = None
    auto_display_text: bool = False

    def __post_init__(self) -> None:
        if self.time_in_future < 0:
            raise ValueError("time_in_future must be non-negative")
        if self.countdown_interval <= 0:
            raise ValueError("countdown_interval must be positive")
        if not isinstance(self.time_format, TimeFormat):
            object.__setattr__(self, "time_format", TimeFormat.parse(self.time_format))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CountdownConfig:
        """Build from plain key/value attributes, e.g. parsed from a layout file."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeyError(f"Unknown countdown attributes: {', '.join(unknown)}")
        kwargs = dict(data)
        for key in ("time_in_future", "countdown_interval"):
            if key in kwargs:
                kwargs[key] = int(kwargs[key])
        if "auto_display_text" in kwargs:
            kwargs["auto_display_text"] = _to_bool(kwargs["auto_display_text"])
        return cls(**kwargs)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return bool(value)
