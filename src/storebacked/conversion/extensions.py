"""
Built-in extension storables for common value types.

- URLs (pydantic AnyUrl / HttpUrl) and Color are records
- UUID and Path are stored as strings
- date is stored as a midnight UTC timestamp
"""

from datetime import date, datetime, time, timezone
from pathlib import Path
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, HttpUrl

from storebacked.conversion.base import DATE, STRING, Mapped
from storebacked.conversion.records import RecordOf
from storebacked.conversion.registry import register_storable


class Color(BaseModel):
    """An RGBA color with components in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    red: float = Field(ge=0.0, le=1.0)
    green: float = Field(ge=0.0, le=1.0)
    blue: float = Field(ge=0.0, le=1.0)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse `#RRGGBB` or `#RRGGBBAA`."""
        digits = value.lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        alpha = channels[3] if len(channels) == 4 else 1.0
        return cls(red=channels[0], green=channels[1], blue=channels[2], alpha=alpha)

    @property
    def hex(self) -> str:
        """The color as `#RRGGBBAA`."""
        return "#" + "".join(
            f"{round(channel * 255):02X}"
            for channel in (self.red, self.green, self.blue, self.alpha)
        )


def _date_to_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        raise TypeError("expected a date, got a datetime")
    return datetime.combine(value, time(0), tzinfo=timezone.utc)


def _datetime_to_date(value: datetime) -> date:
    return value.date()


def _uuid_to_str(value: UUID) -> str:
    if not isinstance(value, UUID):
        raise TypeError(f"expected a UUID, got {type(value).__name__}")
    return str(value)


def _path_to_str(value: Path) -> str:
    if not isinstance(value, Path):
        raise TypeError(f"expected a Path, got {type(value).__name__}")
    return str(value)


URL = RecordOf(AnyUrl)
COLOR = RecordOf(Color)
UUID_STRING = Mapped(STRING, _uuid_to_str, UUID, name="UUID")
PATH_STRING = Mapped(STRING, _path_to_str, Path, name="Path")
DATE_ONLY = Mapped(DATE, _date_to_datetime, _datetime_to_date, name="date")


def register_defaults() -> None:
    """Register the built-in extension storables."""
    register_storable(AnyUrl, URL)
    register_storable(HttpUrl, RecordOf(HttpUrl))
    register_storable(Color, COLOR)
    register_storable(UUID, UUID_STRING)
    register_storable(Path, PATH_STRING)
    register_storable(date, DATE_ONLY)


register_defaults()
