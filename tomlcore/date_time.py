"""Date and time payloads for date, time and date-time values."""

from __future__ import annotations

import datetime as _dt

from pydantic import BaseModel, ConfigDict, Field


class Date(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=0, le=9999)
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)

    @classmethod
    def from_date(cls, value: _dt.date) -> Date:
        return cls(year=value.year, month=value.month, day=value.day)

    def __str__(self) -> str:
        from .encoders import encode_date

        return encode_date(self)


class Time(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    second: int = Field(default=0, ge=0, le=59)
    nanosecond: int = Field(default=0, ge=0, le=999_999_999)

    @classmethod
    def from_time(cls, value: _dt.time) -> Time:
        return cls(
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            nanosecond=value.microsecond * 1000,
        )

    def __str__(self) -> str:
        from .encoders import encode_time

        return encode_time(self)


class TimeOffset(BaseModel):
    """Offset from UTC, in minutes."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(default=0, ge=-1440, le=1440)

    @classmethod
    def from_hours_minutes(cls, hours: int, minutes: int) -> TimeOffset:
        return cls(minutes=hours * 60 + minutes)

    @classmethod
    def from_tzinfo(cls, value: _dt.datetime) -> TimeOffset | None:
        delta = value.utcoffset()
        if delta is None:
            return None
        return cls(minutes=int(delta.total_seconds()) // 60)

    def __str__(self) -> str:
        from .encoders import encode_time_offset

        return encode_time_offset(self)


class DateTime(BaseModel):
    """A date and a time, with an optional offset (a local date-time has none)."""

    model_config = ConfigDict(frozen=True)

    date: Date
    time: Time
    offset: TimeOffset | None = None

    @property
    def is_local(self) -> bool:
        return self.offset is None

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> DateTime:
        return cls(
            date=Date.from_date(value.date()),
            time=Time.from_time(value.time()),
            offset=TimeOffset.from_tzinfo(value),
        )

    def __str__(self) -> str:
        from .encoders import encode_date_time

        return encode_date_time(self)
