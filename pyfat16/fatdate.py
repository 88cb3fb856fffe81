from __future__ import annotations

from dataclasses import dataclass


FAT_EPOCH_YEAR = 1980


@dataclass(frozen=True)
class FatDate:
    """
    Packed FAT date (bits 0-4 day, 5-8 month, 9-15 years since 1980).

    The raw_* fields hold the bit-fields exactly as stored. The display
    properties add one to day and month on top of the stored value, which is
    how this tool has always reported dates even though FAT already stores
    them 1-based (so 2021-06-15 on disk is shown as 2021-07-16).
    """

    raw_day: int
    raw_month: int
    raw_year: int

    @property
    def day(self) -> int:
        return self.raw_day + 1

    @property
    def month(self) -> int:
        return self.raw_month + 1

    @property
    def year(self) -> int:
        return self.raw_year + FAT_EPOCH_YEAR

    @property
    def is_valid(self) -> bool:
        return 1 <= self.raw_day <= 31 and 1 <= self.raw_month <= 12

    def pack(self) -> int:
        return (self.raw_year << 9) | (self.raw_month << 5) | self.raw_day


@dataclass(frozen=True)
class FatTime:
    """Packed FAT time (bits 0-4 two-second count, 5-10 minutes, 11-15 hours)."""

    hour: int
    minute: int
    two_seconds: int

    @property
    def second(self) -> int:
        return self.two_seconds * 2

    @property
    def is_valid(self) -> bool:
        return self.hour <= 23 and self.minute <= 59 and self.two_seconds <= 29

    def pack(self) -> int:
        return (self.hour << 11) | (self.minute << 5) | self.two_seconds


def decode_date(value: int) -> FatDate:
    value &= 0xFFFF
    return FatDate(
        raw_day=value & 0x1F,
        raw_month=(value >> 5) & 0x0F,
        raw_year=(value >> 9) & 0x7F,
    )


def decode_time(value: int) -> FatTime:
    value &= 0xFFFF
    return FatTime(
        hour=(value >> 11) & 0x1F,
        minute=(value >> 5) & 0x3F,
        two_seconds=value & 0x1F,
    )


def encode_date(year: int, month: int, day: int) -> int:
    """Pack a calendar date the way FAT stores it (no display adjustment)."""
    if not FAT_EPOCH_YEAR <= year <= FAT_EPOCH_YEAR + 127:
        raise ValueError(f"year out of FAT range: {year}")
    return FatDate(raw_day=day & 0x1F, raw_month=month & 0x0F, raw_year=year - FAT_EPOCH_YEAR).pack()


def encode_time(hour: int, minute: int, second: int) -> int:
    return FatTime(hour=hour & 0x1F, minute=minute & 0x3F, two_seconds=(second // 2) & 0x1F).pack()


def format_timestamp(date: FatDate, time: FatTime) -> str:
    return f"{date.year:4d}-{date.month:02d}-{date.day:02d} {time.hour:02d}:{time.minute:02d}:{time.second:02d}"
