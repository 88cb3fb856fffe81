from __future__ import annotations

import struct
from dataclasses import dataclass

from .attributes import attribute_anomaly, kind_indicator, status_string
from .errors import Diagnostic, TruncatedSlot
from .fatdate import FatDate, FatTime, decode_date, decode_time, format_timestamp
from .layout import DIR_ENTRY_SIZE
from .names import decode_short_name


@dataclass(frozen=True)
class DirectoryEntry:
    index: int
    raw_name: bytes
    name: str
    attributes: int
    reserved_nt: int
    creation_time_tenths: int
    creation_time: FatTime
    creation_date: FatDate
    last_access_date: FatDate
    first_cluster_high: int
    last_write_time: FatTime
    last_write_date: FatDate
    first_cluster: int
    file_size: int
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def status(self) -> str:
        return status_string(self.attributes)

    @property
    def kind(self) -> str:
        return kind_indicator(self.attributes)

    @property
    def last_modified(self) -> str:
        return format_timestamp(self.last_write_date, self.last_write_time)


def _check_stamp(diags: list[Diagnostic], label: str, date: FatDate, time: FatTime | None = None) -> None:
    # All-zero stamps are common for unset fields; only flag garbage.
    if date.pack() and not date.is_valid:
        diags.append(Diagnostic("InvalidDate", f"{label} date 0x{date.pack():04X} out of range"))
    if time is not None and not time.is_valid:
        diags.append(Diagnostic("InvalidTime", f"{label} time 0x{time.pack():04X} out of range"))


def decode_entry(slot: bytes, *, index: int = 0, encoding: str = "latin-1") -> DirectoryEntry:
    if len(slot) != DIR_ENTRY_SIZE:
        raise TruncatedSlot(f"slot {index}: expected {DIR_ENTRY_SIZE} bytes, got {len(slot)}")

    raw_name = bytes(slot[0:11])
    (
        attributes,
        reserved_nt,
        tenths,
        ctime,
        cdate,
        adate,
        cluster_hi,
        wtime,
        wdate,
        cluster_lo,
        size,
    ) = struct.unpack_from("<BBBHHHHHHHI", slot, 11)

    creation_time = decode_time(ctime)
    creation_date = decode_date(cdate)
    last_access = decode_date(adate)
    write_time = decode_time(wtime)
    write_date = decode_date(wdate)

    diags: list[Diagnostic] = []
    anomaly = attribute_anomaly(attributes)
    if anomaly:
        diags.append(Diagnostic("UnusualAttributes", anomaly))
    _check_stamp(diags, "creation", creation_date, creation_time)
    _check_stamp(diags, "last access", last_access)
    _check_stamp(diags, "last write", write_date, write_time)

    return DirectoryEntry(
        index=int(index),
        raw_name=raw_name,
        name=decode_short_name(raw_name, encoding),
        attributes=int(attributes),
        reserved_nt=int(reserved_nt),
        creation_time_tenths=int(tenths),
        creation_time=creation_time,
        creation_date=creation_date,
        last_access_date=last_access,
        first_cluster_high=int(cluster_hi),
        last_write_time=write_time,
        last_write_date=write_date,
        first_cluster=int(cluster_lo),
        file_size=int(size),
        diagnostics=tuple(diags),
    )
