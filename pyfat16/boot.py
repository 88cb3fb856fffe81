from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import Diagnostic, MalformedBootSector, OutOfRange


LogCb = Callable[[str, str], None]

BOOT_SECTOR_SIZE = 512
BOOT_SIGNATURE = b"\x55\xAA"
VALID_SECTOR_SIZES = (512, 1024, 2048, 4096)


@dataclass(frozen=True)
class BootSector:
    jump: bytes
    oem_id: bytes
    bytes_per_sector: int
    sectors_per_cluster: int
    reserved_sector_count: int
    fat_count: int
    root_dir_entry_count: int
    total_sectors16: int
    media_type: int
    sectors_per_fat16: int
    sectors_per_track: int
    head_count: int
    hidden_sectors: int
    total_sectors32: int
    drive_number: int
    reserved1: int
    boot_signature: int
    volume_serial_number: int
    volume_label: bytes
    file_system_type: bytes
    boot_sector_sig0: int
    boot_sector_sig1: int
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def signature_valid(self) -> bool:
        return self.boot_sector_sig0 == 0x55 and self.boot_sector_sig1 == 0xAA

    @property
    def fat_size_bytes(self) -> int:
        return self.sectors_per_fat16 * self.bytes_per_sector

    @property
    def root_dir_size_bytes(self) -> int:
        return self.root_dir_entry_count * 32


def parse_boot_sector(
    buf: bytes,
    *,
    strict: bool = False,
    log_cb: Optional[LogCb] = None,
) -> BootSector:
    """
    Decode the FAT12/16 BPB at the start of `buf`.

    Fields are copied out as-is; nothing is cross-validated. A bad 55 AA
    signature is recorded as a diagnostic (or raised when strict=True) so the
    remaining fields can still be inspected.
    """
    if len(buf) < BOOT_SECTOR_SIZE:
        raise OutOfRange(f"boot sector needs {BOOT_SECTOR_SIZE} bytes, buffer has {len(buf)}")

    (
        bps,
        spc,
        reserved,
        fats,
        root_entries,
        total16,
        media,
        spf,
        spt,
        heads,
        hidden,
        total32,
    ) = struct.unpack_from("<HBHBHHBHHHII", buf, 11)
    drive, reserved1, ext_sig = struct.unpack_from("<BBB", buf, 36)
    serial = struct.unpack_from("<I", buf, 39)[0]

    diagnostics: list[Diagnostic] = []
    sig = bytes(buf[510:512])
    if sig != BOOT_SIGNATURE:
        msg = f"boot sector signature is {sig.hex().upper()}, expected 55AA"
        if strict:
            raise MalformedBootSector(msg)
        diagnostics.append(Diagnostic("MalformedBootSector", msg))
        if log_cb:
            log_cb("WARNING", msg)
    if bps not in VALID_SECTOR_SIZES:
        diagnostics.append(Diagnostic("UnusualSectorSize", f"bytes per sector is {bps}"))
        if log_cb:
            log_cb("WARNING", f"Unusual bytes per sector: {bps}")

    return BootSector(
        jump=bytes(buf[0:3]),
        oem_id=bytes(buf[3:11]),
        bytes_per_sector=int(bps),
        sectors_per_cluster=int(spc),
        reserved_sector_count=int(reserved),
        fat_count=int(fats),
        root_dir_entry_count=int(root_entries),
        total_sectors16=int(total16),
        media_type=int(media),
        sectors_per_fat16=int(spf),
        sectors_per_track=int(spt),
        head_count=int(heads),
        hidden_sectors=int(hidden),
        total_sectors32=int(total32),
        drive_number=int(drive),
        reserved1=int(reserved1),
        boot_signature=int(ext_sig),
        volume_serial_number=int(serial),
        volume_label=bytes(buf[43:54]),
        file_system_type=bytes(buf[54:62]),
        boot_sector_sig0=int(buf[510]),
        boot_sector_sig1=int(buf[511]),
        diagnostics=tuple(diagnostics),
    )
