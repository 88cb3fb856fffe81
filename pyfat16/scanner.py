from __future__ import annotations

from typing import Callable, Iterator, Optional

from .boot import BootSector, parse_boot_sector
from .dirent import DirectoryEntry, decode_entry
from .errors import TruncatedSlot
from .layout import DIR_ENTRY_SIZE, locate_root_directory
from .names import SLOT_DELETED, SLOT_FREE


LogCb = Callable[[str, str], None]


def iter_slots(buf: bytes, offset: int, count: int) -> Iterator[tuple[int, bytes]]:
    """Yield (index, 32-byte slot) pairs; raises TruncatedSlot when the buffer runs out."""
    for i in range(count):
        start = offset + i * DIR_ENTRY_SIZE
        slot = buf[start : start + DIR_ENTRY_SIZE]
        if len(slot) < DIR_ENTRY_SIZE:
            raise TruncatedSlot(f"slot {i} @{start}: only {len(slot)} bytes left")
        yield i, slot


def scan_root_directory(
    buf: bytes,
    boot: Optional[BootSector] = None,
    *,
    encoding: str = "latin-1",
    log_cb: Optional[LogCb] = None,
) -> Iterator[DirectoryEntry]:
    """
    Decode every live slot of the root directory region, in slot order.

    All root_dir_entry_count slots are visited. Free (0x00) and deleted (0xE5)
    slots are skipped without ending the scan, so entries written after a gap
    are still reported.
    """
    if boot is None:
        boot = parse_boot_sector(buf, log_cb=log_cb)
    region = locate_root_directory(boot, len(buf))
    if log_cb:
        log_cb("DEBUG", f"Root directory @{region.offset}: {region.entry_count} slots")

    yielded = 0
    skipped = 0
    for index, slot in iter_slots(buf, region.offset, region.entry_count):
        if slot[0] in (SLOT_FREE, SLOT_DELETED):
            skipped += 1
            continue
        entry = decode_entry(slot, index=index, encoding=encoding)
        if log_cb:
            for diag in entry.diagnostics:
                log_cb("WARNING", f"slot {index} ({entry.name}): {diag}")
        yielded += 1
        yield entry

    if log_cb:
        log_cb("DEBUG", f"Root directory scan done: {yielded} entries, {skipped} free/deleted slots")
