from __future__ import annotations

from typing import Callable, Optional

from .boot import BOOT_SECTOR_SIZE, parse_boot_sector
from .io.base import ImageSource
from .layout import root_dir_offset


LogCb = Callable[[str, str], None]


def read_exact(src: ImageSource, offset: int, size: int, *, block: int = 1024 * 1024) -> bytes:
    """Read [offset, offset+size) in blocks; stops early at end of source."""
    out = bytearray()
    cur = offset
    end = offset + size
    while cur < end:
        chunk = src.read_at(cur, min(block, end - cur))
        if not chunk:
            break
        out += chunk
        cur += len(chunk)
    return bytes(out)


def load_volume(
    src: ImageSource,
    *,
    whole_image: bool = False,
    max_read: int = 64 * 1024 * 1024,
    log_cb: Optional[LogCb] = None,
) -> bytes:
    """
    Return the volume bytes from offset 0 through the end of the root directory
    region (or the whole image). Short reads are returned as-is; decoding the
    result reports them as OutOfRange.
    """
    head = read_exact(src, 0, BOOT_SECTOR_SIZE)
    if len(head) < BOOT_SECTOR_SIZE:
        if log_cb:
            log_cb("WARNING", f"{src.path}: only {len(head)} bytes readable, boot sector is {BOOT_SECTOR_SIZE}")
        return head

    total = src.size() or 0
    if whole_image and total > 0:
        want = total
    else:
        boot = parse_boot_sector(head)
        want = root_dir_offset(boot) + boot.root_dir_size_bytes
    if want > max_read:
        if log_cb:
            log_cb("WARNING", f"Read of {want} bytes capped at max_read={max_read}")
        want = max_read
    if want <= BOOT_SECTOR_SIZE:
        return head

    data = head + read_exact(src, BOOT_SECTOR_SIZE, want - BOOT_SECTOR_SIZE)
    if len(data) < want and log_cb:
        log_cb("WARNING", f"{src.path}: short read, got {len(data)} of {want} bytes")
    if log_cb:
        log_cb("DEBUG", f"Loaded {len(data)} bytes from {src.path}")
    return data
