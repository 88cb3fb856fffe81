"""
Builders for synthetic FAT16 boot sectors, directory slots and images.
"""
from __future__ import annotations

import struct

from pyfat16.fatdate import encode_date, encode_time


def make_boot_sector(
    *,
    bytes_per_sector: int = 512,
    sectors_per_cluster: int = 4,
    reserved: int = 1,
    fat_count: int = 2,
    root_entries: int = 512,
    total16: int = 0,
    sectors_per_fat: int = 32,
    total32: int = 0,
    signature: bytes = b"\x55\xAA",
) -> bytes:
    buf = bytearray(512)
    buf[0:3] = b"\xEB\x3C\x90"
    buf[3:11] = b"MSDOS5.0"
    struct.pack_into(
        "<HBHBHHBHHHII",
        buf,
        11,
        bytes_per_sector,
        sectors_per_cluster,
        reserved,
        fat_count,
        root_entries,
        total16,
        0xF8,
        sectors_per_fat,
        63,
        255,
        0,
        total32,
    )
    struct.pack_into("<BBBI", buf, 36, 0x80, 0, 0x29, 0x1234ABCD)
    buf[43:54] = b"NO NAME    "
    buf[54:62] = b"FAT16   "
    buf[510:512] = signature
    return bytes(buf)


def make_dir_entry(
    name: bytes,
    *,
    attributes: int = 0x20,
    size: int = 0,
    cluster: int = 0,
    written: tuple[int, int, int, int, int, int] = (2021, 6, 15, 10, 30, 0),
    created: tuple[int, int, int, int, int, int] = (2020, 1, 2, 3, 4, 6),
    accessed: tuple[int, int, int] = (2021, 6, 15),
) -> bytes:
    if len(name) != 11:
        raise ValueError("8.3 name must be 11 bytes")
    buf = bytearray(32)
    buf[0:11] = name
    struct.pack_into(
        "<BBBHHHHHHHI",
        buf,
        11,
        attributes,
        0,
        0,
        encode_time(*created[3:]),
        encode_date(*created[:3]),
        encode_date(*accessed),
        0,
        encode_time(*written[3:]),
        encode_date(*written[:3]),
        cluster,
        size,
    )
    return bytes(buf)


def make_image(
    slots: list[bytes],
    *,
    size: int = 64 * 1024,
    sectors_per_cluster: int = 4,
    fat_count: int = 2,
    sectors_per_fat: int = 4,
    root_entries: int = 16,
    signature: bytes = b"\x55\xAA",
) -> bytes:
    img = bytearray(size)
    img[0:512] = make_boot_sector(
        sectors_per_cluster=sectors_per_cluster,
        fat_count=fat_count,
        sectors_per_fat=sectors_per_fat,
        root_entries=root_entries,
        total16=size // 512,
        signature=signature,
    )
    root = 512 + fat_count * sectors_per_fat * 512
    for i, slot in enumerate(slots):
        img[root + i * 32 : root + (i + 1) * 32] = slot
    return bytes(img)
