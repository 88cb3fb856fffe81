from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO

from .base import ImageSource


# linux/fs.h
BLKGETSIZE64 = 0x80081272
BLKSSZGET = 0x1268


@dataclass
class PreadImageSource(ImageSource):
    path: str
    _fd: int
    _size: int
    _sector_size: int = 512

    def size(self) -> int:
        return self._size

    def sector_size(self) -> int:
        return self._sector_size

    def read_at(self, offset: int, size: int) -> bytes:
        return os.pread(self._fd, size, offset)

    def close(self) -> None:
        try:
            os.close(self._fd)
        except OSError:
            return


@dataclass
class SeekImageSource(ImageSource):
    path: str
    _fp: BinaryIO
    _size: int
    _sector_size: int = 512

    def size(self) -> int:
        return self._size

    def sector_size(self) -> int:
        return self._sector_size

    def read_at(self, offset: int, size: int) -> bytes:
        self._fp.seek(offset)
        return self._fp.read(size)

    def close(self) -> None:
        try:
            self._fp.close()
        except OSError:
            return


def _ioctl_int(fd: int, request: int, fmt: str) -> int:
    try:
        import fcntl
    except ImportError:
        return 0
    buf = bytearray(struct.calcsize(fmt))
    try:
        fcntl.ioctl(fd, request, buf, True)
    except OSError:
        return 0
    return int(struct.unpack(fmt, buf)[0])


def open_image_source(path: str) -> ImageSource:
    """
    Open a FAT16 image file (or a partition block device) read-only.
    """
    flags = os.O_RDONLY
    if hasattr(os, "O_BINARY"):
        flags |= os.O_BINARY

    fd = os.open(path, flags)
    try:
        size = os.lseek(fd, 0, os.SEEK_END)
        os.lseek(fd, 0, os.SEEK_SET)
    except OSError:
        size = 0

    # Block devices report 0 from lseek on some kernels.
    if size <= 0:
        size = _ioctl_int(fd, BLKGETSIZE64, "<Q")
    sector_size = _ioctl_int(fd, BLKSSZGET, "<I") or 512

    if hasattr(os, "pread"):
        return PreadImageSource(path=path, _fd=fd, _size=size, _sector_size=sector_size)

    fp = os.fdopen(fd, "rb", buffering=0)
    return SeekImageSource(path=path, _fp=fp, _size=size, _sector_size=sector_size)
