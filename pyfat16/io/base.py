from __future__ import annotations

from typing import Protocol


class ImageSource(Protocol):
    """Read-only random access to a FAT16 image file or partition device."""

    path: str

    def size(self) -> int: ...

    def sector_size(self) -> int: ...

    def read_at(self, offset: int, size: int) -> bytes: ...

    def close(self) -> None: ...
