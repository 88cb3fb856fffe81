from __future__ import annotations

from dataclasses import dataclass


class Fat16Error(ValueError):
    """Base class for structural decode failures."""


class MalformedBootSector(Fat16Error):
    """Trailing boot sector signature is not 55 AA."""


class OutOfRange(Fat16Error):
    """A computed offset/length runs past the end of the buffer."""


class TruncatedSlot(Fat16Error):
    """Fewer than 32 bytes are available for a directory slot."""


@dataclass(frozen=True)
class Diagnostic:
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
