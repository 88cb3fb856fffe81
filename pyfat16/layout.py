from __future__ import annotations

from dataclasses import dataclass

from .boot import BOOT_SECTOR_SIZE, BootSector
from .errors import OutOfRange


DIR_ENTRY_SIZE = 32


@dataclass(frozen=True)
class RootDirRegion:
    offset: int
    entry_count: int

    @property
    def length(self) -> int:
        return self.entry_count * DIR_ENTRY_SIZE

    @property
    def end(self) -> int:
        return self.offset + self.length


def root_dir_offset(boot: BootSector) -> int:
    # Sector zero is always counted as 512 bytes here, whatever bytes_per_sector says.
    return BOOT_SECTOR_SIZE + boot.fat_count * boot.sectors_per_fat16 * boot.bytes_per_sector


def locate_root_directory(boot: BootSector, buffer_len: int) -> RootDirRegion:
    region = RootDirRegion(offset=root_dir_offset(boot), entry_count=boot.root_dir_entry_count)
    if region.end > buffer_len:
        raise OutOfRange(
            f"root directory @{region.offset} (+{region.length}) exceeds buffer of {buffer_len} bytes"
        )
    return region
