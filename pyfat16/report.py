from __future__ import annotations

from typing import Iterable

from .attributes import STATUS_LEGEND
from .boot import BootSector
from .dirent import DirectoryEntry


def _field(label: str, value: object) -> str:
    return f"{label:<40} {value}"


def format_boot_info(boot: BootSector) -> list[str]:
    return [
        _field("Sector size:", boot.bytes_per_sector),
        _field("Sectors per cluster:", boot.sectors_per_cluster),
        _field("FAT copy number:", boot.fat_count),
        _field("FAT copy size in bytes:", boot.fat_size_bytes),
        _field("FAT copy size in sectors:", boot.sectors_per_fat16),
        _field("Root directory size:", boot.root_dir_entry_count),
        _field("Root directory entry count:", boot.root_dir_entry_count),
        _field("Reserved sectors count:", boot.reserved_sector_count),
        _field("Check signature:", "correct" if boot.signature_valid else "incorrect"),
    ]


def format_entry_header() -> str:
    return f"{'status':^6}\t{'size':^10}\t{'last modified':^19}\t{'cluster':>7}\t{'block':>5}\tfile name"


def format_entry_row(entry: DirectoryEntry, boot: BootSector) -> str:
    block = entry.first_cluster * boot.sectors_per_cluster
    return (
        f"{entry.status:>6}\t{entry.file_size:>10}\t{entry.last_modified:>19}\t"
        f"{entry.first_cluster:>7}\t{block:>5}\t{entry.name}{entry.kind}"
    )


def format_legend() -> list[str]:
    return ["Entry status description:"] + [f"  {ch}\t{desc}" for ch, desc in STATUS_LEGEND]


def render_report(
    path: str,
    boot: BootSector,
    entries: Iterable[DirectoryEntry],
    *,
    diagnostics: bool = False,
) -> str:
    lines = [f"Read '{path}' as FAT16 file system:"]
    lines.extend(format_boot_info(boot))
    if diagnostics:
        lines.extend(f"  ! {d}" for d in boot.diagnostics)
    lines.append("")
    lines.append("Root dir entries info:")
    lines.append(format_entry_header())
    for entry in entries:
        lines.append(format_entry_row(entry, boot))
        if diagnostics:
            lines.extend(f"  ! {d}" for d in entry.diagnostics)
    return "\n".join(lines) + "\n"
