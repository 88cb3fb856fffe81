from __future__ import annotations

from typing import Optional


ATTR_READ_ONLY = 0x01
ATTR_HIDDEN = 0x02
ATTR_SYSTEM = 0x04
ATTR_VOLUME_ID = 0x08
ATTR_DIRECTORY = 0x10
ATTR_ARCHIVE = 0x20
ATTR_RESERVED = 0xC0
ATTR_LONG_NAME = ATTR_READ_ONLY | ATTR_HIDDEN | ATTR_SYSTEM | ATTR_VOLUME_ID

_STATUS_BITS: tuple[tuple[str, int], ...] = (
    ("r", ATTR_READ_ONLY),
    ("h", ATTR_HIDDEN),
    ("s", ATTR_SYSTEM),
    ("v", ATTR_VOLUME_ID),
    ("d", ATTR_DIRECTORY),
    ("a", ATTR_ARCHIVE),
)

STATUS_LEGEND: tuple[tuple[str, str], ...] = (
    ("r", "Read Only"),
    ("h", "Hidden"),
    ("s", "System"),
    ("v", "Volume Label"),
    ("d", "Directory"),
    ("a", "Archive"),
)


def status_string(attr: int) -> str:
    return "".join(ch if attr & mask else "-" for ch, mask in _STATUS_BITS)


def kind_indicator(attr: int) -> str:
    # Keyed on the volume-label bit, not ATTR_DIRECTORY; listings have always
    # marked entries this way.
    if attr & ATTR_VOLUME_ID:
        return "/"
    return " "


def attribute_anomaly(attr: int) -> Optional[str]:
    if attr & 0x3F == ATTR_LONG_NAME:
        return f"attributes 0x{attr:02X} mark a VFAT long-name slot"
    if attr & ATTR_RESERVED:
        return f"reserved attribute bits set (0x{attr & ATTR_RESERVED:02X})"
    return None
