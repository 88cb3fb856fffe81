from __future__ import annotations


SHORT_NAME_LEN = 11
BASE_LEN = 8

SLOT_FREE = 0x00
SLOT_DELETED = 0xE5
# A real name starting with 0xE5 is stored with 0x05 so it isn't read as deleted.
KANJI_LEAD = 0x05


def _segment(raw: bytes) -> bytes:
    # 8.3 segments never hold embedded spaces; the first one ends the segment.
    return raw.split(b" ", 1)[0]


def decode_short_name(raw: bytes, encoding: str = "latin-1") -> str:
    """
    Rebuild the display name of an 11-byte 8.3 field ("BAR     TXT" -> "BAR.TXT").
    """
    if len(raw) != SHORT_NAME_LEN:
        raise ValueError(f"8.3 name field must be {SHORT_NAME_LEN} bytes, got {len(raw)}")
    if raw[0] == SLOT_FREE:
        return ""
    if raw[0] == KANJI_LEAD:
        raw = bytes([SLOT_DELETED]) + raw[1:]

    base = _segment(raw[:BASE_LEN]).decode(encoding, errors="replace")
    ext = _segment(raw[BASE_LEN:]).decode(encoding, errors="replace")
    if ext:
        return f"{base}.{ext}"
    return base
