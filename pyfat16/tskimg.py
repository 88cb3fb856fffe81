from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import pytsk3

from .attributes import ATTR_VOLUME_ID
from .dirent import DirectoryEntry
from .io.base import ImageSource


LogCb = Callable[[str, str], None]

_TSK_SKIP = (".", "..")


class Fat16Img(pytsk3.Img_Info):
    """Feeds an ImageSource to The Sleuth Kit."""

    def __init__(self, source: ImageSource, log_cb: Optional[LogCb] = None):
        self._source = source
        self._log_cb = log_cb
        super().__init__(url="", type=pytsk3.TSK_IMG_TYPE_EXTERNAL)

    def get_size(self) -> int:
        return int(self._source.size() or 0)

    def read(self, offset: int, size: int) -> bytes:
        data = self._source.read_at(int(offset), int(size))
        if len(data) < size:
            if self._log_cb:
                self._log_cb("DEBUG", f"TSK short read @{offset}: {len(data)}/{size}")
            data += b"\x00" * (size - len(data))
        return data

    def close(self) -> None:
        return


@dataclass(frozen=True)
class CrossCheck:
    matched: list[str] = field(default_factory=list)
    only_decoder: list[str] = field(default_factory=list)
    only_tsk: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.only_decoder and not self.only_tsk


def _is_tsk_virtual(name: str) -> bool:
    return name in _TSK_SKIP or name.startswith("$") or "(Volume Label Entry)" in name


def tsk_root_names(src: ImageSource, *, log_cb: Optional[LogCb] = None) -> list[str]:
    """List allocated names in the root directory as TSK sees them."""
    img = Fat16Img(src, log_cb=log_cb)
    fs = pytsk3.FS_Info(img)
    names: list[str] = []
    for entry in fs.open_dir(path="/"):
        info_name = getattr(entry.info, "name", None)
        if info_name is None or not info_name.name:
            continue
        if info_name.flags == pytsk3.TSK_FS_NAME_FLAG_UNALLOC:
            continue
        # Prefer the 8.3 alias when TSK has one; the decoder only knows short names.
        raw = getattr(info_name, "shrt_name", None) or info_name.name
        name = raw.decode("utf-8", errors="replace")
        if _is_tsk_virtual(name):
            continue
        names.append(name)
    if log_cb:
        log_cb("DEBUG", f"TSK listed {len(names)} root entries")
    return names


def cross_check(entries: Iterable[DirectoryEntry], tsk_names: Iterable[str]) -> CrossCheck:
    """Compare decoder output with a TSK listing, ignoring case and volume-label slots."""
    ours: dict[str, str] = {}
    for e in entries:
        if e.attributes & ATTR_VOLUME_ID or not e.name:
            continue
        ours[e.name.upper()] = e.name
    theirs: dict[str, str] = {n.upper(): n for n in tsk_names}

    return CrossCheck(
        matched=sorted(ours[k] for k in ours.keys() & theirs.keys()),
        only_decoder=sorted(ours[k] for k in ours.keys() - theirs.keys()),
        only_tsk=sorted(theirs[k] for k in theirs.keys() - ours.keys()),
    )
