from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from .boot import parse_boot_sector
from .config import LOG_LEVELS, Fat16Config, default_config_path
from .errors import Fat16Error
from .io import open_image_source
from .report import format_legend, render_report
from .scanner import scan_root_directory
from .volume import load_volume


LogCb = Callable[[str, str], None]


def make_log_cb(min_level: str) -> LogCb:
    threshold = LOG_LEVELS.index(min_level) if min_level in LOG_LEVELS else 1

    def log_cb(level: str, msg: str) -> None:
        rank = LOG_LEVELS.index(level) if level in LOG_LEVELS else len(LOG_LEVELS) - 1
        if rank >= threshold:
            print(f"[{level}] {msg}", file=sys.stderr)

    return log_cb


def _load(args: argparse.Namespace, cfg: Fat16Config, log_cb: LogCb) -> bytes:
    src = open_image_source(args.image)
    try:
        return load_volume(src, whole_image=cfg.whole_image, max_read=cfg.max_read, log_cb=log_cb)
    finally:
        src.close()


def _cmd_show(args: argparse.Namespace, cfg: Fat16Config, log_cb: LogCb) -> int:
    buf = _load(args, cfg, log_cb)
    boot = parse_boot_sector(buf, strict=cfg.strict_signature, log_cb=log_cb)
    entries = list(scan_root_directory(buf, boot, encoding=cfg.name_encoding, log_cb=log_cb))
    sys.stdout.write(render_report(args.image, boot, entries, diagnostics=args.diagnostics))
    return 0


def _cmd_tsk_check(args: argparse.Namespace, cfg: Fat16Config, log_cb: LogCb) -> int:
    from .tskimg import cross_check, tsk_root_names

    src = open_image_source(args.image)
    try:
        buf = load_volume(src, whole_image=cfg.whole_image, max_read=cfg.max_read, log_cb=log_cb)
        boot = parse_boot_sector(buf, strict=cfg.strict_signature, log_cb=log_cb)
        entries = list(scan_root_directory(buf, boot, encoding=cfg.name_encoding, log_cb=log_cb))
        try:
            names = tsk_root_names(src, log_cb=log_cb)
        except OSError as e:
            log_cb("CRITICAL", f"TSK could not open {args.image}: {e}")
            return 1
    finally:
        src.close()

    result = cross_check(entries, names)
    print(f"matched: {len(result.matched)}")
    for name in result.only_decoder:
        print(f"only in decoder: {name}")
    for name in result.only_tsk:
        print(f"only in TSK: {name}")
    return 0 if result.ok else 1


def _cmd_legend(_args: argparse.Namespace, _cfg: Fat16Config, _log_cb: LogCb) -> int:
    print("\n".join(format_legend()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pyfat16",
        description="Print the boot sector and root directory of a FAT16 image.",
        epilog="\n".join(format_legend()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--config", type=Path, default=None, help="Path to pyfat16.ini")
    p.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Override [Setup] log_level")
    sub = p.add_subparsers(dest="cmd", required=True)

    show = sub.add_parser("show", help="Print boot sector info and root directory entries")
    show.add_argument("image", help="File (or block device) holding a FAT16 file system")
    show.add_argument("--diagnostics", action="store_true", help="Print per-record observations")
    show.set_defaults(func=_cmd_show)

    tsk = sub.add_parser("tsk-check", help="Compare the root directory listing with The Sleuth Kit")
    tsk.add_argument("image", help="File (or block device) holding a FAT16 file system")
    tsk.set_defaults(func=_cmd_tsk_check)

    sub.add_parser("legend", help="Describe the status column letters").set_defaults(func=_cmd_legend)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = Fat16Config.load(args.config or default_config_path())
    log_cb = make_log_cb(args.log_level or cfg.log_level)
    try:
        return int(args.func(args, cfg, log_cb))
    except (Fat16Error, OSError) as e:
        log_cb("CRITICAL", f"{type(e).__name__}: {e}")
        return 1
