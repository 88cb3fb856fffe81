from __future__ import annotations

import codecs
import configparser
from dataclasses import dataclass
from pathlib import Path


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "CRITICAL")


@dataclass(frozen=True)
class Fat16Config:
    strict_signature: bool = False
    log_level: str = "INFO"

    name_encoding: str = "latin-1"

    whole_image: bool = False
    max_read: int = 64 * 1024 * 1024

    @staticmethod
    def _get_bool(cfg: configparser.ConfigParser, section: str, key: str, default: bool) -> bool:
        try:
            return cfg.getboolean(section, key, fallback=default)
        except ValueError:
            return bool(default)

    @staticmethod
    def _get_int(cfg: configparser.ConfigParser, section: str, key: str, default: int) -> int:
        v = (cfg.get(section, key, fallback="") or "").strip()
        if not v:
            return default
        try:
            if v.lower().startswith("0x"):
                return int(v, 16)
            return int(v, 10)
        except ValueError:
            return default

    @staticmethod
    def _valid_encoding(name: str) -> bool:
        # 8.3 names need a text codec that maps every byte to one character.
        try:
            info = codecs.lookup(name)
        except LookupError:
            return False
        if not getattr(info, "_is_text_encoding", True):
            return False
        try:
            if len(bytes(range(256)).decode(name, "replace")) != 256:
                return False
            # Multi-byte codecs (utf-8, shift_jis, utf-16) fold a lead byte and a trail byte together.
            return all(len(bytes([b, 0xA9]).decode(name, "replace")) == 2 for b in range(256))
        except (LookupError, UnicodeError):
            return False

    @classmethod
    def load(cls, path: str | Path) -> "Fat16Config":
        p = Path(path)
        if not p.exists():
            return cls()

        parser = configparser.ConfigParser(interpolation=None)
        parser.read(p, encoding="utf-8")

        strict = cls._get_bool(parser, "Setup", "strict_signature", cls.strict_signature)
        log_level = parser.get("Setup", "log_level", fallback=cls.log_level).strip().upper()
        if log_level not in LOG_LEVELS:
            log_level = cls.log_level

        encoding = parser.get("Decode", "name_encoding", fallback=cls.name_encoding).strip()
        if not cls._valid_encoding(encoding):
            encoding = cls.name_encoding

        whole = cls._get_bool(parser, "IO", "whole_image", cls.whole_image)
        max_read = cls._get_int(parser, "IO", "max_read", cls.max_read)

        # Clamp to sane ranges
        max_read = max(512, min(4 * 1024 * 1024 * 1024, max_read))

        return cls(
            strict_signature=strict,
            log_level=log_level,
            name_encoding=encoding,
            whole_image=whole,
            max_read=max_read,
        )


def default_config_path() -> Path:
    return Path("pyfat16.ini")
