"""
Tests for the command line front end.
"""
from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from pyfat16.cli import build_parser, main, make_log_cb

from imagebuilder import make_dir_entry, make_image


class TestCli(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.image = Path(self.temp_dir) / "fat16.img"
        self.image.write_bytes(make_image([make_dir_entry(b"HELLO   TXT", size=1024, cluster=5)]))
        self.config = Path(self.temp_dir) / "pyfat16.ini"

    def tearDown(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = main(["--config", str(self.config), *argv])
        return rc, out.getvalue(), err.getvalue()

    def test_show(self):
        rc, out, _ = self._run("show", str(self.image))
        self.assertEqual(rc, 0)
        self.assertIn(f"Read '{self.image}' as FAT16 file system:", out)
        self.assertIn("2021-07-16 10:30:00", out)
        self.assertIn("HELLO.TXT", out)

    def test_show_truncated_image(self):
        self.image.write_bytes(self.image.read_bytes()[:4000])
        rc, out, err = self._run("show", str(self.image))
        self.assertEqual(rc, 1)
        self.assertEqual(out, "")
        self.assertIn("[CRITICAL] OutOfRange:", err)

    def test_show_missing_image(self):
        rc, _, err = self._run("show", str(Path(self.temp_dir) / "nope.img"))
        self.assertEqual(rc, 1)
        self.assertIn("[CRITICAL]", err)

    def test_strict_signature_from_config(self):
        self.image.write_bytes(make_image([], signature=b"\x00\x00"))
        self.config.write_text("[Setup]\nstrict_signature = true\n", encoding="utf-8")
        rc, _, err = self._run("show", str(self.image))
        self.assertEqual(rc, 1)
        self.assertIn("MalformedBootSector", err)

    def test_bad_signature_reported_but_listed(self):
        self.image.write_bytes(make_image([make_dir_entry(b"HELLO   TXT")], signature=b"\x00\x00"))
        rc, out, err = self._run("show", str(self.image))
        self.assertEqual(rc, 0)
        self.assertIn("incorrect", out)
        self.assertIn("HELLO.TXT", out)
        self.assertIn("[WARNING]", err)

    def test_unusable_name_encoding_falls_back(self):
        for name in ("hex", "utf-16"):
            with self.subTest(name=name):
                self.config.write_text(f"[Decode]\nname_encoding = {name}\n", encoding="utf-8")
                rc, out, _ = self._run("show", str(self.image))
                self.assertEqual(rc, 0)
                self.assertIn("\tHELLO.TXT ", out)

    def test_legend(self):
        rc, out, _ = self._run("legend")
        self.assertEqual(rc, 0)
        self.assertIn("v\tVolume Label", out)

    def test_tsk_check_reports_mismatch(self):
        with patch("pyfat16.tskimg.tsk_root_names", return_value=["HELLO.TXT", "OTHER.BIN"]):
            rc, out, _ = self._run("tsk-check", str(self.image))
        self.assertEqual(rc, 1)
        self.assertIn("matched: 1", out)
        self.assertIn("only in TSK: OTHER.BIN", out)

    def test_tsk_check_ok(self):
        with patch("pyfat16.tskimg.tsk_root_names", return_value=["hello.txt"]):
            rc, out, _ = self._run("tsk-check", str(self.image))
        self.assertEqual(rc, 0)

    def test_requires_subcommand(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args([])


class TestMakeLogCb(unittest.TestCase):
    def test_threshold(self):
        err = io.StringIO()
        log_cb = make_log_cb("WARNING")
        with redirect_stderr(err):
            log_cb("INFO", "quiet")
            log_cb("WARNING", "loud")
            log_cb("CRITICAL", "louder")
        self.assertEqual(err.getvalue(), "[WARNING] loud\n[CRITICAL] louder\n")


if __name__ == "__main__":
    unittest.main()
