import contextlib
import datetime
import io
import os
import tempfile
import unittest

import dateutil.tz

import durationconfig
from durationparse import add_duration


class TestDurationConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.tmpdir.name, "durationparse.ini")

    def tearDown(self):
        durationconfig.load_config(self.filename + ".missing")
        self.tmpdir.cleanup()

    def write_config(self, text):
        with open(self.filename, "w") as f:
            f.write(text)
        return durationconfig.load_config(self.filename)

    def test_defaults_when_file_missing(self):
        params = durationconfig.load_config(self.filename)
        self.assertEqual("[%Y-%m-%d %H:%M:%S {tz}]", params.get("Timestamp"))
        self.assertFalse(params.getboolean("Verbose"))

    def test_values_read_from_file(self):
        params = self.write_config("[DURATIONPARSE]\nVerbose = yes\nTimestamp = %Y/%m/%d {tz}\n")
        self.assertTrue(params.getboolean("Verbose"))
        self.assertEqual("%Y/%m/%d {tz}", durationconfig.get_params().get("Timestamp"))

    def test_partial_file_keeps_defaults(self):
        params = self.write_config("[DURATIONPARSE]\nVerbose = true\n")
        self.assertEqual("[%Y-%m-%d %H:%M:%S {tz}]", params.get("Timestamp"))

    def test_dt_tostr(self):
        dt = datetime.datetime(2025, 1, 2, 3, 4, 5, tzinfo=dateutil.tz.UTC)
        self.assertEqual("[2025-01-02 03:04:05 UTC]", durationconfig.dt_tostr(dt))

    def test_dt_tostr_custom_timestamp(self):
        self.write_config("[DURATIONPARSE]\nTimestamp = %Y-%m-%d ({tz})\n")
        dt = datetime.datetime(2025, 1, 2, tzinfo=dateutil.tz.UTC)
        self.assertEqual("2025-01-02 (UTC)", durationconfig.dt_tostr(dt))

    def test_dt_tostr_unformattable_timestamp_uses_default(self):
        """Braces other than {tz} in the timestamp fall back to the default format."""
        dt = datetime.datetime(2025, 1, 2, 3, 4, 5, tzinfo=dateutil.tz.UTC)
        for timestamp in ("{%Y}", "{zone}", "{tz"):
            self.write_config(f"[DURATIONPARSE]\nTimestamp = {timestamp}\n")
            self.assertEqual("[2025-01-02 03:04:05 UTC]", durationconfig.dt_tostr(dt))

    def test_add_duration_with_unformattable_timestamp(self):
        self.write_config("[DURATIONPARSE]\nVerbose = yes\nTimestamp = {%Y}\n")
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertIsNone(add_duration("garbage", datetime.datetime(2020, 1, 1)))
        self.assertIn("Unable to interpret 'garbage' as a duration.", out.getvalue())

    def test_log_silent_by_default(self):
        durationconfig.load_config(self.filename)
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertFalse(durationconfig.log("hello"))
        self.assertEqual("", out.getvalue())

    def test_log_when_verbose(self):
        self.write_config("[DURATIONPARSE]\nVerbose = yes\n")
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertTrue(durationconfig.log("hello"))
        self.assertTrue(out.getvalue().endswith(" UTC] hello\n"))

    def test_add_duration_logs_rejected_string(self):
        self.write_config("[DURATIONPARSE]\nVerbose = yes\n")
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertIsNone(add_duration("garbage", datetime.datetime(2020, 1, 1)))
        self.assertIn("Unable to interpret 'garbage' as a duration.", out.getvalue())

    def test_calendar_rejection_logged(self):
        self.write_config("[DURATIONPARSE]\nVerbose = yes\n")
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertIsNone(add_duration("P1Y", datetime.datetime(9999, 12, 31)))
        self.assertIn("Unable to add", out.getvalue())
