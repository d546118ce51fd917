#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testAuditLog.py

    Description:

        Test suite for AuditLog. Verifies JSON-lines output with ISO8601Z
        timestamps, path selection from the environment and the working
        directory, concurrent writers, and that write failures do not
        propagate.
"""

import io
import json
import os
import tempfile
import threading
import unittest
from unittest import mock
from sentinelauth.utilities.audit_log import AuditLog
import sentinelauth.constants as CONSTANTS


class TestAuditLog(unittest.TestCase):

    def setUp(self) -> None:

        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "audit.log")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _read_events(self, path):
        with open(path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    """
        Each event is one JSON object with a timestamp and the given fields.
    """
    def test_event_written_as_json_line(self):

        log = AuditLog(self.path)
        log.event(event="enroll", user_identifier="alice", outcome="success")
        log.event(event="authenticate", user_identifier="alice", outcome="mismatch")

        events = self._read_events(self.path)

        self.assertEqual(2, len(events))
        self.assertEqual("enroll", events[0]["event"])
        self.assertEqual("mismatch", events[1]["outcome"])
        self.assertTrue(events[0]["timestamp"].endswith("Z"))

    """
        SENTINELAUTH_AUDIT_LOG selects the file when no path is given.
    """
    def test_path_from_environment(self):

        with mock.patch.dict(os.environ, {CONSTANTS._AUDIT_LOG_ENV: self.path}):
            log = AuditLog()

        self.assertEqual(self.path, log.path)

    """
        Without a path or SENTINELAUTH_AUDIT_LOG, the log is created in the working directory.
    """
    def test_default_path_in_working_directory(self):

        with mock.patch.dict(os.environ):
            os.environ.pop(CONSTANTS._AUDIT_LOG_ENV, None)

            with mock.patch.object(os, "getcwd", return_value=self.tmpdir.name):
                log = AuditLog()

        self.assertEqual(self.path, log.path)

        log.event(event="enroll", user_identifier="alice", outcome="success")
        self.assertEqual(1, len(self._read_events(self.path)))

    """
        Concurrent writers never interleave partial lines.
    """
    def test_concurrent_events(self):

        log = AuditLog(self.path)

        def writer(n):
            for i in range(25):
                log.event(event="authenticate", worker=n, seq=i)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(100, len(self._read_events(self.path)))

    """
        An unwritable path is reported on stderr instead of raising.
    """
    def test_write_failure_does_not_raise(self):

        log = AuditLog(os.path.join(self.tmpdir.name, "missing", "audit.log"))

        with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
            log.event(event="enroll", user_identifier="alice")

        self.assertIn("Audit log write error", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
