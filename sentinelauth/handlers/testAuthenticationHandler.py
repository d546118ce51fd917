#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testAuthenticationHandler.py

    Description:

        Test suite for AuthenticationHandler. Verifies enrollment (strength
        gate, fresh salts, wiping), authentication against stored records,
        scheduling on the bounded worker pool, audit events without secret
        material, and worker pool sizing from the environment.
"""

import json
import os
import tempfile
import threading
import time
import unittest
from unittest import mock
from sentinelauth.common.credentials import Credentials
from sentinelauth.handlers.authentication_handler import AuthenticationHandler, PasswordRecord
from sentinelauth.handlers.error_handler import InvalidArgument, ApplicationCodes
from sentinelauth.utilities.audit_log import AuditLog
import sentinelauth.handlers.authentication_handler as auth_module
import sentinelauth.constants as CONSTANTS


class TestAuthenticationHandler(unittest.TestCase):

    PASSWORD = b"Cm8&Ckqz2h6,KOH0"

    def setUp(self) -> None:

        fd, self.path = tempfile.mkstemp()
        os.close(fd)
        self.handler = AuthenticationHandler(AuditLog(self.path), max_workers=2)

    def tearDown(self) -> None:
        self.handler.shutdown()
        os.remove(self.path)

    def _read_events(self):
        with open(self.path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    """
        enroll returns a 32-byte hash and 16-byte salt and wipes the password.
    """
    def test_enroll(self):

        password = bytearray(self.PASSWORD)
        record = self.handler.enroll(Credentials("alice", password))

        self.assertIsInstance(record, PasswordRecord)
        self.assertEqual(32, len(record.password_hash))
        self.assertEqual(16, len(record.salt))
        self.assertEqual(bytearray(len(self.PASSWORD)), password)

    """
        Enrolling the same password twice uses different salts and hashes.
    """
    def test_enroll_fresh_salt(self):

        record1 = self.handler.enroll(Credentials("alice", bytearray(self.PASSWORD)))
        record2 = self.handler.enroll(Credentials("alice", bytearray(self.PASSWORD)))

        self.assertNotEqual(record1.salt, record2.salt)
        self.assertNotEqual(record1.password_hash, record2.password_hash)

    """
        Weak passwords are rejected and still wiped; the policy can be bypassed explicitly.
    """
    def test_enroll_weak_password(self):

        password = bytearray(b"lowercaseonly")

        with self.assertRaises(InvalidArgument) as cm:
            self.handler.enroll(Credentials("alice", password))

        self.assertEqual(ApplicationCodes.WEAK_PASSWORD, cm.exception.application_code)
        self.assertEqual(bytearray(13), password)

        record = self.handler.enroll(Credentials("alice", bytearray(b"lowercaseonly")), require_strong=False)
        self.assertEqual(32, len(record.password_hash))

    """
        Multi-byte UTF-8 passwords are measured in characters at enrollment.
    """
    def test_enroll_weak_utf8_password(self):

        # Six characters in nine bytes
        password = bytearray("Ab1ééé".encode("utf-8"))

        with self.assertRaises(InvalidArgument) as cm:
            self.handler.enroll(Credentials("alice", password))

        self.assertEqual(ApplicationCodes.WEAK_PASSWORD, cm.exception.application_code)
        self.assertEqual(bytearray(9), password)

    """
        enroll rejects malformed credentials.
    """
    def test_enroll_validation(self):

        with self.assertRaises(InvalidArgument):
            self.handler.enroll("alice")  # type: ignore[arg-type]

        password = bytearray(self.PASSWORD)
        with self.assertRaises(InvalidArgument):
            self.handler.enroll(Credentials("   ", password))
        self.assertEqual(bytearray(len(self.PASSWORD)), password)

        with self.assertRaises(InvalidArgument):
            self.handler.enroll(Credentials("alice", None))

        with self.assertRaises(InvalidArgument):
            self.handler.enroll(Credentials("alice", None), require_strong=False)

    """
        authenticate accepts the enrolled password and rejects others, wiping both candidates.
    """
    def test_authenticate(self):

        record = self.handler.enroll(Credentials("alice", bytearray(self.PASSWORD)))

        good = bytearray(self.PASSWORD)
        bad = bytearray(b"wrongPassword")

        self.assertTrue(self.handler.authenticate(Credentials("alice", good), record))
        self.assertFalse(self.handler.authenticate(Credentials("alice", bad), record))

        self.assertEqual(bytearray(len(self.PASSWORD)), good)
        self.assertEqual(bytearray(len(b"wrongPassword")), bad)

    """
        authenticate rejects a missing record and still wipes the candidate.
    """
    def test_authenticate_validation(self):

        password = bytearray(self.PASSWORD)

        with self.assertRaises(InvalidArgument):
            self.handler.authenticate(Credentials("alice", password), None)  # type: ignore[arg-type]

        self.assertEqual(bytearray(len(self.PASSWORD)), password)

    """
        Authentications submitted to the worker pool resolve to the same verdicts.
    """
    def test_submit_authentication(self):

        record = self.handler.enroll(Credentials("alice", bytearray(self.PASSWORD)))

        futures = [
            self.handler.submit_authentication(Credentials("alice", bytearray(self.PASSWORD)), record),
            self.handler.submit_authentication(Credentials("alice", bytearray(b"wrongPassword")), record),
            self.handler.submit_authentication(Credentials("alice", bytearray(self.PASSWORD)), record),
        ]

        self.assertEqual([True, False, True], [f.result(timeout=60) for f in futures])

    """
        Errors raised on the worker pool surface through the future.
    """
    def test_submit_authentication_error(self):

        future = self.handler.submit_authentication(Credentials("alice", bytearray()), PasswordRecord(bytes(32), bytes(16)))

        with self.assertRaises(InvalidArgument):
            future.result(timeout=60)

    """
        Concurrent first submissions create exactly one worker pool.
    """
    def test_submit_authentication_single_pool(self):

        created = []
        real_executor = auth_module.ThreadPoolExecutor

        def slow_executor(*args, **kwargs):
            time.sleep(0.2)
            executor = real_executor(*args, **kwargs)
            created.append(executor)
            return executor

        barrier = threading.Barrier(4)
        futures = []

        def submit():
            barrier.wait()
            futures.append(self.handler.submit_authentication(Credentials("alice", bytearray()), PasswordRecord(bytes(32), bytes(16))))

        try:
            with mock.patch.object(auth_module, "ThreadPoolExecutor", side_effect=slow_executor):
                threads = [threading.Thread(target=submit) for _ in range(4)]
                for thread in threads:
                    thread.start()
                for thread in threads:
                    thread.join(timeout=60)

            self.assertEqual(1, len(created))
            self.assertEqual(4, len(futures))
            for future in futures:
                self.assertIsInstance(future.exception(timeout=60), InvalidArgument)

        finally:
            for executor in created:
                executor.shutdown(wait=True)

    """
        The handler releases its pool when used as a context manager.
    """
    def test_context_manager(self):

        with AuthenticationHandler(AuditLog(self.path), max_workers=1) as handler:
            record = handler.enroll(Credentials("bob", bytearray(self.PASSWORD)))
            self.assertTrue(handler.submit_authentication(Credentials("bob", bytearray(self.PASSWORD)), record).result(timeout=60))

        self.assertIsNone(handler._executor)

    """
        Audit events record outcomes but never password, hash or salt.
    """
    def test_audit_events_exclude_secrets(self):

        record = self.handler.enroll(Credentials("alice", bytearray(self.PASSWORD)))
        self.handler.authenticate(Credentials("alice", bytearray(b"wrongPassword")), record)

        events = self._read_events()

        self.assertEqual(["enroll", "authenticate"], [e["event"] for e in events])
        self.assertEqual(["success", "mismatch"], [e["outcome"] for e in events])

        with open(self.path, "r", encoding="utf-8") as f:
            raw = f.read()

        self.assertNotIn(self.PASSWORD.decode(), raw)
        self.assertNotIn(record.salt.hex(), raw)
        self.assertNotIn(record.password_hash.hex(), raw)

    """
        PasswordRecord repr does not reveal its contents.
    """
    def test_password_record_repr(self):

        record = PasswordRecord(password_hash=b"\x01" * 32, salt=b"\x02" * 16)

        self.assertEqual("PasswordRecord(password_hash=<32 bytes>, salt=<16 bytes>)", repr(record))

    """
        Worker pool size comes from SENTINELAUTH_KDF_WORKERS, with a fallback for bad values.
    """
    def test_worker_count_from_environment(self):

        with mock.patch.dict(os.environ, {CONSTANTS._KDF_WORKERS_ENV: "4"}):
            self.assertEqual(4, AuthenticationHandler(AuditLog(self.path)).max_workers)

        for bad in ("", "zero", "0", "-3"):
            with mock.patch.dict(os.environ, {CONSTANTS._KDF_WORKERS_ENV: bad}):
                self.assertEqual(CONSTANTS._DEFAULT_KDF_WORKERS, CONSTANTS.kdf_worker_count())

        with self.assertRaises(InvalidArgument):
            AuthenticationHandler(AuditLog(self.path), max_workers=0)


if __name__ == "__main__":
    unittest.main()
