#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testErrorHandler.py

    Description:

        Test suite for error_handler. Verifies the error taxonomy (codes,
        fields, fatality, ValueError compatibility) and that ErrorHandler
        normalizes engine and unexpected errors into failure reports while
        recording them in the audit log.
"""

import json
import os
import tempfile
import unittest
from sentinelauth.handlers.error_handler import ErrorHandler, SentinelAuthError, InvalidArgument, CryptoEngineUnavailable, InvalidKeySpec, ApplicationCodes
from sentinelauth.utilities.audit_log import AuditLog


class TestErrorHandler(unittest.TestCase):

    """
        Route audit events to a temporary file.
    """
    def setUp(self) -> None:

        fd, self.path = tempfile.mkstemp()
        os.close(fd)
        self.handler = ErrorHandler(AuditLog(self.path))

    def tearDown(self) -> None:
        os.remove(self.path)

    def _read_events(self):
        with open(self.path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    """
        Each error kind carries its default code, field and fatality.
    """
    def test_error_taxonomy(self):

        invalid = InvalidArgument("Salt cannot be empty", "salt")
        unavailable = CryptoEngineUnavailable("PBKDF2 algorithm not available", "algorithm")
        key_spec = InvalidKeySpec("PBKDF2 cannot derive key", "key_spec")

        self.assertEqual(ApplicationCodes.INVALID_ARGUMENT, invalid.application_code)
        self.assertEqual(ApplicationCodes.CRYPTO_ENGINE_UNAVAILABLE, unavailable.application_code)
        self.assertEqual(ApplicationCodes.INVALID_KEY_SPEC, key_spec.application_code)

        self.assertEqual("salt", invalid.field)
        self.assertFalse(invalid.fatal)
        self.assertTrue(unavailable.fatal)
        self.assertTrue(key_spec.fatal)

        for exc in (invalid, unavailable, key_spec):
            self.assertIsInstance(exc, SentinelAuthError)

        self.assertIsInstance(invalid, ValueError)
        self.assertEqual("invalid_argument: Salt cannot be empty", str(invalid))

    """
        InvalidArgument accepts a more specific application code.
    """
    def test_invalid_argument_custom_code(self):

        exc = InvalidArgument("Password does not satisfy the strength policy", "password", ApplicationCodes.WEAK_PASSWORD)

        self.assertEqual(ApplicationCodes.WEAK_PASSWORD, exc.application_code)
        self.assertEqual("Password does not satisfy the strength policy", exc.detail)

    """
        Engine errors are reported with their own code, message and field.
    """
    def test_handle_engine_error(self):

        report = self.handler.handle_error(InvalidArgument("Salt cannot be empty", "salt"), user_identifier="alice", context="derive_key")

        self.assertEqual("failure", report["status"])
        self.assertEqual("alice", report["user_identifier"])
        self.assertEqual(ApplicationCodes.INVALID_ARGUMENT, report["error_code"])
        self.assertEqual("Salt cannot be empty", report["message"])
        self.assertEqual("salt", report["field"])
        self.assertFalse(report["fatal"])
        self.assertTrue(report["timestamp"].endswith("Z"))

    """
        Unexpected exceptions are normalized to internal_error with a generic message.
    """
    def test_handle_unexpected_error(self):

        report = self.handler.handle_error(RuntimeError("disk on fire"), context="enroll")

        self.assertEqual(ApplicationCodes.INTERNAL_ERROR, report["error_code"])
        self.assertNotIn("disk on fire", report["message"])
        self.assertEqual("", report["field"])
        self.assertTrue(report["fatal"])

    """
        Every handled error is written to the audit log.
    """
    def test_handle_error_writes_audit_event(self):

        self.handler.handle_error(CryptoEngineUnavailable("PBKDF2 algorithm not available", "algorithm"), user_identifier="bob", context="verify_password")

        events = self._read_events()

        self.assertEqual(1, len(events))
        self.assertEqual("engine_error", events[0]["event"])
        self.assertEqual("bob", events[0]["user_identifier"])
        self.assertEqual("verify_password", events[0]["context"])
        self.assertEqual("CryptoEngineUnavailable", events[0]["error_type"])


if __name__ == "__main__":
    unittest.main()
