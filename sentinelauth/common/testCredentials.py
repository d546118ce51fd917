#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testCredentials.py

    Description:

        Test suite for Credentials: field access, equality, masked
        representation and in-place wiping of the held password.
"""

import unittest
from sentinelauth.common.credentials import Credentials


class TestCredentials(unittest.TestCase):

    """
        Fields are readable and the password buffer can be replaced.
    """
    def test_fields(self):

        creds = Credentials("alice", bytearray(b"secret"))

        self.assertEqual("alice", creds.user_identifier)
        self.assertEqual(bytearray(b"secret"), creds.password)

        creds.password = bytearray(b"other")
        self.assertEqual(bytearray(b"other"), creds.password)

    """
        Equality compares identifier and password contents.
    """
    def test_equality(self):

        self.assertEqual(Credentials("alice", bytearray(b"secret")), Credentials("alice", bytearray(b"secret")))
        self.assertNotEqual(Credentials("alice", bytearray(b"secret")), Credentials("alice", bytearray(b"Secret")))
        self.assertNotEqual(Credentials("alice", bytearray(b"secret")), Credentials("bob", bytearray(b"secret")))

    """
        repr/str never reveal the password.
    """
    def test_repr_masks_password(self):

        creds = Credentials("alice", bytearray(b"secret"))

        self.assertNotIn("secret", repr(creds))
        self.assertIn("*****", str(creds))
        self.assertIn("alice", repr(creds))
        self.assertIn("password=None", repr(Credentials("alice")))

    """
        wipe() zeroes the same buffer the caller holds.
    """
    def test_wipe(self):

        password = bytearray(b"secret")
        creds = Credentials("alice", password)

        creds.wipe()

        self.assertEqual(bytearray(6), password)

        # No password is a no-op
        Credentials("bob").wipe()

    """
        Credentials compare by value but cannot be hashed or used as dict keys.
    """
    def test_not_hashable(self):

        creds = Credentials("alice", bytearray(b"secret"))

        with self.assertRaises(TypeError):
            hash(creds)

        with self.assertRaises(TypeError):
            {creds: True}

        self.assertEqual(Credentials("alice", bytearray(b"secret")), creds)


if __name__ == "__main__":
    unittest.main()
