#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testPBKDF2Manager.py

    Description:

        Test suite for pbkdf2_manager. Verifies deterministic PBKDF2 key
        derivation, buffer wiping on success and failure, error mapping of
        primitive failures, constant-time comparison semantics, and password
        verification including the fixed-salt end-to-end scenario.
"""

import hashlib
import unittest
from unittest import mock
from cryptography.exceptions import UnsupportedAlgorithm
import sentinelauth.encryption.pbkdf2_manager as pbkdf2_module
from sentinelauth.encryption.pbkdf2_manager import derive_key, verify_password, constant_time_equals
from sentinelauth.handlers.error_handler import InvalidArgument, CryptoEngineUnavailable, InvalidKeySpec, ApplicationCodes


class TestPBKDF2Manager(unittest.TestCase):

    HASH_LEN = 32
    ITERATIONS = 100_000

    """
        Fixed salt [1..16] shared by every test.
    """
    def setUp(self) -> None:

        self.salt = bytes(range(1, 17))

    def _assert_wiped_chars(self, buffer):
        for ch in buffer:
            self.assertEqual("\x00", ch)

    def _assert_wiped_bytes(self, buffer):
        for b in buffer:
            self.assertEqual(0, b)

    ################################################################################################
    #                                   derive_key
    ################################################################################################

    """
        derive_key returns the same 32-byte key for the same password and salt.
    """
    def test_derive_key_deterministic(self):

        password = list("u4=R1i+AUl#,L@8S")
        reference = list(password)

        digest1 = derive_key(password, self.salt)
        digest2 = derive_key(reference, self.salt)

        self.assertIsInstance(digest1, bytes)
        self.assertEqual(self.HASH_LEN, len(digest1))
        self.assertEqual(digest1, digest2)

    """
        derive_key matches a standard PBKDF2-HMAC-SHA-256 computation.
    """
    def test_derive_key_matches_reference_pbkdf2(self):

        expected = hashlib.pbkdf2_hmac("sha256", b"K9.8S}vgV*hrh;Gx", self.salt, self.ITERATIONS, self.HASH_LEN)

        self.assertEqual(expected, derive_key(list("K9.8S}vgV*hrh;Gx"), self.salt))
        self.assertEqual(expected, derive_key(bytearray(b"K9.8S}vgV*hrh;Gx"), self.salt))

    """
        Different salts yield different keys for the same password.
    """
    def test_derive_key_salt_sensitive(self):

        other_salt = bytes(range(2, 18))

        self.assertNotEqual(derive_key(list("same-password"), self.salt), derive_key(list("same-password"), other_salt))

    """
        derive_key clears a character password buffer.
    """
    def test_derive_key_clears_chars(self):

        password = list("K9.8S}vgV*hrh;Gx")
        derive_key(password, self.salt)

        self.assertEqual(16, len(password))
        self._assert_wiped_chars(password)

    """
        derive_key clears a byte password buffer.
    """
    def test_derive_key_clears_bytes(self):

        password = bytearray(b"K9.8S}vgV*hrh;Gx")
        derive_key(password, self.salt)

        self._assert_wiped_bytes(password)

    """
        derive_key rejects None/empty password and salt with InvalidArgument.
    """
    def test_derive_key_validation(self):

        valid_salt = bytes(16)

        with self.assertRaises(InvalidArgument):
            derive_key(None, valid_salt)

        with self.assertRaises(InvalidArgument):
            derive_key([], valid_salt)

        with self.assertRaises(InvalidArgument) as cm:
            derive_key(list("<.XA:mxn#QznqaT6"), None)
        self.assertEqual(ApplicationCodes.INVALID_SALT, cm.exception.application_code)
        self.assertEqual("salt", cm.exception.field)

        with self.assertRaises(InvalidArgument):
            derive_key(list("<.XA:mxn#QznqaT6"), b"")

        # An all-zero salt is still a valid salt
        self.assertEqual(self.HASH_LEN, len(derive_key(list("<.XA:mxn#QznqaT6"), valid_salt)))

    """
        A rejected salt still clears the password buffer.
    """
    def test_derive_key_clears_on_invalid_salt(self):

        password = list("<.XA:mxn#QznqaT6")

        with self.assertRaises(InvalidArgument):
            derive_key(password, b"")

        self._assert_wiped_chars(password)

    """
        An unsupported PBKDF2 algorithm surfaces as CryptoEngineUnavailable and still clears the password.
    """
    def test_derive_key_engine_unavailable(self):

        password = list("Ajo%0MHr?ccL;S!q")

        with mock.patch.object(pbkdf2_module, "PBKDF2HMAC", side_effect=UnsupportedAlgorithm("no sha256")):
            with self.assertRaises(CryptoEngineUnavailable) as cm:
                derive_key(password, self.salt)

        self.assertEqual(ApplicationCodes.CRYPTO_ENGINE_UNAVAILABLE, cm.exception.application_code)
        self._assert_wiped_chars(password)

    """
        Parameters rejected by the primitive surface as InvalidKeySpec and still clear the password.
    """
    def test_derive_key_invalid_key_spec(self):

        password = bytearray(b"Ajo%0MHr?ccL;S!q")

        with mock.patch.object(pbkdf2_module, "PBKDF2HMAC", side_effect=ValueError("bad length")):
            with self.assertRaises(InvalidKeySpec) as cm:
                derive_key(password, self.salt)

        self.assertEqual(ApplicationCodes.INVALID_KEY_SPEC, cm.exception.application_code)
        self._assert_wiped_bytes(password)

    ################################################################################################
    #                                   constant_time_equals
    ################################################################################################

    """
        constant_time_equals compares equal-length inputs and rejects absent or uneven ones.
    """
    def test_constant_time_equals(self):

        array1 = bytes([1, 2, 3])
        array2 = bytes([1, 2, 3])
        array3 = bytes([1, 2, 4])
        array4 = bytes([1, 2])

        self.assertTrue(constant_time_equals(array1, array2))
        self.assertTrue(constant_time_equals(array1, array1))
        self.assertTrue(constant_time_equals(b"", b""))
        self.assertTrue(constant_time_equals(bytearray(array1), array2))
        self.assertFalse(constant_time_equals(array1, array3))
        self.assertFalse(constant_time_equals(array1, array4))
        self.assertFalse(constant_time_equals(None, array1))
        self.assertFalse(constant_time_equals(array1, None))
        self.assertFalse(constant_time_equals(None, None))

    """
        Mismatched input types compare unequal instead of raising.
    """
    def test_constant_time_equals_mixed_types(self):

        self.assertFalse(constant_time_equals(b"abc", "abc"))

    ################################################################################################
    #                                   verify_password
    ################################################################################################

    """
        verify_password returns True for the correct password (fixed-salt scenario).
    """
    def test_verify_password_correct(self):

        stored_hash = derive_key(list("Cm8&Ckqz2h6,KOH0"), self.salt)

        self.assertTrue(verify_password(list("Cm8&Ckqz2h6,KOH0"), stored_hash, self.salt))

    """
        verify_password returns False for a wrong password (fixed-salt scenario).
    """
    def test_verify_password_incorrect(self):

        stored_hash = derive_key(list("Cm8&Ckqz2h6,KOH0"), self.salt)

        self.assertFalse(verify_password(list("wrongPassword"), stored_hash, self.salt))

    """
        A single differing character is enough to fail verification.
    """
    def test_verify_password_single_byte_difference(self):

        stored_hash = derive_key(bytearray(b"iqE@,G1a<6;?P)T%"), self.salt)

        self.assertTrue(verify_password(bytearray(b"iqE@,G1a<6;?P)T%"), stored_hash, self.salt))
        self.assertFalse(verify_password(bytearray(b"iqE@,G1a<6;?P)T&"), stored_hash, self.salt))

    """
        verify_password clears the candidate buffer.
    """
    def test_verify_password_clears_input(self):

        original = list("Ajo%0MHr?ccL;S!q")
        stored_hash = derive_key(list(original), self.salt)

        candidate = list(original)
        verify_password(candidate, stored_hash, self.salt)

        self._assert_wiped_chars(candidate)

    """
        verify_password rejects None/empty arguments and clears the candidate anyway.
    """
    def test_verify_password_validation(self):

        valid_hash = bytes(256)

        with self.assertRaises(InvalidArgument):
            verify_password(None, valid_hash, self.salt)

        with self.assertRaises(InvalidArgument):
            verify_password([], valid_hash, self.salt)

        for stored_hash, salt, field in ((None, self.salt, "stored_hash"), (b"", self.salt, "stored_hash"), (valid_hash, None, "salt"), (valid_hash, b"", "salt")):
            with self.subTest(field=field):
                candidate = list("password")

                with self.assertRaises(InvalidArgument) as cm:
                    verify_password(candidate, stored_hash, salt)

                self.assertEqual(field, cm.exception.field)
                self._assert_wiped_chars(candidate)

        # A hash of the wrong length simply does not match
        self.assertFalse(verify_password(list("password"), valid_hash, self.salt))

    """
        Errors raised by the derivation propagate and the candidate is still cleared.
    """
    def test_verify_password_clears_on_engine_error(self):

        candidate = list("Ajo%0MHr?ccL;S!q")

        with mock.patch.object(pbkdf2_module, "PBKDF2HMAC", side_effect=UnsupportedAlgorithm("no sha256")):
            with self.assertRaises(CryptoEngineUnavailable):
                verify_password(candidate, bytes(32), self.salt)

        self._assert_wiped_chars(candidate)


if __name__ == "__main__":
    unittest.main()
