#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testPasswordPolicy.py

    Description:

        Test suite for password_policy. Covers the exact strength-policy
        cases, wiping of the inspected buffer, and the generator's length,
        class-coverage and argument-validation guarantees.
"""

import array
import unittest
from sentinelauth.encryption.password_policy import is_password_strong, generate_password
from sentinelauth.encryption.secure_memory import wipe_chars
from sentinelauth.handlers.error_handler import InvalidArgument
import sentinelauth.constants as CONSTANTS


class TestPasswordPolicy(unittest.TestCase):

    """
        Exact policy verdicts for representative passwords.
    """
    def test_is_password_strong_cases(self):

        self.assertFalse(is_password_strong(None))
        self.assertFalse(is_password_strong(list("short")))
        self.assertFalse(is_password_strong(list("lowercaseonly")))
        self.assertFalse(is_password_strong(list("UPPERCASEONLY")))
        self.assertFalse(is_password_strong(list("12345678")))
        self.assertFalse(is_password_strong(list("%^&*!@#$%^&*")))
        self.assertFalse(is_password_strong(list("Abcdefg1")))
        self.assertFalse(is_password_strong(list("Ab1!")))

        self.assertTrue(is_password_strong(list("GfhjK643m&Q1")))
        self.assertTrue(is_password_strong(list("teRTvly246*!-")))
        self.assertTrue(is_password_strong(list("Abcdef1!")))

    """
        Byte buffers are decoded as UTF-8; invalid sequences count as special.
    """
    def test_is_password_strong_bytes(self):

        self.assertTrue(is_password_strong(bytearray(b"GfhjK643m&Q1")))
        self.assertFalse(is_password_strong(bytearray(b"lowercaseonly")))
        self.assertTrue(is_password_strong(bytearray(b"Abcdefg1") + bytearray([0xFF])))

    """
        Length is counted in characters and multi-byte letters are letters, not special.
    """
    def test_is_password_strong_utf8_bytes(self):

        # Six characters in nine bytes
        self.assertFalse(is_password_strong(bytearray("Ab1ééé".encode("utf-8"))))
        # é is lowercase, so there is no special character
        self.assertFalse(is_password_strong(bytearray("Abcdefg1é".encode("utf-8"))))
        self.assertTrue(is_password_strong(bytearray("Abcdefg1é!".encode("utf-8"))))

        # Same verdicts as the equivalent character buffers
        self.assertEqual(is_password_strong(list("Пароль12 ")), is_password_strong(bytearray("Пароль12 ".encode("utf-8"))))

    """
        Memoryviews with signed, released or strided layouts are not strong and do not raise.
    """
    def test_is_password_strong_memoryview_layouts(self):

        signed = array.array("b", [-1] * 8)
        self.assertFalse(is_password_strong(memoryview(signed)))
        self.assertEqual(array.array("b", [0] * 8), signed)

        released = memoryview(bytearray(b"GfhjK643m&Q1"))
        released.release()
        self.assertFalse(is_password_strong(released))

        self.assertFalse(is_password_strong(memoryview(bytearray(b"GfhjK643m&Q1!!!!"))[::2]))

        data = bytearray(b"GfhjK643m&Q1")
        self.assertTrue(is_password_strong(memoryview(data)))
        self.assertEqual(bytearray(12), data)

    """
        Immutable or unsupported inputs are simply not strong.
    """
    def test_is_password_strong_never_raises(self):

        self.assertFalse(is_password_strong(b"GfhjK643m&Q1"))
        self.assertFalse(is_password_strong("GfhjK643m&Q1"))
        self.assertFalse(is_password_strong(12345678))
        self.assertFalse(is_password_strong([]))

    """
        Unicode letters and digits are classified like their ASCII counterparts.
    """
    def test_is_password_strong_unicode(self):

        self.assertTrue(is_password_strong(list("Пароль12 ")))
        self.assertFalse(is_password_strong(list("Пароль12")))

    """
        is_password_strong clears the buffer regardless of the verdict.
    """
    def test_is_password_strong_clears_input(self):

        strong = list(")re_LXTm5-M72.zN")
        weak = list("short")
        data = bytearray(b")re_LXTm5-M72.zN")

        self.assertTrue(is_password_strong(strong))
        self.assertFalse(is_password_strong(weak))
        self.assertTrue(is_password_strong(data))

        self.assertEqual(["\x00"] * 16, strong)
        self.assertEqual(["\x00"] * 5, weak)
        self.assertEqual(bytearray(16), data)

    """
        generate_password defaults to 16 characters.
    """
    def test_generate_password_default_length(self):

        password = generate_password()

        self.assertIsInstance(password, list)
        self.assertEqual(16, len(password))

        wipe_chars(password)

    """
        Every generated password has the requested length and passes the policy.
    """
    def test_generate_password_satisfies_policy(self):

        for length in (8, 9, 12, 16, 32, 64, 128):
            for _ in range(20):
                with self.subTest(length=length):
                    password = generate_password(length)

                    self.assertEqual(length, len(password))
                    self.assertTrue(all(ch in CONSTANTS._ALL_PASSWORD_CHARS for ch in password))
                    self.assertTrue(is_password_strong(password))

    """
        Generated passwords contain all required character classes.
    """
    def test_generate_password_content(self):

        password = generate_password(16)

        self.assertTrue(any(ch.islower() for ch in password), "Should contain lowercase")
        self.assertTrue(any(ch.isupper() for ch in password), "Should contain uppercase")
        self.assertTrue(any(ch.isdigit() for ch in password), "Should contain digit")
        self.assertTrue(any(ch in CONSTANTS._SPECIAL_CHARS for ch in password), "Should contain special character")

        wipe_chars(password)

    """
        Successive generated passwords differ.
    """
    def test_generate_password_unique(self):

        generated = {"".join(generate_password(16)) for _ in range(50)}
        self.assertEqual(50, len(generated))

    """
        The seeded uppercase character does not always stay in the first position.
    """
    def test_generate_password_is_shuffled(self):

        first_chars = {generate_password(8)[0] for _ in range(200)}
        self.assertTrue(any(not ch.isupper() for ch in first_chars))

    """
        Lengths below 8 and non-integers are rejected with InvalidArgument.
    """
    def test_generate_password_validation(self):

        for bad_length in (3, 0, -1, 7):
            with self.subTest(length=bad_length):
                with self.assertRaises(InvalidArgument):
                    generate_password(bad_length)

        for bad_length in ("16", 16.0, None, True):
            with self.subTest(length=bad_length):
                with self.assertRaises(InvalidArgument):
                    generate_password(bad_length)


if __name__ == "__main__":
    unittest.main()
