#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testSecureMemory.py

    Description:

        Test suite for secure_memory. Verifies byte/char wiping, the wiped()
        scope guard on normal and error exits, buffer validation, and the
        char-to-byte conversion that clears its input, and the UTF-8
        byte-to-char decoding used for strength checks.
"""

import unittest
from sentinelauth.encryption.secure_memory import wipe, wipe_bytes, wipe_chars, wiped, validate_secret_buffer, password_to_bytes, bytes_to_chars
from sentinelauth.handlers.error_handler import InvalidArgument, ApplicationCodes


class TestSecureMemory(unittest.TestCase):

    """
        wipe_bytes and wipe_chars clear every element and can be repeated.
    """
    def test_wipe_bytes_and_chars(self):

        data = bytearray([1, 2, 3, 4, 5, 6, 7, 8])
        chars = list("abcdeef")

        wipe_bytes(data)
        wipe_chars(chars)

        self.assertEqual(bytearray(8), data)
        self.assertEqual(["\x00"] * 7, chars)

        # Idempotent on already-wiped buffers
        wipe_bytes(data)
        wipe_chars(chars)
        self.assertEqual(bytearray(8), data)

    """
        wipe() never raises on None, empty, immutable or unsupported values.
    """
    def test_wipe_tolerates_any_input(self):

        for value in (None, bytearray(), [], b"immutable", "immutable", 42, memoryview(b"read-only")):
            with self.subTest(value=value):
                wipe(value)

        wipe_bytes(None)
        wipe_chars(None)

    """
        wipe() dispatches on buffer type, including writable memoryviews.
    """
    def test_wipe_dispatch(self):

        data = bytearray(b"secret")
        chars = list("secret")
        backing = bytearray(b"view-secret")

        wipe(data)
        wipe(chars)
        wipe(memoryview(backing))

        self.assertTrue(all(b == 0 for b in data))
        self.assertTrue(all(c == "\x00" for c in chars))
        self.assertTrue(all(b == 0 for b in backing))

    """
        wiped() clears the buffer on normal exit.
    """
    def test_wiped_clears_on_return(self):

        data = bytearray(b"top-secret")

        with wiped(data) as inner:
            self.assertIs(data, inner)
            self.assertEqual(bytearray(b"top-secret"), inner)

        self.assertEqual(bytearray(len(b"top-secret")), data)

    """
        wiped() clears the buffer when an exception propagates.
    """
    def test_wiped_clears_on_error(self):

        chars = list("top-secret")

        with self.assertRaises(RuntimeError):
            with wiped(chars):
                raise RuntimeError("boom")

        self.assertEqual(["\x00"] * len("top-secret"), chars)

    """
        validate_secret_buffer reports whether the buffer holds characters.
    """
    def test_validate_secret_buffer_kinds(self):

        self.assertTrue(validate_secret_buffer(list("abc"), "password"))
        self.assertFalse(validate_secret_buffer(bytearray(b"abc"), "password"))
        self.assertFalse(validate_secret_buffer(memoryview(bytearray(b"abc")), "password"))

    """
        validate_secret_buffer rejects absent, empty, immutable and malformed buffers.
    """
    def test_validate_secret_buffer_rejects(self):

        cases = [
            (None, ApplicationCodes.INVALID_ARGUMENT),
            (bytearray(), ApplicationCodes.EMPTY_PASSWORD),
            ([], ApplicationCodes.EMPTY_PASSWORD),
            (b"bytes", ApplicationCodes.INVALID_TYPE),
            ("string", ApplicationCodes.INVALID_TYPE),
            (memoryview(b"read-only"), ApplicationCodes.INVALID_TYPE),
            (["ab", "c"], ApplicationCodes.INVALID_TYPE),
            ([1, 2, 3], ApplicationCodes.INVALID_TYPE),
            (12345678, ApplicationCodes.INVALID_TYPE),
        ]

        for value, code in cases:
            with self.subTest(value=value):
                with self.assertRaises(InvalidArgument) as cm:
                    validate_secret_buffer(value, "password")

                self.assertEqual(code, cm.exception.application_code)
                self.assertEqual("password", cm.exception.field)

    """
        wipe() skips released and strided memoryviews without raising.
    """
    def test_wipe_unusable_memoryviews(self):

        released = memoryview(bytearray(b"secret"))
        released.release()
        wipe(released)

        with wiped(released):
            pass

        backing = bytearray(b"secret!!")
        wipe(memoryview(backing)[::2])
        self.assertEqual(bytearray(b"secret!!"), backing)

    """
        validate_secret_buffer rejects released and strided memoryviews it could not wipe.
    """
    def test_validate_secret_buffer_rejects_unusable_views(self):

        released = memoryview(bytearray(b"secret"))
        released.release()
        strided = memoryview(bytearray(b"abcdefgh"))[::2]

        for value in (released, strided):
            with self.subTest(value=value):
                with self.assertRaises(InvalidArgument) as cm:
                    validate_secret_buffer(value, "password")

                self.assertEqual(ApplicationCodes.INVALID_TYPE, cm.exception.application_code)

    """
        password_to_bytes UTF-8 encodes and clears the original characters.
    """
    def test_password_to_bytes_clears_original(self):

        password = list("?pr8NqBJZFl@8e-y")
        result = password_to_bytes(password)

        self.assertIsInstance(result, bytearray)
        self.assertEqual(bytearray(b"?pr8NqBJZFl@8e-y"), result)
        self.assertEqual(["\x00"] * 16, password)

    """
        password_to_bytes encodes non-ASCII characters as UTF-8.
    """
    def test_password_to_bytes_unicode(self):

        result = password_to_bytes(list("пароль€"))
        self.assertEqual(bytearray("пароль€".encode("utf-8")), result)

    """
        password_to_bytes rejects None and empty input.
    """
    def test_password_to_bytes_validation(self):

        with self.assertRaises(InvalidArgument):
            password_to_bytes(None)

        with self.assertRaises(InvalidArgument):
            password_to_bytes([])

    """
        password_to_bytes clears the input even when encoding fails.
    """
    def test_password_to_bytes_clears_on_error(self):

        password = ["a", "\ud800", "b"]

        with self.assertRaises(InvalidArgument):
            password_to_bytes(password)

        self.assertEqual(["\x00"] * 3, password)

    """
        bytes_to_chars decodes UTF-8 without touching the source buffer.
    """
    def test_bytes_to_chars(self):

        data = bytearray("Ab1é€".encode("utf-8"))

        self.assertEqual(list("Ab1é€"), bytes_to_chars(data))
        self.assertEqual(bytearray("Ab1é€".encode("utf-8")), data)
        self.assertEqual(list("ab"), bytes_to_chars(memoryview(bytearray(b"ab"))))

    """
        Invalid and truncated UTF-8 sequences decode to the replacement character.
    """
    def test_bytes_to_chars_invalid_utf8(self):

        self.assertEqual(["a", "\ufffd", "b"], bytes_to_chars(bytearray([0x61, 0xFF, 0x62])))
        self.assertEqual(["a", "\ufffd"], bytes_to_chars(bytearray([0x61, 0xC3])))

    """
        bytes_to_chars rejects strided views.
    """
    def test_bytes_to_chars_rejects_strided(self):

        with self.assertRaises(ValueError):
            bytes_to_chars(memoryview(bytearray(b"abcdefgh"))[::2])


if __name__ == "__main__":
    unittest.main()
