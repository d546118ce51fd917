#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testPasswordSecurity.py

    Description:

        End-to-end checks through the password_security import point:
        generate a password, derive and verify it with a fresh salt, and
        the fixed-salt login scenario.
"""

import unittest
import sentinelauth.password_security as password_security


class TestPasswordSecurity(unittest.TestCase):

    """
        Every documented operation is exported.
    """
    def test_public_surface(self):

        for name in password_security.__all__:
            with self.subTest(name=name):
                self.assertTrue(hasattr(password_security, name))

    """
        Fixed salt [1..16]: the stored password verifies, a wrong one does not.
    """
    def test_fixed_salt_scenario(self):

        salt = bytes(range(1, 17))
        stored_hash = password_security.derive_key(list("Cm8&Ckqz2h6,KOH0"), salt)

        self.assertTrue(password_security.verify_password(list("Cm8&Ckqz2h6,KOH0"), stored_hash, salt))
        self.assertFalse(password_security.verify_password(list("wrongPassword"), stored_hash, salt))

    """
        Generated password -> strength check on a copy -> derive -> verify.
    """
    def test_generated_password_round_trip(self):

        password = password_security.generate_password()
        self.assertTrue(password_security.is_password_strong(list(password)))

        salt = password_security.generate_salt()
        candidate = list(password)
        stored_hash = password_security.derive_key(password, salt)

        self.assertTrue(all(ch == "\x00" for ch in password))
        self.assertTrue(password_security.verify_password(candidate, stored_hash, salt))
        self.assertTrue(all(ch == "\x00" for ch in candidate))


if __name__ == "__main__":
    unittest.main()
