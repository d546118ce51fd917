#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name:    testSecureRandom.py

    Description:

        Test suite for secure_random. Verifies salt length and uniqueness,
        uniform choice/shuffle helpers, and that a failing OS random source
        surfaces as CryptoEngineUnavailable.
"""

import unittest
from unittest import mock
import sentinelauth.encryption.secure_random as random_module
from sentinelauth.encryption.secure_random import generate_salt, random_choice, random_shuffle
from sentinelauth.handlers.error_handler import CryptoEngineUnavailable, ApplicationCodes


class TestSecureRandom(unittest.TestCase):

    SALT_LEN = 16

    """
        Generated salts are 16 bytes, not all-zero, and differ between calls.
    """
    def test_generate_salt_properties(self):

        salt1 = generate_salt()
        salt2 = generate_salt()

        self.assertIsInstance(salt1, bytes)
        self.assertEqual(self.SALT_LEN, len(salt1))
        self.assertEqual(self.SALT_LEN, len(salt2))

        self.assertNotEqual(bytes(self.SALT_LEN), salt1)
        self.assertNotEqual(salt1, salt2)

    """
        A batch of salts contains no duplicates.
    """
    def test_generate_salt_unique_batch(self):

        salts = {generate_salt() for _ in range(200)}
        self.assertEqual(200, len(salts))

    """
        The shared source is a single SystemRandom instance.
    """
    def test_shared_source_is_system_random(self):

        import random
        self.assertIsInstance(random_module.SECURE_RANDOM, random.SystemRandom)

    """
        random_choice only returns members of the population.
    """
    def test_random_choice_membership(self):

        population = "ABC"
        for _ in range(50):
            self.assertIn(random_choice(population), population)

    """
        random_shuffle permutes without losing or adding elements.
    """
    def test_random_shuffle_is_permutation(self):

        items = list("abcdefghijklmnop")
        original = list(items)

        random_shuffle(items)

        self.assertEqual(sorted(original), sorted(items))

    """
        An OS random source failure surfaces as CryptoEngineUnavailable.
    """
    def test_random_source_failure(self):

        with mock.patch.object(random_module.SECURE_RANDOM, "randbytes", side_effect=OSError("no entropy")):
            with self.assertRaises(CryptoEngineUnavailable) as cm:
                generate_salt()

        self.assertEqual(ApplicationCodes.RANDOM_SOURCE_FAILURE, cm.exception.application_code)
        self.assertEqual("salt", cm.exception.field)

        with mock.patch.object(random_module.SECURE_RANDOM, "choice", side_effect=OSError("no entropy")):
            with self.assertRaises(CryptoEngineUnavailable):
                random_choice("abc")

        with mock.patch.object(random_module.SECURE_RANDOM, "shuffle", side_effect=OSError("no entropy")):
            with self.assertRaises(CryptoEngineUnavailable):
                random_shuffle(list("abc"))


if __name__ == "__main__":
    unittest.main()
