#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: password_security.py

    Description:
        Single import point for SentinelAuth's password-security engine:
        salt generation, PBKDF2 key derivation, password verification,
        constant-time comparison, strength validation, password generation
        and secret-buffer wiping, together with the errors they raise.
        All functions are stateless and thread-safe.
"""


from sentinelauth.encryption.secure_random import generate_salt
from sentinelauth.encryption.pbkdf2_manager import derive_key, verify_password, constant_time_equals
from sentinelauth.encryption.password_policy import is_password_strong, generate_password
from sentinelauth.encryption.secure_memory import wipe, wipe_bytes, wipe_chars, wiped, password_to_bytes
from sentinelauth.handlers.error_handler import SentinelAuthError, InvalidArgument, CryptoEngineUnavailable, InvalidKeySpec


__all__ = [
    "generate_salt",
    "derive_key",
    "verify_password",
    "constant_time_equals",
    "is_password_strong",
    "generate_password",
    "wipe",
    "wipe_bytes",
    "wipe_chars",
    "wiped",
    "password_to_bytes",
    "SentinelAuthError",
    "InvalidArgument",
    "CryptoEngineUnavailable",
    "InvalidKeySpec",
]
