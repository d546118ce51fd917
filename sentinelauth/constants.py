#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: constants.py

    Description:
        Centralized constants for SentinelAuth's password-security engine.
        Defines the fixed PBKDF2 parameters, salt and password lengths, the
        character classes used by the password generator, and the handful of
        operational settings read from the environment (audit log location
        and key-derivation worker pool size).
"""

import os


################################################################################################
# Fixed engine parameters (not configurable)
################################################################################################

# PBKDF2 hash algorithm name (as exposed by the cryptography package)
_PBKDF2_ALGORITHM = "PBKDF2-HMAC-SHA-256"

# Number of PBKDF2 iterations
_PBKDF2_ITERATIONS: int = 100_000

# PBKDF2 output length in bits
_PBKDF2_KEY_LENGTH_BITS: int = 256

# PBKDF2 output length in bytes
_PBKDF2_KEY_LENGTH_BYTES: int = _PBKDF2_KEY_LENGTH_BITS // 8

# Number of bytes for a freshly generated salt
_SALT_LENGTH_BYTES: int = 16

# Minimum accepted password length
_MIN_PASSWORD_LENGTH: int = 8

# Length of a generated password when none is requested
_DEFAULT_PASSWORD_LENGTH: int = 16

# Zero values written over secret buffers
_ZERO_BYTE: int = 0
_ZERO_CHAR: str = "\x00"


################################################################################################
# Password generator character classes
################################################################################################

_UPPERCASE_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWERCASE_CHARS = "abcdefghijklmnopqrstuvwxyz"
_DIGIT_CHARS = "0123456789"
_SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Union of all classes used to fill the non-seeded positions
_ALL_PASSWORD_CHARS = _UPPERCASE_CHARS + _LOWERCASE_CHARS + _DIGIT_CHARS + _SPECIAL_CHARS

# One character of each of these is always seeded into a generated password
_REQUIRED_CHARACTER_CLASSES = (_UPPERCASE_CHARS, _LOWERCASE_CHARS, _DIGIT_CHARS, _SPECIAL_CHARS)


################################################################################################
# Operational settings (environment)
################################################################################################

# Environment variable naming the audit log file
_AUDIT_LOG_ENV = "SENTINELAUTH_AUDIT_LOG"

# Environment variable sizing the key-derivation worker pool
_KDF_WORKERS_ENV = "SENTINELAUTH_KDF_WORKERS"

# Worker pool size used when the environment does not provide a valid one
_DEFAULT_KDF_WORKERS: int = 2


"""
    Resolve the audit log path from the environment.

    @param default (str): Path used when SENTINELAUTH_AUDIT_LOG is unset or blank.
    @return str: Audit log file path.
"""
def audit_log_path(default: str) -> str:
    configured = os.environ.get(_AUDIT_LOG_ENV, "").strip()
    return configured or default


"""
    Resolve the key-derivation worker pool size from the environment.

    @return int: Positive worker count; falls back to _DEFAULT_KDF_WORKERS on missing or invalid input.
"""
def kdf_worker_count() -> int:
    raw = os.environ.get(_KDF_WORKERS_ENV, "").strip()

    try:
        workers = int(raw)
    except ValueError:
        return _DEFAULT_KDF_WORKERS

    # Zero or negative pools are meaningless
    if workers < 1:
        return _DEFAULT_KDF_WORKERS

    return workers
