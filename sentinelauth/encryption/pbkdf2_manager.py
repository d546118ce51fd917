#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name: pbkdf2_manager.py

    Description:
        Provides SentinelAuth's fixed-parameter PBKDF2-HMAC-SHA-256 key
        derivation, password verification against a stored hash, and
        constant-time comparison of digests. Iterations (100000) and output
        length (256 bits) are fixed so callers cannot select weak parameters.
        Every password buffer handed to these functions is zeroed before
        control returns, whether the call succeeds or raises.
"""


import hmac
import typing
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from sentinelauth.handlers.error_handler import InvalidArgument, CryptoEngineUnavailable, InvalidKeySpec, ApplicationCodes
from sentinelauth.encryption.secure_memory import wiped, validate_secret_buffer, password_to_bytes
import sentinelauth.constants as CONSTANTS


# Non-secret byte inputs (salt, stored hash)
_BYTES_LIKE = (bytes, bytearray, memoryview)



"""
    Validate a non-secret byte argument such as a salt or stored hash.

    @param value (Any): Candidate value.
    @param field_name (str): Argument name used in error messages.
    @param application_code (str): Code attached to the raised error.
    @ensures Raises InvalidArgument when value is absent, empty, or not bytes-like.
"""
def _validate_bytes(value: typing.Any, field_name: str, application_code: str) -> None:

    if value is None:
        raise InvalidArgument(f"{field_name} cannot be None", field_name, application_code)

    if not isinstance(value, _BYTES_LIKE):
        raise InvalidArgument(f"{field_name} must be bytes", field_name, ApplicationCodes.INVALID_TYPE)

    if len(value) == 0:
        raise InvalidArgument(f"{field_name} cannot be empty", field_name, application_code)



"""
    Run PBKDF2-HMAC-SHA-256 over raw key material.

    @param key_material (bytearray | memoryview): Password bytes; not wiped here.
    @param salt (bytes): Non-empty salt.
    @return bytes: 32-byte derived key.
    @ensures Primitive failures are mapped onto CryptoEngineUnavailable / InvalidKeySpec.
"""
def _run_pbkdf2(key_material: typing.Union[bytearray, memoryview], salt: bytes) -> bytes:

    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=CONSTANTS._PBKDF2_KEY_LENGTH_BYTES,
            salt=bytes(salt),
            iterations=CONSTANTS._PBKDF2_ITERATIONS,
        )
        digest = kdf.derive(key_material)

    except UnsupportedAlgorithm as e:
        raise CryptoEngineUnavailable(f"{CONSTANTS._PBKDF2_ALGORITHM} algorithm not available", "algorithm") from e

    except (ValueError, TypeError) as e:
        raise InvalidKeySpec(f"{CONSTANTS._PBKDF2_ALGORITHM} cannot derive key: {e}", "key_spec") from e

    # Validate output digest type and length
    if not isinstance(digest, bytes) or len(digest) != CONSTANTS._PBKDF2_KEY_LENGTH_BYTES:
        raise InvalidKeySpec(f"{CONSTANTS._PBKDF2_ALGORITHM} returned a digest of unexpected length", "key_spec")

    return digest




"""
    Derive a key from a password and salt using PBKDF2-HMAC-SHA-256.

    @param password (bytearray | list[str]): Password buffer owned by the caller.
    @param salt (bytes): Salt the key is bound to.

    @require password is a non-empty mutable buffer
    @require salt is non-empty bytes

    @return bytes: 32-byte derived key; identical for identical (password, salt).

    @ensures password is zeroed before return on success and on failure.
"""
def derive_key(password: typing.Any, salt: bytes) -> bytes:

    with wiped(password):
        # Validate inputs
        holds_chars = validate_secret_buffer(password, "password")
        _validate_bytes(salt, "salt", ApplicationCodes.INVALID_SALT)

        # Byte buffers feed PBKDF2 directly
        if not holds_chars:
            return _run_pbkdf2(password, salt)

        # Character buffers go through a private UTF-8 working copy
        with wiped(password_to_bytes(password)) as key_material:
            return _run_pbkdf2(key_material, salt)




"""
    Compare two byte sequences without an early exit on the first differing byte.

    Absent inputs and length mismatches return False immediately; the length of
    the inputs is therefore not hidden. Equal-length inputs are compared by
    hmac.compare_digest, which XOR-accumulates every byte pair.

    @param a (bytes | None): First digest.
    @param b (bytes | None): Second digest.
    @return bool: True iff both are present and byte-for-byte equal. Never raises.
"""
def constant_time_equals(a: typing.Optional[bytes], b: typing.Optional[bytes]) -> bool:

    if a is None or b is None:
        return False

    try:
        if len(a) != len(b):
            return False

        return hmac.compare_digest(a, b)

    except TypeError:
        # Unsized values or mixed str / bytes inputs
        return False




"""
    Verify a candidate password against a stored PBKDF2 hash.

    @param candidate (bytearray | list[str]): Password supplied by the user.
    @param stored_hash (bytes): Previously derived key.
    @param salt (bytes): Salt used when stored_hash was derived.

    @require all three arguments are present and non-empty

    @return bool: True if the recomputed key matches stored_hash; False otherwise.

    @ensures candidate is zeroed before return on every exit path; the derivation
             works on (and wipes) its own copy.
"""
def verify_password(candidate: typing.Any, stored_hash: bytes, salt: bytes) -> bool:

    with wiped(candidate):
        # Validate all parameters
        validate_secret_buffer(candidate, "candidate")
        _validate_bytes(stored_hash, "stored_hash", ApplicationCodes.INVALID_HASH)
        _validate_bytes(salt, "salt", ApplicationCodes.INVALID_SALT)

        # Derive from a copy so the derivation's own wiping is independent of ours
        working_copy = list(candidate) if isinstance(candidate, list) else bytearray(candidate)
        recomputed = derive_key(working_copy, salt)

        return constant_time_equals(recomputed, bytes(stored_hash))
