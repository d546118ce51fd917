#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: secure_random.py

    Description:
        The single process-wide cryptographically secure random source shared
        by salt generation and password generation. SystemRandom draws from
        os.urandom on every call, holds no userspace state, and is therefore
        safe to use from many threads without locking.
"""


import secrets
import typing
from sentinelauth.handlers.error_handler import CryptoEngineUnavailable, ApplicationCodes
import sentinelauth.constants as CONSTANTS


# Created once at import; never re-seeded or replaced
SECURE_RANDOM = secrets.SystemRandom()


"""
    Generate a new random salt using the shared CSPRNG.

    @return bytes: A newly generated salt of exactly 16 bytes.
    @ensures Raises CryptoEngineUnavailable if the OS random source fails.
"""
def generate_salt() -> bytes:

    try:
        # Generate 16 random bytes for the salt
        salt = SECURE_RANDOM.randbytes(CONSTANTS._SALT_LENGTH_BYTES)

    except OSError as e:
        raise CryptoEngineUnavailable("Operating system random source is unavailable", "salt", ApplicationCodes.RANDOM_SOURCE_FAILURE) from e

    # Validate salt properties
    if not isinstance(salt, bytes) or len(salt) != CONSTANTS._SALT_LENGTH_BYTES:
        raise CryptoEngineUnavailable("Random source returned a short salt", "salt", ApplicationCodes.RANDOM_SOURCE_FAILURE)

    return salt


"""
    Pick one element uniformly at random from a non-empty sequence.

    @param population (Sequence): Characters or items to choose from.
    @return Any: The chosen element.
"""
def random_choice(population: typing.Sequence[typing.Any]) -> typing.Any:

    try:
        return SECURE_RANDOM.choice(population)
    except OSError as e:
        raise CryptoEngineUnavailable("Operating system random source is unavailable", "random_choice", ApplicationCodes.RANDOM_SOURCE_FAILURE) from e


"""
    Shuffle a mutable sequence in place with a uniform (Fisher-Yates) permutation.

    @param items (MutableSequence): Sequence to permute.
    @ensures Every permutation is equally likely.
"""
def random_shuffle(items: typing.MutableSequence[typing.Any]) -> None:

    try:
        SECURE_RANDOM.shuffle(items)
    except OSError as e:
        raise CryptoEngineUnavailable("Operating system random source is unavailable", "random_shuffle", ApplicationCodes.RANDOM_SOURCE_FAILURE) from e
