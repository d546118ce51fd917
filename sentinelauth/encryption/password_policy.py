#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
    File name: password_policy.py

    Description:
        Password strength policy and secure password generation for
        SentinelAuth. A strong password has at least 8 characters including
        an uppercase letter, a lowercase letter, a digit and a special
        character (anything that is neither a letter nor a digit). The
        generator always produces passwords that satisfy this policy, using
        the same random source as salt generation.
"""


import typing
from sentinelauth.handlers.error_handler import InvalidArgument, ApplicationCodes
from sentinelauth.encryption.secure_memory import wiped, wipe_chars, bytes_to_chars
from sentinelauth.encryption.secure_random import random_choice, random_shuffle
import sentinelauth.constants as CONSTANTS



"""
    Map one character-buffer element onto a character for classification.

    Integers outside the ASCII range (including negative ones) map to None,
    which counts as special.
"""
def _as_char(element: typing.Any) -> typing.Optional[str]:
    if isinstance(element, int):
        return chr(element) if 0 <= element < 0x80 else None
    return element


"""
    Apply the length and character-class conditions to a character buffer.
"""
def _meets_policy(chars: typing.Sequence[typing.Any]) -> bool:

    if len(chars) < CONSTANTS._MIN_PASSWORD_LENGTH:
        return False

    has_upper = False
    has_lower = False
    has_digit = False
    has_special = False

    for element in chars:
        ch = _as_char(element)

        if not isinstance(ch, str):
            has_special = True
        elif ch.isupper():
            has_upper = True
        elif ch.islower():
            has_lower = True
        elif ch.isdecimal():
            has_digit = True
        elif not ch.isalpha():
            has_special = True

    return has_upper and has_lower and has_digit and has_special




"""
    Check password strength against the fixed policy.

    Conditions:
        - Length of at least 8 characters
        - At least one uppercase letter
        - At least one lowercase letter
        - At least one digit
        - At least one special character

    Byte buffers are decoded as UTF-8 first, so length counts characters and
    a multi-byte letter is classified as that letter. Invalid sequences
    decode to U+FFFD, which counts as special.

    @param password (bytearray | memoryview | list[str] | None): Password buffer owned by the caller.
    @return bool: True if every condition holds, otherwise False. Never raises.
    @ensures password is zeroed before return regardless of the verdict; copy it
             first if it is still needed.
"""
def is_password_strong(password: typing.Any) -> bool:

    with wiped(password):
        if password is None or isinstance(password, (bytes, str)):
            return False

        if isinstance(password, (bytearray, memoryview)):
            # Released or non-contiguous views cannot be read safely
            try:
                chars = bytes_to_chars(password)
            except ValueError:
                return False

            with wiped(chars):
                return _meets_policy(chars)

        try:
            return _meets_policy(password)
        except TypeError:
            return False




"""
    Generate a random password that always satisfies is_password_strong().

    One character from each required class is placed first, the remaining
    positions are filled from the union of all classes, and the whole buffer
    is then shuffled so no class is tied to a position.

    @param length (int): Password length, at least 8. Defaults to 16.
    @return list[str]: Character buffer; the caller owns it and must wipe it.
    @ensures Raises InvalidArgument if length is below 8.
"""
def generate_password(length: int = CONSTANTS._DEFAULT_PASSWORD_LENGTH) -> typing.List[str]:

    # Validate length
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgument("Password length must be an integer", "length", ApplicationCodes.INVALID_TYPE)

    if length < CONSTANTS._MIN_PASSWORD_LENGTH:
        raise InvalidArgument(f"Password length must be at least {CONSTANTS._MIN_PASSWORD_LENGTH} characters", "length", ApplicationCodes.INVALID_LENGTH)

    password: typing.List[str] = []

    try:
        # Seed one character from every required class
        for character_class in CONSTANTS._REQUIRED_CHARACTER_CLASSES:
            password.append(random_choice(character_class))

        # Fill the rest from the full alphabet
        while len(password) < length:
            password.append(random_choice(CONSTANTS._ALL_PASSWORD_CHARS))

        random_shuffle(password)

    except Exception:
        # Partially built passwords never leak out
        wipe_chars(password)
        raise

    return password
