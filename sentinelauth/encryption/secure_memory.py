#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: secure_memory.py

    Description:
        Wipe primitives for SentinelAuth secret buffers. A secret buffer is a
        mutable bytearray (or writable memoryview) or a list of one-character
        strings; wiping overwrites every element in place with its zero value.
        Also provides the wiped() guard used by every engine operation so the
        buffer it borrows is zeroed on normal return and on error alike, and
        the char-to-byte and byte-to-char conversions used before key
        derivation and strength classification.
"""


import codecs
import contextlib
import typing
from sentinelauth.handlers.error_handler import InvalidArgument, ApplicationCodes
import sentinelauth.constants as CONSTANTS


# Accepted secret buffer shapes
SecretBuffer = typing.Union[bytearray, memoryview, typing.List[str]]


####################################################################################################
#                                   Wipe Primitives
####################################################################################################

"""
    Overwrite every byte of a byte buffer with zero.

    @param buffer (bytearray | memoryview | None): Byte buffer to clear; None is ignored.
    @ensures Every element equals 0 afterwards. Never raises.
"""
def wipe_bytes(buffer: typing.Optional[typing.Union[bytearray, memoryview]]) -> None:
    if buffer is None:
        return

    for i in range(len(buffer)):
        buffer[i] = CONSTANTS._ZERO_BYTE


"""
    Overwrite every element of a character buffer with NUL.

    @param buffer (list[str] | None): Character buffer to clear; None is ignored.
    @ensures Every element equals "\\x00" afterwards. Never raises.
"""
def wipe_chars(buffer: typing.Optional[typing.List[str]]) -> None:
    if buffer is None:
        return

    for i in range(len(buffer)):
        buffer[i] = CONSTANTS._ZERO_CHAR


"""
    Overwrite a secret buffer of any supported shape with its zero value.

    Idempotent and safe on empty or already-wiped buffers. Immutable values
    (bytes, str), unsupported types, released memoryviews and non-contiguous
    memoryviews cannot be cleared in place and are left untouched;
    validate_secret_buffer() rejects the latter two up front.

    @param buffer (SecretBuffer | None): Buffer to clear.
    @ensures Never raises.
"""
def wipe(buffer: typing.Any) -> None:
    if isinstance(buffer, bytearray):
        wipe_bytes(buffer)
    elif isinstance(buffer, memoryview):
        try:
            # Read-only views (over bytes) cannot be written
            if not buffer.readonly and buffer.c_contiguous:
                wipe_bytes(buffer.cast("B"))
        except ValueError:
            # Released view
            return
    elif isinstance(buffer, list):
        wipe_chars(buffer)


"""
    Scope guard that wipes a borrowed secret buffer when the block exits.

    Usage:
        with wiped(password):
            ...

    @param buffer (SecretBuffer | None): Buffer owned by the caller.
    @ensures wipe(buffer) runs on normal exit and when an exception propagates.
"""
@contextlib.contextmanager
def wiped(buffer: typing.Any) -> typing.Iterator[typing.Any]:
    try:
        yield buffer
    finally:
        wipe(buffer)



####################################################################################################
#                                   Buffer Validation / Conversion
####################################################################################################

"""
    Check that a value is a usable, non-empty secret buffer.

    @param buffer (Any): Candidate buffer.
    @param field_name (str): Argument name used in error messages.
    @require buffer is a bytearray, writable memoryview, or list of one-character strings
    @return bool: True when the buffer holds characters, False when it holds bytes.
    @ensures Raises InvalidArgument for absent, empty, immutable or malformed buffers.
"""
def validate_secret_buffer(buffer: typing.Any, field_name: str) -> bool:

    if buffer is None:
        raise InvalidArgument(f"{field_name} cannot be None", field_name)

    if isinstance(buffer, (bytes, str)):
        raise InvalidArgument(f"{field_name} must be a mutable buffer (bytearray or list of characters)", field_name, ApplicationCodes.INVALID_TYPE)

    if isinstance(buffer, memoryview):
        try:
            usable = not buffer.readonly and buffer.c_contiguous
        except ValueError:
            usable = False

        if not usable:
            raise InvalidArgument(f"{field_name} must be a writable, contiguous buffer", field_name, ApplicationCodes.INVALID_TYPE)

    if not isinstance(buffer, (bytearray, memoryview, list)):
        raise InvalidArgument(f"{field_name} must be a bytearray or list of characters", field_name, ApplicationCodes.INVALID_TYPE)

    if len(buffer) == 0:
        raise InvalidArgument(f"{field_name} cannot be empty", field_name, ApplicationCodes.EMPTY_PASSWORD)

    if isinstance(buffer, list):
        for ch in buffer:
            if not isinstance(ch, str) or len(ch) != 1:
                raise InvalidArgument(f"{field_name} must contain single characters", field_name, ApplicationCodes.INVALID_TYPE)
        return True

    return False


"""
    Decode a UTF-8 byte buffer into a fresh character buffer.

    Bytes are fed to an incremental decoder one at a time so no intermediate
    str holding the whole secret is created. Invalid sequences decode to
    U+FFFD. The input buffer is left as is; the caller owns both buffers.

    @param buffer (bytearray | memoryview): Contiguous byte buffer.
    @return list[str]: Decoded characters.
    @ensures Raises ValueError for released or non-contiguous views; the partial
             character buffer is wiped when decoding fails.
"""
def bytes_to_chars(buffer: typing.Union[bytearray, memoryview]) -> typing.List[str]:
    view = memoryview(buffer)

    if not view.c_contiguous:
        raise InvalidArgument("Byte buffer must be contiguous", "password", ApplicationCodes.INVALID_TYPE)

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    chars: typing.List[str] = []

    try:
        for byte in view.cast("B"):
            chars.extend(decoder.decode(bytes((byte,))))
        chars.extend(decoder.decode(b"", final=True))

    except Exception:
        wipe_chars(chars)
        raise

    return chars


"""
    Encode a character buffer into a fresh UTF-8 byte buffer.

    The character buffer is wiped before returning, including when encoding fails.
    The caller owns the returned bytearray and must wipe it after use.

    @param password (list[str]): Non-empty character buffer.
    @return bytearray: UTF-8 encoded password bytes.
    @ensures password is zeroed on every exit path.
"""
def password_to_bytes(password: typing.List[str]) -> bytearray:
    with wiped(password):
        if password is None or len(password) == 0:
            raise InvalidArgument("Password cannot be None or empty", "password", ApplicationCodes.EMPTY_PASSWORD)

        if not isinstance(password, list):
            raise InvalidArgument("Password must be a list of characters", "password", ApplicationCodes.INVALID_TYPE)

        encoded = bytearray()

        try:
            for ch in password:
                encoded.extend(ch.encode("utf-8"))

        except (AttributeError, UnicodeEncodeError):
            wipe_bytes(encoded)
            raise InvalidArgument("Password must contain encodable characters", "password", ApplicationCodes.INVALID_TYPE)

        return encoded
