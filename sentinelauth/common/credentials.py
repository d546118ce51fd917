#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: credentials.py

    Description:
        Credentials of a user going through authentication: an identifier
        and the password bytes. A plain carrier; the password-security
        engine never calls into it, callers hand the password buffer over
        themselves.
"""


import typing
from dataclasses import dataclass, field
from sentinelauth.encryption.secure_memory import wipe as wipe_buffer


@dataclass
class Credentials:

    user_identifier: str
    password: typing.Optional[bytearray] = field(default=None)

    """
        Zero the held password buffer in place.
    """
    def wipe(self) -> None:
        wipe_buffer(self.password)

    def __repr__(self) -> str:
        masked = "None" if self.password is None else "*****"
        return f"Credentials(user_identifier={self.user_identifier!r}, password={masked})"

    __str__ = __repr__

    # Mutable password buffer; not hashable
    __hash__ = None  # type: ignore[assignment]
