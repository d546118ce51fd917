#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: authentication_handler.py

    Description:
        Caller-side coordination of the password-security engine for a
        Credentials object: enrolling a new password (strength check, fresh
        salt, key derivation) and authenticating a login attempt against a
        stored PasswordRecord. Nothing is persisted here. Key derivation is
        CPU-bound, so authentications can be submitted to a bounded worker
        pool instead of running on the caller's thread. Outcomes (never
        secrets) are written to the audit log.
"""


import threading
import typing
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from sentinelauth.common.credentials import Credentials
from sentinelauth.encryption.secure_memory import wiped, validate_secret_buffer
from sentinelauth.encryption.secure_random import generate_salt
from sentinelauth.encryption.pbkdf2_manager import derive_key, verify_password
from sentinelauth.encryption.password_policy import is_password_strong
from sentinelauth.handlers.error_handler import InvalidArgument, ApplicationCodes
from sentinelauth.utilities.audit_log import AuditLog
import sentinelauth.constants as CONSTANTS


"""
    Stored form of a password: the derived key and the salt it was derived with.
"""
@dataclass(frozen=True)
class PasswordRecord:
    password_hash: bytes
    salt: bytes

    def __repr__(self) -> str:
        return f"PasswordRecord(password_hash=<{len(self.password_hash)} bytes>, salt=<{len(self.salt)} bytes>)"



####################################################################################################
#                                   Authentication Handler
####################################################################################################

"""
    AuthenticationHandler

    Coordinates enrollment and login checks for Credentials objects:

        - Rejecting weak passwords at enrollment (checked on a copy)
        - Generating a fresh salt per enrolled password
        - Deriving and verifying PBKDF2 keys
        - Running verifications on a bounded ThreadPoolExecutor on request

    The credential's password buffer is wiped by every call that consumes it.
"""
class AuthenticationHandler:

    """
        Initialize the AuthenticationHandler.

        @param audit_log (AuditLog): Audit log for outcomes; a default AuditLog is created when omitted.
        @param max_workers (int): Worker pool size; defaults to SENTINELAUTH_KDF_WORKERS or 2.
        @ensures The worker pool is created lazily on first submission.
    """
    def __init__(self, audit_log: typing.Optional[AuditLog] = None, max_workers: typing.Optional[int] = None) -> None:

        if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
            raise InvalidArgument("max_workers must be a positive integer", "max_workers", ApplicationCodes.INVALID_ARGUMENT)

        self._audit_log: AuditLog = audit_log if audit_log is not None else AuditLog()
        self._max_workers: int = max_workers if max_workers is not None else CONSTANTS.kdf_worker_count()
        self._executor: typing.Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()


    @property
    def max_workers(self) -> int:
        return self._max_workers


    """
        Validate a Credentials object before its password is consumed.

        @ensures A rejected Credentials object has its password wiped.
    """
    def _validate_credentials(self, credentials: typing.Any) -> None:

        if not isinstance(credentials, Credentials):
            raise InvalidArgument("credentials must be a Credentials instance", "credentials", ApplicationCodes.INVALID_TYPE)

        if not isinstance(credentials.user_identifier, str) or not credentials.user_identifier.strip():
            credentials.wipe()
            raise InvalidArgument("user_identifier cannot be empty", "user_identifier", ApplicationCodes.INVALID_ARGUMENT)



    ################################################################################################
    #                                   ENROLLMENT
    ################################################################################################

    """
        Derive a storable PasswordRecord for a new password.

        @param credentials (Credentials): Identifier plus password buffer.
        @param require_strong (bool): Reject passwords failing the strength policy.
        @return PasswordRecord: Derived key and its fresh salt.
        @ensures credentials.password is zeroed on every exit path.
    """
    def enroll(self, credentials: Credentials, require_strong: bool = True) -> PasswordRecord:

        self._validate_credentials(credentials)

        with wiped(credentials.password) as password:
            holds_chars = validate_secret_buffer(password, "password")

            # Strength check consumes (and wipes) its own copy
            if require_strong and not is_password_strong(list(password) if holds_chars else bytearray(password)):
                self._audit_log.event(event="enroll", user_identifier=credentials.user_identifier, outcome="weak_password")
                raise InvalidArgument("Password does not satisfy the strength policy", "password", ApplicationCodes.WEAK_PASSWORD)

            salt = generate_salt()
            password_hash = derive_key(password, salt)

        self._audit_log.event(event="enroll", user_identifier=credentials.user_identifier, outcome="success")
        return PasswordRecord(password_hash=password_hash, salt=salt)



    ################################################################################################
    #                                   AUTHENTICATION
    ################################################################################################

    """
        Check a login attempt against a stored PasswordRecord.

        @param credentials (Credentials): Identifier plus candidate password buffer.
        @param record (PasswordRecord): Stored hash and salt for this user.
        @return bool: True if the password matches.
        @ensures credentials.password is zeroed on every exit path.
    """
    def authenticate(self, credentials: Credentials, record: PasswordRecord) -> bool:

        self._validate_credentials(credentials)

        if not isinstance(record, PasswordRecord):
            credentials.wipe()
            raise InvalidArgument("record must be a PasswordRecord", "record", ApplicationCodes.INVALID_TYPE)

        matched = verify_password(credentials.password, record.password_hash, record.salt)

        self._audit_log.event(event="authenticate", user_identifier=credentials.user_identifier, outcome="success" if matched else "mismatch")
        return matched


    """
        Schedule authenticate() on the bounded worker pool.

        A running derivation cannot be cancelled; callers that no longer need
        the result simply ignore the returned future.

        @return Future[bool]: Resolves to the authenticate() result or its exception.
    """
    def submit_authentication(self, credentials: Credentials, record: PasswordRecord) -> "Future[bool]":

        # Concurrent first submissions share one pool
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="sentinelauth-kdf")

            return self._executor.submit(self.authenticate, credentials, record)


    """
        Release the worker pool, waiting for queued derivations when wait is True.
    """
    def shutdown(self, wait: bool = True) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None

        if executor is not None:
            executor.shutdown(wait=wait)


    def __enter__(self) -> "AuthenticationHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
