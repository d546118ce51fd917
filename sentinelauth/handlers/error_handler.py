#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    File name: error_handler.py

    Description:
        Error taxonomy for SentinelAuth's password-security engine and a
        caller-side helper for normalizing failures. The engine raises
        InvalidArgument, CryptoEngineUnavailable and InvalidKeySpec
        synchronously and never logs them; ErrorHandler is what a caller
        uses at its own boundary to record the failure in the audit log and
        turn it into a canonical failure report.
"""


from dataclasses import dataclass
from datetime import datetime, timezone
from sentinelauth.utilities.audit_log import AuditLog



"""
    Container Class for engine error code strings.
"""
@dataclass
class ApplicationCodes:

    INVALID_ARGUMENT         = "invalid_argument"
    INVALID_TYPE             = "invalid_type"
    INVALID_LENGTH           = "invalid_length"
    EMPTY_PASSWORD           = "empty_password"
    INVALID_SALT             = "invalid_salt"
    INVALID_HASH             = "invalid_hash"
    WEAK_PASSWORD            = "weak_password"
    CRYPTO_ENGINE_UNAVAILABLE = "crypto_engine_unavailable"
    RANDOM_SOURCE_FAILURE    = "random_source_failure"
    INVALID_KEY_SPEC         = "invalid_key_spec"
    INTERNAL_ERROR           = "internal_error"






class SentinelAuthError(Exception):

    """
        Initialize a SentinelAuthError containing application code, detail message, and field context.

        @param application_code (str): Identifier from ApplicationCodes signaling the failure type.
        @param detail (str): Descriptive message suitable for the caller.
        @param field (str): Logical argument related to the error (optional).
        @ensures Error metadata is accessible to ErrorHandler.
    """
    def __init__(self, application_code: str, detail: str, field: str = "") -> None:
        self.application_code = application_code
        self.detail = detail
        self.field = field
        super().__init__(f"{application_code}: {detail}")

    # Environment defects are fatal; InvalidArgument overrides this
    fatal = True



"""
    Null, empty, too-short or wrongly typed input. A caller bug; never retried.
"""
class InvalidArgument(SentinelAuthError, ValueError):

    fatal = False

    def __init__(self, detail: str, field: str = "", application_code: str = ApplicationCodes.INVALID_ARGUMENT) -> None:
        super().__init__(application_code, detail, field)


"""
    A required primitive (PBKDF2, SHA-256, the OS random source) is missing from the runtime.
"""
class CryptoEngineUnavailable(SentinelAuthError):

    def __init__(self, detail: str, field: str = "", application_code: str = ApplicationCodes.CRYPTO_ENGINE_UNAVAILABLE) -> None:
        super().__init__(application_code, detail, field)


"""
    The underlying primitive rejected the derivation parameters.
"""
class InvalidKeySpec(SentinelAuthError):

    def __init__(self, detail: str, field: str = "", application_code: str = ApplicationCodes.INVALID_KEY_SPEC) -> None:
        super().__init__(application_code, detail, field)






class ErrorHandler:

    """
        Initialize the ErrorHandler and attach an AuditLog for diagnostic event recording.

        @param audit_log (AuditLog): Optional audit log; a default AuditLog is created when omitted.
        @ensures ErrorHandler is ready to normalize and log errors.
    """
    def __init__(self, audit_log: AuditLog = None) -> None:

        self.audit_log = audit_log if audit_log is not None else AuditLog()


    """
        Process an exception and return a standardized failure report.

        @param e (Exception): Exception raised by an engine call.
        @param user_identifier (str): User the failing call was made for, if known.
        @param context (str): Logical context string identifying the failing operation.
        @return dict: Canonical failure report.
        @ensures Exception is logged to audit_log; secret material is never part of the report.
    """
    def handle_error(self, e: Exception, user_identifier: str = "", context: str = "") -> dict:

        # If the exception is already a SentinelAuthError
        if isinstance(e, SentinelAuthError):
            application_code = e.application_code
            message = e.detail
            field = e.field
            fatal = e.fatal
        else:
            # Anything else is normalized to INTERNAL_ERROR
            application_code = ApplicationCodes.INTERNAL_ERROR
            message = "An internal error occurred while processing credentials."
            field = ""
            fatal = True

        # Always log the raw exception type and detail for operators
        self.audit_log.event(event="engine_error", user_identifier=user_identifier, context=context, error_type=type(e).__name__, detail=str(e))

        return self.create_error_report(user_identifier, message, application_code, field, fatal)




    """
        Build a standardized failure report.

        @param user_identifier (str): User associated with the failure, if any.
        @param message (str): Human-readable error message.
        @param error_code (str): One of ApplicationCodes.* defining the error type.
        @param field (str): Logical argument associated with the error (optional).
        @param fatal (bool): Whether the failure stems from the environment rather than caller input.
        @return dict: Report including an ISO8601Z timestamp.
    """
    def create_error_report(self, user_identifier: str, message: str, error_code: str, field: str = "", fatal: bool = True) -> dict:

        # Generate ISO8601Z timestamp
        timestamp_iso = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

        return {
            "status": "failure",
            "user_identifier": user_identifier,
            "timestamp": timestamp_iso,
            "message": message,
            "error_code": error_code,
            "field": field,
            "fatal": fatal,
        }
