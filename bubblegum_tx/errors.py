"""
Error types raised by the builders.

Every failure is local and non-retryable. Core code raises; the entry points
in ``bubblegum_tx.entrypoints`` turn these into a ``BuildResult``.
"""

from typing import Optional


class BuilderError(Exception):
    """Base exception for all builder errors."""

    code = "builder_error"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message


class MalformedKey(BuilderError):
    """Text is not valid base58 or not a usable key."""

    code = "malformed_key"


class InvalidKeyLength(BuilderError):
    code = "invalid_key_length"

    def __init__(self, expected: int, actual: int, what: str = "key"):
        super().__init__(
            f"Invalid {what} length: expected {expected} bytes, got {actual}",
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidAddressString(BuilderError):
    code = "invalid_address"

    def __init__(self, field: str, reason: str = ""):
        message = f"Invalid {field} pubkey string"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"field": field})
        self.field = field


class MissingField(BuilderError):
    code = "missing_field"

    def __init__(self, name: str):
        super().__init__(f"{name} is required", {"field": name})
        self.name = name


class InvalidHashLength(BuilderError):
    code = "invalid_hash_length"

    def __init__(self, field: str, actual: int):
        super().__init__(
            f"Invalid {field} length: expected 32 bytes, got {actual}",
            {"field": field, "actual": actual},
        )
        self.field = field
        self.actual = actual


class InvalidMetadata(BuilderError):
    code = "invalid_metadata"


class UnsupportedProofSource(BuilderError):
    code = "unsupported_proof_source"

    def __init__(self, message: str = "Proof extraction from an indexer response is not supported"):
        super().__init__(message)


class NoValidAddress(BuilderError):
    code = "no_valid_address"


class LedgerUnavailable(BuilderError):
    code = "ledger_unavailable"


class SerializationFailure(BuilderError):
    code = "serialization_failure"
