"""
results.py — Result type returned by every totp_core operation.

Operations never raise on bad input. They return a ``Result`` carrying either
a value or an ``ErrorKind``; callers that prefer exceptions can call
``Result.unwrap()`` and catch ``OTPError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_SECRET_LENGTH = "InvalidSecretLength"
    INVALID_SECRET_ALPHABET = "InvalidSecretAlphabet"
    INVALID_DIGIT_COUNT = "InvalidDigitCount"
    INVALID_LENGTH = "InvalidLength"
    RANDOMNESS_UNAVAILABLE = "RandomnessUnavailable"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_LABEL_CHARACTER = "InvalidLabelCharacter"


MESSAGES = {
    ErrorKind.INVALID_SECRET_LENGTH: "length of secret must be a multiple of 8, and at least 16 characters",
    ErrorKind.INVALID_SECRET_ALPHABET: "secret contains non-base32 characters",
    ErrorKind.INVALID_DIGIT_COUNT: "digits must be 6, 7 or 8",
    ErrorKind.INVALID_LENGTH: "length must be a multiple of 8, and at least 16",
    ErrorKind.RANDOMNESS_UNAVAILABLE: "could not draw from the secure random source",
    ErrorKind.MISSING_REQUIRED_FIELD: "you must provide at least an account and a secret",
    ErrorKind.INVALID_LABEL_CHARACTER: "neither account nor issuer can contain a colon (:) character",
}


class OTPError(Exception):
    """Raised by ``Result.unwrap()`` when the result holds an error."""

    def __init__(self, kind: ErrorKind):
        super().__init__(MESSAGES[kind])
        self.kind = kind


@dataclass(frozen=True)
class Result:
    value: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: str) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "Result":
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        if self.error is None:
            return None
        return MESSAGES[self.error]

    def unwrap(self) -> str:
        if self.error is not None:
            raise OTPError(self.error)
        return self.value
