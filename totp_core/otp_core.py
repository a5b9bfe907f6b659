#!/usr/bin/env python3
"""
otp_core.py — Core library for TOTP (RFC 6238) codes, secrets and otpauth URIs.

Goals:
- Pure functions only, usable directly from the CLI (otp_cli.py) or the
  Flask backend. No argparse, no file or network I/O here.
- Bad input is reported as a ``Result`` failure, never raised. ``ValueError``
  is reserved for programming errors (non-positive period, negative counter).

Security notes:
- HMAC-SHA1 per RFC 4226/6238 (what Google Authenticator and friends expect).
- Secrets are drawn from ``secrets.randbelow``; there is no fallback to a
  non-cryptographic source.
- Secrets and codes are never written to the log.
"""

import hashlib
import hmac
import logging
import re
import secrets
import struct
import time
from typing import Callable, Optional, Union
from urllib.parse import quote

from totp_core.base32 import BASE32_ALPHABET, decode_base32
from totp_core.results import ErrorKind, Result

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # RFC 6238 recommends 6 digits
DEFAULT_PERIOD = 30         # TOTP step (seconds)
DEFAULT_OFFSET = 0
DEFAULT_SECRET_LENGTH = 24  # base32 symbols -> 15 bytes of key
MIN_SECRET_LENGTH = 16
VALID_DIGITS = (6, 7, 8)

_SECRET_RE = re.compile(r"[A-Za-z2-7]*")


# --- Time step -------------------------------------------------------------
def derive_counter(offset: int, period: int, now: int) -> bytes:
    """
    Turn (offset, period, now) into the 8-byte big-endian TOTP counter.

    step = floor((offset + now) / period), packed as a 32-bit unsigned value
    in the low half of the field; the high 4 bytes are always zero. Steps past
    2**32 wrap, matching a 32-bit counter field.

    Example: derive_counter(0, 30, 59) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: if period is not positive or the step is negative.
    """
    if period <= 0:
        raise ValueError(f"period must be a positive integer, got {period}")
    step = (offset + now) // period
    if step < 0:
        raise ValueError(f"time step must not be negative, got {step}")
    return struct.pack(">II", 0, step & 0xFFFFFFFF)


def seconds_remaining(period: int = DEFAULT_PERIOD, offset: int = DEFAULT_OFFSET,
                      now: Optional[int] = None) -> int:
    """Seconds left before the current window rolls over (1..period)."""
    if period <= 0:
        raise ValueError(f"period must be a positive integer, got {period}")
    if now is None:
        now = int(time.time())
    return period - ((offset + now) % period)


# --- RFC 4226 helpers -------------------------------------------------------
def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 §5.3 dynamic truncation.

    - offset = low nibble of the last digest byte (0..15 for SHA1)
    - read 4 bytes from offset as a big-endian unsigned int
    - clear the sign bit, giving a 31-bit value
    """
    offset = hmac_digest[-1] & 0x0F
    (value,) = struct.unpack(">I", hmac_digest[offset:offset + 4])
    return value & 0x7FFFFFFF


def hotp_value(key: bytes, counter: bytes, digits: int) -> str:
    """HMAC-SHA1 the counter, truncate, reduce mod 10^digits and zero-pad."""
    digest = hmac.new(key, counter, hashlib.sha1).digest()
    code = dynamic_truncate(digest) % (10 ** digits)
    return str(code).zfill(digits)


def _coerce_digits(digits: Union[int, str]) -> Optional[int]:
    try:
        return int(digits)
    except (TypeError, ValueError, OverflowError):
        return None


# --- Public operations -----------------------------------------------------
def compute_otp(
    secret: str,
    digits: Union[int, str] = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    offset: int = DEFAULT_OFFSET,
    now: Optional[int] = None,
) -> Result:
    """
    Compute the TOTP code for ``secret`` at ``now``.

    Validation (first failure wins):
        1. len(secret) >= 16 and a multiple of 8  -> InvalidSecretLength
        2. only [A-Za-z2-7] symbols               -> InvalidSecretAlphabet
        3. int(digits) in (6, 7, 8)               -> InvalidDigitCount

    Arguments:
        secret: base32 shared secret (case-insensitive)
        digits: code length, coerced to int
        period: step length in seconds
        offset: seconds added to ``now`` before dividing by ``period``
                (a step-based offset must be multiplied by ``period`` first)
        now: Unix time in seconds; ``time.time()`` when None

    Returns:
        Result with the zero-padded code as value.
    """
    if not isinstance(secret, str) or len(secret) < MIN_SECRET_LENGTH or len(secret) % 8 != 0:
        logger.debug("compute_otp rejected: bad secret length")
        return Result.failure(ErrorKind.INVALID_SECRET_LENGTH)
    if not _SECRET_RE.fullmatch(secret):
        logger.debug("compute_otp rejected: non-base32 secret")
        return Result.failure(ErrorKind.INVALID_SECRET_ALPHABET)
    digits = _coerce_digits(digits)
    if digits not in VALID_DIGITS:
        logger.debug("compute_otp rejected: digits=%r", digits)
        return Result.failure(ErrorKind.INVALID_DIGIT_COUNT)

    if now is None:
        now = int(time.time())
    key = decode_base32(secret)
    counter = derive_counter(offset, period, now)
    logger.debug("TOTP: now=%s period=%s offset=%s counter=%s",
                 now, period, offset, counter.hex())
    return Result.success(hotp_value(key, counter, digits))


def generate_secret(length: int = DEFAULT_SECRET_LENGTH,
                    randbelow: Callable[[int], int] = secrets.randbelow) -> Result:
    """
    Generate a random base32 secret of ``length`` symbols.

    Each symbol is an independent uniform draw from ``randbelow(32)``. If the
    random source fails or returns a value outside [0, 32), the result is
    RandomnessUnavailable; nothing falls back to the ``random`` module.
    """
    if (not isinstance(length, int) or isinstance(length, bool)
            or length < MIN_SECRET_LENGTH or length % 8 != 0):
        return Result.failure(ErrorKind.INVALID_LENGTH)

    symbols = []
    try:
        for _ in range(length):
            index = randbelow(32)
            if not 0 <= index < 32:
                logger.error("secure random source returned %r for randbelow(32)", index)
                return Result.failure(ErrorKind.RANDOMNESS_UNAVAILABLE)
            symbols.append(BASE32_ALPHABET[index])
    except (OSError, NotImplementedError) as e:
        logger.error("secure random source unavailable: %s", e)
        return Result.failure(ErrorKind.RANDOMNESS_UNAVAILABLE)
    return Result.success("".join(symbols))


def build_provisioning_uri(
    account: str,
    secret: str,
    digits: Optional[int] = None,
    period: Optional[int] = None,
    issuer: Optional[str] = None,
) -> Result:
    """
    Build an otpauth:// URI for authenticator apps (Key Uri Format).

    - otpauth://totp/{issuer}:{account}?secret=...&digits=...&period=...&issuer=...
    - digits/period appear only when given (None means "not given"); issuer
      only when non-empty. Query order is fixed.
    - account and issuer are percent-encoded (RFC 3986); secret is used as is.
    """
    if not account or not secret:
        return Result.failure(ErrorKind.MISSING_REQUIRED_FIELD)
    if ":" in account + (issuer or ""):
        return Result.failure(ErrorKind.INVALID_LABEL_CHARACTER)

    account = quote(account, safe="")
    issuer = quote(issuer, safe="") if issuer else ""
    label = f"{issuer}:{account}" if issuer else account

    uri = f"otpauth://totp/{label}?secret={secret}"
    if digits is not None:
        uri += f"&digits={digits}"
    if period is not None:
        uri += f"&period={period}"
    if issuer:
        uri += f"&issuer={issuer}"
    return Result.success(uri)
