"""
totp_core package
=================

TOTP (RFC 6238) codes, random base32 secrets and otpauth:// provisioning URIs.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- TOTP:
  counter = floor((offset + now) / period), 8-byte big-endian
  code    = Truncate(HMAC-SHA1(key=base32decode(secret), msg=counter)) mod 10^digits

- Dynamic truncation (RFC 4226 §5.3):
  take 4 bytes at offset (last byte & 0x0F), clear the top bit.

──────────────────────────────────────────────
Results
──────────────────────────────────────────────
Every operation returns a ``Result``: check ``result.ok`` and read
``result.value``, or ``result.error`` / ``result.message`` on failure.
``result.unwrap()`` raises ``OTPError`` instead.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totp_core import generate_secret, compute_otp, build_provisioning_uri
>>> secret = generate_secret().unwrap()
>>> uri = build_provisioning_uri("alice@example.com", secret, issuer="ACME").unwrap()
>>> compute_otp("JBSWY3DPEHPK3PXP", now=59).value
'996554'
"""
from totp_core.base32 import BASE32_ALPHABET, decode_base32
from totp_core.otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_OFFSET,
    DEFAULT_PERIOD,
    DEFAULT_SECRET_LENGTH,
    build_provisioning_uri,
    compute_otp,
    derive_counter,
    dynamic_truncate,
    generate_secret,
    hotp_value,
    seconds_remaining,
)
from totp_core.results import ErrorKind, OTPError, Result

__all__ = [
    "BASE32_ALPHABET",
    "DEFAULT_DIGITS",
    "DEFAULT_OFFSET",
    "DEFAULT_PERIOD",
    "DEFAULT_SECRET_LENGTH",
    "ErrorKind",
    "OTPError",
    "Result",
    "build_provisioning_uri",
    "compute_otp",
    "decode_base32",
    "derive_counter",
    "dynamic_truncate",
    "generate_secret",
    "hotp_value",
    "seconds_remaining",
]
