"""
base32.py — RFC 4648 base32 decoding for TOTP secrets.

Only the decode direction is needed: secrets are generated directly as
base32 symbols (see ``otp_core.generate_secret``), never encoded from bytes.
"""

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


def decode_base32(value: str) -> bytes:
    """
    Decode a base32 string (no '=' padding) into raw bytes.

    - Symbols are looked up case-insensitively.
    - 5 bits are shifted in per symbol; a byte is flushed each time 8 or more
      bits are pending, so the output is exactly len(value) * 5 // 8 bytes.
    - Trailing bits that do not fill a whole byte are dropped.

    Raises:
        ValueError: if a symbol is not in the alphabet. Callers validate
        secrets before decoding, so this signals a programming error.
    """
    out = bytearray()
    buffer = 0
    bits = 0
    for symbol in value:
        index = BASE32_ALPHABET.find(symbol.upper())
        if index < 0:
            raise ValueError(f"invalid base32 symbol: {symbol!r}")
        buffer = (buffer << 5) | index
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
            # keep only the bits not yet emitted
            buffer &= (1 << bits) - 1
    return bytes(out)
