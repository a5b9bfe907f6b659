"""Tests for secret generation."""

import pytest

from totp_core import BASE32_ALPHABET, compute_otp, generate_secret
from totp_core.results import ErrorKind


def test_generate_secret_default_length():
    result = generate_secret()
    assert result.ok
    assert len(result.value) == 24
    assert set(result.value) <= set(BASE32_ALPHABET)


@pytest.mark.parametrize("length", [16, 32, 64])
def test_generate_secret_lengths(length):
    secret = generate_secret(length).value
    assert len(secret) == length
    assert all(c in BASE32_ALPHABET for c in secret)


@pytest.mark.parametrize("length", [15, 8, 0, -16, 17, 25, "24", 24.0, True, None])
def test_generate_secret_invalid_length(length):
    result = generate_secret(length)
    assert result.error is ErrorKind.INVALID_LENGTH
    assert result.value is None


def test_generate_secret_maps_draws_to_alphabet():
    draws = iter(range(32))
    calls = []

    def randbelow(n):
        calls.append(n)
        return next(draws)

    assert generate_secret(32, randbelow=randbelow).value == BASE32_ALPHABET
    assert calls == [32] * 32


@pytest.mark.parametrize("exc", [OSError("no entropy"), NotImplementedError()])
def test_generate_secret_randomness_unavailable(exc):
    def randbelow(n):
        raise exc

    result = generate_secret(24, randbelow=randbelow)
    assert not result.ok
    assert result.error is ErrorKind.RANDOMNESS_UNAVAILABLE
    assert result.value is None


def test_generated_secrets_differ():
    assert generate_secret(32).value != generate_secret(32).value


def test_generated_secret_is_usable():
    secret = generate_secret().value
    assert compute_otp(secret, now=59).ok


@pytest.mark.parametrize("bad", [32, -1, 100])
def test_generate_secret_out_of_range_draw(bad):
    result = generate_secret(16, randbelow=lambda n: bad)
    assert result.error is ErrorKind.RANDOMNESS_UNAVAILABLE
    assert result.value is None
