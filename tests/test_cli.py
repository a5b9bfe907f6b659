"""Tests for the totp-kit command line."""

import pytest

from totp_core import BASE32_ALPHABET
from totp_core import otp_cli

SECRET = "JBSWY3DPEHPK3PXP"


def test_secret_command(capsys):
    assert otp_cli.main(["secret"]) == 0
    secret = capsys.readouterr().out.strip()
    assert len(secret) == 24
    assert set(secret) <= set(BASE32_ALPHABET)


def test_secret_command_custom_length(capsys):
    assert otp_cli.main(["secret", "--length", "32"]) == 0
    assert len(capsys.readouterr().out.strip()) == 32


def test_secret_command_invalid_length(capsys):
    assert otp_cli.main(["secret", "--length", "15"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("[!] length must be a multiple of 8")


def test_code_command_at_fixed_time(capsys):
    assert otp_cli.main(["code", "--secret", SECRET, "--time", "59"]) == 0
    assert capsys.readouterr().out == "996554\n"


def test_code_command_eight_digits(capsys):
    assert otp_cli.main([
        "code", "--secret", "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "--digits", "8", "--time", "1111111109",
    ]) == 0
    assert capsys.readouterr().out == "07081804\n"


def test_code_command_uses_clock(capsys, monkeypatch):
    monkeypatch.setattr(otp_cli.time, "time", lambda: 60.0)
    assert otp_cli.main(["code", "--secret", SECRET]) == 0
    assert capsys.readouterr().out == "602287\n"


def test_code_command_rejects_bad_secret(capsys):
    assert otp_cli.main(["code", "--secret", "not-base32!!!!!!", "--time", "59"]) == 1
    assert "non-base32" in capsys.readouterr().err


def test_uri_command(capsys):
    assert otp_cli.main(["uri", "--account", "alice", "--secret", SECRET, "--issuer", "ACME", "--digits", "6"]) == 0
    assert capsys.readouterr().out.strip() == f"otpauth://totp/ACME:alice?secret={SECRET}&digits=6&issuer=ACME"


def test_uri_command_rejects_colon(capsys):
    assert otp_cli.main(["uri", "--account", "alice", "--secret", SECRET, "--issuer", "my:app"]) == 1
    assert "colon" in capsys.readouterr().err


def test_no_subcommand_prints_hint(capsys):
    assert otp_cli.main([]) == 0
    assert "-h" in capsys.readouterr().out


def test_missing_required_option_exits():
    with pytest.raises(SystemExit):
        otp_cli.main(["code"])


def test_code_command_rejects_zero_period(capsys):
    assert otp_cli.main(["code", "--secret", SECRET, "--period", "0", "--time", "59"]) == 1
    assert capsys.readouterr().err.startswith("[!] period must be a positive integer")
