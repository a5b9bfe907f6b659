#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper around totp_core.

Subcommands:
- secret : generate a random base32 secret
- code   : print the TOTP code for a secret (optionally refreshing live)
- uri    : print the otpauth:// provisioning URI

Nothing is stored: the secret is passed on the command line every time.
"""

import argparse
import logging
import sys
import time

from totp_core import otp_core

logger = logging.getLogger(__name__)


def _emit(result) -> int:
    if not result.ok:
        print(f"[!] {result.message}", file=sys.stderr)
        return 1
    print(result.value)
    return 0


# --- CLI command handlers ---
def cmd_secret(args) -> int:
    return _emit(otp_core.generate_secret(args.length))


def cmd_code(args) -> int:
    now = args.time if args.time is not None else int(time.time())
    try:
        result = otp_core.compute_otp(args.secret, args.digits, args.period, args.offset, now)
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    if result.ok and args.watch:
        return _watch(args)
    if result.ok:
        logger.info("code valid for %ss", otp_core.seconds_remaining(args.period, args.offset, now))
    return _emit(result)


def _watch(args) -> int:
    print(f"Press Ctrl+C to quit. Generating {args.digits}-digit TOTP every {args.period}s...\n")
    last_code = None
    try:
        while True:
            now = int(time.time())
            code = otp_core.compute_otp(args.secret, args.digits, args.period, args.offset, now).value
            remaining = otp_core.seconds_remaining(args.period, args.offset, now)
            if code != last_code:
                print(f"TOTP ({args.digits}d): {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_uri(args) -> int:
    return _emit(otp_core.build_provisioning_uri(
        args.account, args.secret, digits=args.digits, period=args.period, issuer=args.issuer,
    ))


def cmd_help(args) -> int:
    print("'totp-kit -h' for help.")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totp-kit", description="TOTP code, secret and otpauth URI tool")
    p.add_argument("--verbose", action="store_true", help="Verbose output on stderr")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # secret
    ps = sub.add_parser("secret", help="Generate a random base32 secret")
    ps.add_argument("--length", type=int, default=otp_core.DEFAULT_SECRET_LENGTH,
                    help="Number of base32 symbols (multiple of 8, >= 16)")
    ps.set_defaults(func=cmd_secret)

    # code
    pc = sub.add_parser("code", help="Print the TOTP code for a secret")
    pc.add_argument("--secret", required=True, help="Base32 secret")
    pc.add_argument("--digits", type=int, default=otp_core.DEFAULT_DIGITS, help="Number of OTP digits")
    pc.add_argument("--period", type=int, default=otp_core.DEFAULT_PERIOD, help="TOTP time step (seconds)")
    pc.add_argument("--offset", type=int, default=otp_core.DEFAULT_OFFSET, help="Clock offset (seconds)")
    pc.add_argument("--time", type=int, help="Unix time to compute the code for (default: now)")
    pc.add_argument("--watch", action="store_true", help="Refresh the code in real time")
    pc.set_defaults(func=cmd_code)

    # uri
    pu = sub.add_parser("uri", help="Print the otpauth:// provisioning URI")
    pu.add_argument("--account", required=True, help="Account label, e.g. alice@example.com")
    pu.add_argument("--secret", required=True, help="Base32 secret")
    pu.add_argument("--issuer", help="Issuer label")
    pu.add_argument("--digits", type=int, help="Number of OTP digits (omitted from the URI if not given)")
    pu.add_argument("--period", type=int, help="TOTP period (omitted from the URI if not given)")
    pu.set_defaults(func=cmd_uri)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
