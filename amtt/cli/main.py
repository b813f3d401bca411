"""Command line entry point for issuing and checking developer tokens.

Usage:
    amtt gen-token --tid TEAMID1234 --kid KEYID12345 --path AuthKey.p8
    amtt gen-token --tid TEAMID1234 --kid KEYID12345 --path - < AuthKey.p8
    amtt verify-token --tid TEAMID1234 --kid KEYID12345 --path public.pem TOKEN
"""

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO, TypeVar

from pydantic import ValidationError

from amtt.cli.validators import (
    STDIN_PATH,
    expiration_validator,
    id_validator,
    verify_key_file,
    verify_tolerance,
)
from amtt.core.settings import TokenSettings
from amtt.crypto.errors import KeyParseError, TokenError
from amtt.crypto.jwt_manager import sign_token, verify_token
from amtt.crypto.keys import load_signing_key, load_verifying_key

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_ERROR = 2

K = TypeVar("K")


def build_parser(settings: TokenSettings) -> argparse.ArgumentParser:
    """Build the argument parser using limits from ``settings``."""
    verify_id = id_validator(settings.id_length)

    parser = argparse.ArgumentParser(
        prog="amtt", description="Generate and verify ES256 developer tokens"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    gen = commands.add_parser("gen-token", help="Generate a developer token")
    gen.add_argument(
        "-t", "--tid", dest="team_id", type=verify_id, required=True, help="Team ID"
    )
    gen.add_argument(
        "-k", "--kid", dest="key_id", type=verify_id, required=True, help="Key ID"
    )
    gen.add_argument(
        "-p",
        "--path",
        dest="file_path",
        type=verify_key_file,
        required=True,
        help="Path to the PEM private key, or - for stdin",
    )
    gen.add_argument(
        "-e",
        "--exp",
        dest="expiration",
        type=expiration_validator(settings.max_expiration),
        default=settings.default_expiration,
        help="Number of seconds until the token expires",
    )

    check = commands.add_parser("verify-token", help="Verify a developer token")
    check.add_argument(
        "-t", "--tid", dest="team_id", type=verify_id, default="", help="Team ID"
    )
    check.add_argument(
        "-k", "--kid", dest="key_id", type=verify_id, default=None, help="Key ID"
    )
    check.add_argument(
        "-p",
        "--path",
        dest="file_path",
        type=verify_key_file,
        required=True,
        help="Path to the PEM public key, or - for stdin",
    )
    check.add_argument(
        "--tolerance",
        type=verify_tolerance,
        default=settings.time_tolerance,
        help="Allowed clock skew in seconds",
    )
    check.add_argument("token", help="Token to verify")
    return parser


def _read_key(
    path: str, loader: Callable[[TextIO, str | None], K], key_id: str | None
) -> K:
    try:
        if path == STDIN_PATH:
            return loader(sys.stdin, key_id)
        with open(path, encoding="ascii") as reader:
            return loader(reader, key_id)
    except UnicodeDecodeError as exc:
        raise KeyParseError(f"key is not ASCII PEM text: {exc}") from exc


def _gen_token(args: argparse.Namespace) -> int:
    signing_key = _read_key(args.file_path, load_signing_key, args.key_id)
    print(sign_token(signing_key, args.team_id, args.expiration))
    return 0


def _verify_token(args: argparse.Namespace) -> int:
    verifying_key = _read_key(args.file_path, load_verifying_key, args.key_id)
    if verify_token(verifying_key, args.token.strip(), args.team_id, args.tolerance):
        print("valid")
        return 0
    print("invalid")
    return EXIT_INVALID


def main(argv: list[str] | None = None) -> int:
    try:
        settings = TokenSettings()
    except ValidationError as exc:
        print(f"error: invalid settings: {exc}", file=sys.stderr)
        return EXIT_ERROR
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=settings.log_level,
    )
    args = build_parser(settings).parse_args(argv)

    handlers = {"gen-token": _gen_token, "verify-token": _verify_token}
    try:
        return handlers[args.command](args)
    except TokenError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
