"""Command line helpers to provision password hashes and inspect settings."""

from __future__ import annotations

import argparse
import getpass
import logging
from typing import Optional, Sequence

from authgate.config.auth_config import AuthConfiguration
from authgate.services.password_hasher import hash_password


def positiveInt(raw: str) -> int:
    """Argparse type accepting integers greater than zero."""

    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def parseArguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the authgate utilities.

    Returns
    -------
    argparse.Namespace
        Parsed arguments with the selected sub-command configuration.
    """

    parser = argparse.ArgumentParser(
        description="Utilities for the authgate login verifier.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    subParsers = parser.add_subparsers(dest="command", required=True)

    hashParser = subParsers.add_parser(
        "hash-password",
        help="Print the stored form of a password for the users table.",
    )
    hashParser.add_argument(
        "--password",
        default=None,
        help="Password to hash. Prompted without echo when omitted.",
    )
    hashParser.add_argument(
        "--iterations",
        type=positiveInt,
        default=None,
        help="PBKDF2 iterations (defaults to AUTH_PASSWORD_ITERATIONS or 480000).",
    )

    subParsers.add_parser("show-config", help="Print the resolved login settings.")

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, configuration: Optional[AuthConfiguration] = None) -> int:
    """Entry point for the command line interface."""

    arguments = parseArguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if arguments.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    configuration = configuration or AuthConfiguration()

    if arguments.command == "hash-password":
        password = arguments.password
        if password is None:
            password = getpass.getpass("Password: ")
        if not password:
            print("Password cannot be blank.")
            return 1
        iterations = arguments.iterations or configuration.get_password_iterations()
        print(hash_password(password, iterations=iterations))
        return 0

    connection = "set" if configuration.get_connection_string() else "missing"
    print(f"login mode: {configuration.get_login_mode().value}")
    print(f"connection string: {connection}")
    print(f"password iterations: {configuration.get_password_iterations()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
