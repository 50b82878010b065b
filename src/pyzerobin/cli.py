"""Command-line front end for SJCL-compatible encryption.

Reads a file (or stdin), encrypts it with the given password or a freshly
generated one, and prints the content JSON on stdout. A generated password
is printed on stderr so it can be shared separately from the ciphertext.
"""

import argparse
import logging
import sys
from typing import Optional
from .const import DEFAULT_PASSWORD_ENTROPY
from .entropy import EntropyError
from .sjcl import encrypt
from .utils import make_password

logger = logging.getLogger(__name__)


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyzerobin",
        description="Encrypt data with a password in the SJCL ccm format.",
    )
    parser.add_argument(
        "file", nargs="?", default="-", help="Input file, or - for stdin (default)"
    )
    parser.add_argument(
        "-p", "--password", help="Password to use (generated when omitted)"
    )
    parser.add_argument(
        "-n",
        "--entropy",
        type=_non_negative,
        default=DEFAULT_PASSWORD_ENTROPY,
        help=f"Random bytes for a generated password (default {DEFAULT_PASSWORD_ENTROPY})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv: Optional[list[str]] = None) -> int:
    """Run the command-line interface.

    Args:
        argv (Optional[list[str]]): Arguments without the program name.
            Defaults to sys.argv[1:].

    Returns:
        int: Process exit code, 0 on success and 1 on failure.
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        plaintext = _read_input(args.file)
    except OSError as e:
        logger.error("Failed to read input %s: %s", args.file, e)
        return 1

    try:
        password = args.password
        if password is None:
            password = make_password(args.entropy)
            print(password, file=sys.stderr)
        content = encrypt(password, plaintext)
    except EntropyError as e:
        logger.error("Encryption aborted: %s", e)
        return 1

    print(content.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
