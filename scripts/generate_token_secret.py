#!/usr/bin/env python3
"""
Print a fresh secret for signing image transfer tokens.

Run:
    poetry run python scripts/generate_token_secret.py
    poetry run python scripts/generate_token_secret.py --env

Store the value as IMAGE_TOKEN_SECRET for every function that issues or
redeems tokens. Rotating it invalidates all outstanding URLs.
"""

import argparse

from core.utils.constants import ENV_IMAGE_TOKEN_SECRET
from core.utils.signed_token import generate_token_secret


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate an image token signing secret")

    parser.add_argument(
        "--env",
        action="store_true",
        help=f"Print as a {ENV_IMAGE_TOKEN_SECRET}=... line for a .env file",
    )

    return parser.parse_args()


def main() -> None:
    args = parse_args()
    secret = generate_token_secret()

    if args.env:
        print(f"{ENV_IMAGE_TOKEN_SECRET}={secret}")
    else:
        print(secret)


if __name__ == "__main__":
    main()
