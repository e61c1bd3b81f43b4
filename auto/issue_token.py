#!/usr/bin/env python3
"""
Issue Access Token Script.

Prints a signed access token for local development. The token is signed
with the configured ``SECRET_KEY`` so the API accepts it exactly like one
issued by the auth service.

Usage:
    uv run python auto/issue_token.py --username writer
    uv run python auto/issue_token.py --username writer --user-id <uuid> --minutes 120
"""

from argparse import ArgumentParser, Namespace
from datetime import timedelta
from pathlib import Path
from sys import exit as sys_exit
from sys import path as sys_path
from uuid import UUID, uuid4

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from app.managers.token_manager import create_access_token  # noqa: E402
from app.schemas.auth import Token  # noqa: E402


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = ArgumentParser(description="Print a development access token.")
    parser.add_argument("--username", required=True, help="Username placed in the 'sub' claim")
    parser.add_argument(
        "--user-id",
        type=UUID,
        default=None,
        help="User UUID (random when omitted)",
    )
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args(argv)


def issue_token(args: Namespace) -> Token:
    """Create the token described by `args`."""
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    access_token = create_access_token(
        user_id=args.user_id or uuid4(),
        username=args.username,
        expires_delta=expires,
    )
    return Token(access_token=access_token)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.minutes is not None and args.minutes <= 0:
        print("--minutes must be positive")
        return 1
    print(issue_token(args).model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys_exit(main())
