"""
Print a bcrypt hash for a seed user's password. Run from project root:
  python -m chatgate.scripts.hash_password PASSWORD [--rounds N]
Use the output as password_hash in SEED_USERS, e.g.
  SEED_USERS='[{"id": 1, "username": "admin", "role": "admin", "password_hash": "<hash>"}]'
"""
import argparse
import sys

from chatgate.core.security import hash_password


def main() -> int:
    parser = argparse.ArgumentParser(description="Hash a password for SEED_USERS (no registration UI).")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("--rounds", type=int, default=12, help="Bcrypt cost (4-31)")
    args = parser.parse_args()

    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1
    if args.rounds < 4 or args.rounds > 31:
        print("Rounds must be between 4 and 31.", file=sys.stderr)
        return 1

    print(hash_password(args.password, rounds=args.rounds))
    return 0


if __name__ == "__main__":
    sys.exit(main())
