"""
Delete job search sessions whose expiry has passed.

  python -m app.scripts.purge_search_sessions [--yes]
"""
import argparse
import sys

from app.database import SessionLocal
from app.repos.search_session_repo import count_expired, delete_expired


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Delete expired job search sessions from the database.")
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        expired = count_expired(db)
        if not expired:
            print("No expired search sessions.")
            return 0

        if not args.yes:
            print(f"This will permanently delete {expired} expired search session(s).")
            try:
                reply = input("Type 'yes' to continue: ").strip().lower()
            except EOFError:
                reply = ""
            if reply != "yes":
                print("Aborted.")
                return 1

        deleted = delete_expired(db)
        print(f"Done. Deleted {deleted} expired search session(s).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
