"""
Remove rows created by POST /api/dev/seed-basic (estates named "Sample Estate ...", their
apartments, payments, tickets, notices and caretakers).
Usage: ALLOW_PURGE=true python scripts/purge_sample.py
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from app.database import SessionLocal
from app.seed import purge_sample


def main():
    if os.getenv("ALLOW_PURGE", "").strip().lower() != "true":
        print("Refusing to purge. Set ALLOW_PURGE=true in .env to enable this action.")
        sys.exit(2)

    db = SessionLocal()
    try:
        counts = purge_sample(db)
        print(f"Purge complete. Removed dev-seeded sample data: {counts}")
    except Exception as e:
        db.rollback()
        print(f"Purge failed: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
