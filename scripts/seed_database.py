"""
Seed the Command Center database with demo data.

Deletes every row first, so it can be re-run safely in local dev and CI.

Usage:
    python scripts/seed_database.py
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from command_center.database import SessionLocal, init_db
from command_center.seed import seed_database
from shared.logging_config import setup_logging


def main() -> int:
    logger = setup_logging("seed")

    init_db()
    db = SessionLocal()
    try:
        counts = seed_database(db)
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}", exc_info=True)
        return 1
    finally:
        db.close()

    for table, count in counts.items():
        logger.info(f"  {table}: {count}")
    logger.info("Database seeded successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
