"""
Initialize the SQLite database for the shop bootstrap flow.

Usage:
    python flow_tests/sqlite_bootstrap/init_db.py [--fresh]

This script:
1. Optionally removes the existing database file (shop.db)
2. Creates the tables from models.py if any required table is missing
3. Applies App_Data/Install/SQLite.Indexes.sql
"""

import sys
from pathlib import Path

base_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(base_dir.parent.parent))

import main


def init_database(fresh=False):
    """Run the bootstrap CLI against a database next to this script."""
    db_path = base_dir / "shop.db"

    if fresh and db_path.exists():
        db_path.unlink()
        print(f"Removed existing database: {db_path}")

    main.main([
        str(base_dir / "bootstrap.yaml"),
        "--db-url", f"sqlite:///{db_path.as_posix()}",
    ])


if __name__ == "__main__":
    init_database(fresh="--fresh" in sys.argv[1:])
