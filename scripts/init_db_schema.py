"""
Database schema initialization
------------------------------
Creates any missing tables and lists what the database now holds.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# make the nongkrongr package importable when run from a checkout
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import inspect

from nongkrongr.db.init_db import init_db
from nongkrongr.db.session import engine


def init_db_schema() -> None:
    print("Initializing database schema...")
    init_db()
    print("Tables created")

    print("\nTables:")
    for name in sorted(inspect(engine).get_table_names()):
        print(f"  - {name}")


if __name__ == "__main__":
    init_db_schema()
