#!/usr/bin/env python3
"""
SalesDesk Server - Setup Script

Initializes the SalesDesk server database:
1. Creates the SQLite database with schema
2. Creates the default roles
3. Creates the default admin user

Usage:
    python setup_server.py [database_path]
"""

import sys
from pathlib import Path

# Ensure we can import from the same directory
sys.path.insert(0, str(Path(__file__).parent))

from managers.database_manager import DatabaseManager, DEFAULT_ADMIN_EMAIL


def print_section(title):
    """Print section header"""
    print()
    print("-" * 70)
    print(f"  {title}")
    print("-" * 70)


def initialize_database(db_path: str):
    """
    Initialize the SQLite database with schema and default data

    Returns:
        str or None: Admin password if created, None otherwise
    """
    print_section("Database Initialization")

    if Path(db_path).exists():
        print(f"[OK] Database file found at: {Path(db_path).absolute()}")
        print("  Existing database will be updated with any missing tables/roles.")
    else:
        print(f"Creating new database at: {Path(db_path).absolute()}")

    return DatabaseManager(db_path).InitializeDatabase()


def main():
    db_path = sys.argv[1] if len(sys.argv) > 1 else "database/salesdesk.db"

    print("=" * 70)
    print("SalesDesk Server - Setup Script")
    print("=" * 70)

    admin_password = initialize_database(db_path)

    print_section("Admin Account")
    if admin_password:
        print(f"Email:    {DEFAULT_ADMIN_EMAIL}")
        print(f"Password: {admin_password}")
        print("IMPORTANT: Save this password, it will not be shown again!")
    else:
        print("Admin account already exists, nothing to do.")


if __name__ == "__main__":
    main()
