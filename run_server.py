#!/usr/bin/env python3
"""
Startup script for the JWT Pizza Service.

Usage:
    # Run with the DATABASE_URL from the environment / .env
    python run_server.py

    # Run on a custom port with reload for development
    python run_server.py --port 3000 --reload

    # Point at a specific database
    python run_server.py --database-url sqlite:///./data/pizza.db

    # Create tables and seed the default admin and menu, then exit
    python run_server.py --seed-only
"""

import argparse
import os
import sys


def ensure_sqlite_dir(database_url: str) -> None:
    """Create the directory for a relative SQLite database file."""
    if database_url.startswith("sqlite:///./"):
        db_path = database_url.replace("sqlite:///./", "")
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)


def seed_only() -> None:
    from pizza_service import db
    from pizza_service.logging_config import setup_logging
    from pizza_service.seed import seed_all

    setup_logging()
    db.init_db()
    session = db.SessionLocal()
    try:
        seed_all(session)
    finally:
        session.close()
    print("Database initialized successfully!")


def main():
    parser = argparse.ArgumentParser(description="Run the JWT Pizza Service")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.getenv("PORT", "3000")),
        help="Port to run on (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (overrides DATABASE_URL)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Create tables and seed data, then exit",
    )

    args = parser.parse_args()

    from dotenv import load_dotenv
    load_dotenv()

    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url

    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        print("Error: DATABASE_URL is not set (use --database-url or .env)")
        sys.exit(1)
    ensure_sqlite_dir(database_url)

    if args.seed_only:
        seed_only()
        return

    print(f"\n{'=' * 50}")
    print("Starting: JWT Pizza Service")
    print(f"Port:     {args.port}")
    print(f"Database: {database_url}")
    print(f"{'=' * 50}\n")

    import uvicorn

    uvicorn.run(
        "pizza_service.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
