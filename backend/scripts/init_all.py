"""Initialize infrastructure for the breakout groups service.

This script:
1. Verifies connectivity to PostgreSQL and Redis
2. Runs all Alembic migrations

Run this after docker-compose up to prepare the development environment.
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Add the backend directory to the path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from app.core.config import settings  # noqa: E402
from app.core.database import async_engine  # noqa: E402
from app.core.redis import async_redis_pool  # noqa: E402


def print_header(title: str) -> None:
    """Print a formatted header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def print_success(message: str) -> None:
    print(f"[ok] {message}")


def print_error(message: str) -> None:
    print(f"[error] {message}")


def print_info(message: str) -> None:
    print(f"[info] {message}")


async def check_postgres() -> None:
    """Check PostgreSQL connectivity and database info."""
    print_header("Checking PostgreSQL Connection")

    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            print_success("PostgreSQL connection successful")

            version = (await conn.execute(text("SELECT version()"))).scalar()
            if version:
                print_info(f"PostgreSQL version: {version.split(',')[0]}")

            db_name = (await conn.execute(text("SELECT current_database()"))).scalar()
            if db_name:
                print_info(f"Database: {db_name}")
    except SQLAlchemyError as e:
        print_error(f"PostgreSQL connection failed: {e}")
        print_info("Ensure PostgreSQL is running: docker-compose up -d postgres")
        raise
    finally:
        await async_engine.dispose()


async def check_redis() -> None:
    """Check Redis connectivity and the lock primitives used by clustering."""
    print_header("Checking Redis Connection")

    try:
        async with aioredis.Redis(connection_pool=async_redis_pool) as client:
            await client.ping()
            print_success("Redis connection successful")

            info = await client.info("server")
            print_info(f"Redis version: {info.get('redis_version', 'unknown')}")

            lock = client.lock("init:lock-test", timeout=10)
            if await lock.acquire(blocking=False):
                await lock.release()
                print_success("Lock acquire/release working")
    except RedisError as e:
        print_error(f"Redis connection failed: {e}")
        print_info("Ensure Redis is running: docker-compose up -d redis")
        raise


def run_migrations() -> None:
    """Run Alembic migrations to upgrade database schema."""
    print_header("Running Database Migrations")

    result = subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=BACKEND_DIR,
        capture_output=True,
        text=True,
    )

    if result.returncode != 0:
        print_error("Database migrations failed")
        if result.stderr:
            print(result.stderr)
        raise RuntimeError("Migration failed")

    print_success("Database migrations completed successfully")
    for line in result.stdout.splitlines():
        if line.strip():
            print(f"   {line}")

    current = subprocess.run(
        ["alembic", "current"],
        cwd=BACKEND_DIR,
        capture_output=True,
        text=True,
    )
    if current.returncode == 0 and current.stdout:
        print_info(f"Current revision: {current.stdout.strip()}")


async def main() -> None:
    """Run all initialization steps."""
    print_header(f"Breakout Groups Infrastructure Initialization ({settings.app_env})")

    try:
        print_info("Phase 1: Validating infrastructure connectivity...")
        await check_postgres()
        await check_redis()

        print_info("Phase 2: Applying database schema...")
        run_migrations()

        print_header("Initialization Complete")
        print("Start the backend server:")
        print("  uvicorn main:app --reload --port 8000")
    except (SQLAlchemyError, RedisError, RuntimeError) as e:
        print(f"\nInitialization failed: {e}")
        print("  - Ensure Docker containers are running: docker-compose up -d")
        print("  - Check .env file has all required variables")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
