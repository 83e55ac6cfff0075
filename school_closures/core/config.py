"""
Configuration for the closure registry, read from environment variables.
An optional .env file in the working directory is loaded first.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Storage configuration
DB_PATH = os.getenv("CLOSURES_DB_PATH", "./data/closures.db")
STORAGE_BACKEND = os.getenv("CLOSURES_STORAGE_BACKEND", "sqlite")  # sqlite|memory
STORAGE_KEY = os.getenv("CLOSURES_STORAGE_KEY", "schoolClosuresData")

# Export configuration
DATASET_NAME = os.getenv("CLOSURES_DATASET_NAME", "maharashtra-school-closures")
CSV_ESCAPE_QUOTES = os.getenv("CLOSURES_CSV_ESCAPE_QUOTES", "false").lower() == "true"

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Record constraints
YEAR_MIN = 2020
YEAR_MAX = 2025
NOT_PROVIDED = "Not provided"
ALL = "all"

VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def ensure_db_directory():
    """Ensure the database directory exists."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def get_storage():
    """Get configured key-value storage implementation."""
    if STORAGE_BACKEND == "memory":
        from .storage import InMemoryStorage
        return InMemoryStorage()

    from .storage import SQLiteStorage
    ensure_db_directory()
    return SQLiteStorage(DB_PATH)


def validate_config():
    """Validate storage and export configuration and return any issues."""
    issues = []

    if STORAGE_BACKEND not in ["sqlite", "memory"]:
        issues.append(f"Invalid CLOSURES_STORAGE_BACKEND: {STORAGE_BACKEND}")

    if not STORAGE_KEY.strip():
        issues.append("CLOSURES_STORAGE_KEY cannot be empty")

    if not DATASET_NAME.strip():
        issues.append("CLOSURES_DATASET_NAME cannot be empty")

    return issues
