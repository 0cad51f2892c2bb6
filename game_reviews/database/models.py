import logging
import os
import sqlite3
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class CategoryRow:
    """Row of the ``category`` table."""
    id: int
    title: str
    sort_order: int
    description: str


@dataclass
class GameReviewRow:
    """Row of the ``game_review`` table; game metadata lives on IGDB."""
    id: int
    igdb_id: int
    title: str
    description: str
    category_id: int
    year_played: Optional[str] = None
    rating: Optional[int] = None
    pros: Optional[str] = None
    cons: Optional[str] = None
    heart_count: Optional[int] = None
    created_at: Optional[str] = None


def create_database(db_path="game_reviews.sqlite3"):
    """Create the database and tables for the game reviews."""

    # Ensure database directory exists (only if path contains directory)
    db_dir = os.path.dirname(str(db_path))
    if db_dir:  # Only create directory if there is one
        os.makedirs(db_dir, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS category (
                id INTEGER PRIMARY KEY,
                title TEXT NOT NULL,
                sort_order INTEGER NOT NULL DEFAULT 0,
                description TEXT NOT NULL DEFAULT ''
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS game_review (
                id INTEGER PRIMARY KEY,
                igdb_id INTEGER NOT NULL,
                title TEXT NOT NULL,  -- working title, the page shows the IGDB name
                year_played TEXT,
                rating INTEGER CHECK (rating IS NULL OR rating BETWEEN 0 AND 20),
                description TEXT NOT NULL,
                pros TEXT,
                cons TEXT,
                heart_count INTEGER CHECK (heart_count IS NULL OR heart_count >= 0),
                category_id INTEGER NOT NULL REFERENCES category(id),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Raw IGDB responses, one JSON document per (id, endpoint)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS igdb_cache (
                igdb_id INTEGER NOT NULL,
                endpoint TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (igdb_id, endpoint)
            )
        """)

        conn.commit()
    finally:
        conn.close()
    logger.info(f"Database ready at {db_path}")
