"""
Database operations for the game reviews.

This module provides high-level database operations for querying and adding
categories and reviews. Errors propagate: a page must never be generated
from a partially read database.
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional

from .models import CategoryRow, GameReviewRow, create_database

logger = logging.getLogger(__name__)

GAME_REVIEW_COLUMNS = (
    "id, igdb_id, title, description, category_id, year_played, "
    "rating, pros, cons, heart_count, created_at"
)


class ReviewsDatabase:
    """
    High-level database operations for game reviews.
    """

    def __init__(self, db_path: Path):
        """
        Initialize the reviews database handler.

        Args:
            db_path: Path to the SQLite database
        """
        self.db_path = Path(db_path)

        # Create database if it doesn't exist
        if not self.db_path.exists():
            logger.info(f"Database not found at {self.db_path}, creating it...")
            create_database(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get_categories(self) -> List[CategoryRow]:
        """
        Get all categories in display order.

        Returns:
            Categories ordered by sort_order
        """
        with closing(self._connect()) as conn:
            rows = conn.execute(
                "SELECT id, title, sort_order, description FROM category ORDER BY sort_order, id"
            ).fetchall()

        categories = [CategoryRow(**dict(row)) for row in rows]
        logger.info(f"Retrieved {len(categories)} categories from database")
        return categories

    def get_game_reviews(self, category_id: int) -> List[GameReviewRow]:
        """
        Get the reviews of a category, best rated first.

        Args:
            category_id: Category to list

        Returns:
            Reviews ordered by rating (highest first, unrated last) then title
        """
        with closing(self._connect()) as conn:
            rows = conn.execute(
                f"""
                SELECT {GAME_REVIEW_COLUMNS}
                FROM game_review
                WHERE category_id = ?
                ORDER BY rating DESC, title
                """,
                (category_id,),
            ).fetchall()

        reviews = [GameReviewRow(**dict(row)) for row in rows]
        logger.debug(f"Retrieved {len(reviews)} reviews for category {category_id}")
        return reviews

    def get_recent_reviews(self, limit: int) -> List[GameReviewRow]:
        """
        Get the most recently added reviews.

        Args:
            limit: Maximum number of reviews to return

        Returns:
            Reviews ordered from newest to oldest
        """
        with closing(self._connect()) as conn:
            rows = conn.execute(
                f"""
                SELECT {GAME_REVIEW_COLUMNS}
                FROM game_review
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()

        return [GameReviewRow(**dict(row)) for row in rows]

    def add_category(self, title: str, description: str, sort_order: int = 0) -> int:
        """
        Insert a category.

        Returns:
            Id of the new category
        """
        with closing(self._connect()) as conn:
            with conn:
                cursor = conn.execute(
                    "INSERT INTO category (title, sort_order, description) VALUES (?, ?, ?)",
                    (title, sort_order, description),
                )
        logger.info(f"Added category '{title}'")
        return cursor.lastrowid

    def add_game_review(self, igdb_id: int, title: str, description: str, category_id: int,
                        year_played: Optional[str] = None, rating: Optional[int] = None,
                        pros: Optional[str] = None, cons: Optional[str] = None,
                        heart_count: Optional[int] = None,
                        created_at: Optional[str] = None) -> int:
        """
        Insert a review.

        Args:
            created_at: Timestamp of the addition, defaults to now

        Returns:
            Id of the new review
        """
        columns = ["igdb_id", "title", "description", "category_id", "year_played",
                   "rating", "pros", "cons", "heart_count"]
        params = [igdb_id, title, description, category_id, year_played,
                  rating, pros, cons, heart_count]
        if created_at is not None:
            columns.append("created_at")
            params.append(created_at)

        placeholders = ", ".join("?" for _ in columns)
        with closing(self._connect()) as conn:
            with conn:
                cursor = conn.execute(
                    f"INSERT INTO game_review ({', '.join(columns)}) VALUES ({placeholders})",
                    params,
                )
        logger.info(f"Added review '{title}' (igdb id {igdb_id})")
        return cursor.lastrowid

    def get_statistics(self) -> dict:
        """
        Get statistics about the reviews in the database.

        Returns:
            Dictionary with statistics
        """
        with closing(self._connect()) as conn:
            total_categories = conn.execute("SELECT COUNT(*) FROM category").fetchone()[0]
            total_reviews = conn.execute("SELECT COUNT(*) FROM game_review").fetchone()[0]
            per_category = conn.execute(
                """
                SELECT c.title, COUNT(r.id)
                FROM category c LEFT JOIN game_review r ON r.category_id = c.id
                GROUP BY c.id
                ORDER BY c.sort_order, c.id
                """
            ).fetchall()

        return {
            'total_categories': total_categories,
            'total_reviews': total_reviews,
            'reviews_per_category': {title: count for title, count in per_category},
        }
