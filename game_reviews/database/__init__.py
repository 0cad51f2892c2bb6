"""
Database module for the game reviews.

This module handles:
- Database schema creation
- Category and review storage and retrieval
"""

from .models import CategoryRow, GameReviewRow, create_database
from .operations import ReviewsDatabase

__all__ = [
    "CategoryRow",
    "GameReviewRow",
    "ReviewsDatabase",
    "create_database",
]
