"""
Game Reviews Package - personal game review catalog rendered as a static page.

This package provides:
1. A validated data model for categories, reviews and recent additions
2. HTML and Markdown rendering of that catalog
3. Loading of the catalog from a SQLite database enriched with IGDB metadata
"""

__version__ = "0.1.0"

# Main package imports for convenience
from .models import Catalog, Category, Recent, Review, Section
from .renderer import ReviewRenderer, render, load_stylesheet
from .markdown import render_markdown
from .error_handling import CatalogValidationError, GameReviewsError, IGDBError, MissingFieldError
from .logging_config import setup_logging

__all__ = [
    "Catalog",
    "Category",
    "Recent",
    "Review",
    "Section",
    "ReviewRenderer",
    "render",
    "load_stylesheet",
    "render_markdown",
    "CatalogValidationError",
    "GameReviewsError",
    "IGDBError",
    "MissingFieldError",
    "setup_logging",
]
