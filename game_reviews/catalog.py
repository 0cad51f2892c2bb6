"""
Build the render-ready catalog from the reviews database and IGDB.
"""

import logging
from typing import Dict, List

from .config import RECENT_LIMIT, RELEASE_DATE_FORMAT
from .database import CategoryRow, GameReviewRow, ReviewsDatabase
from .error_handling import CatalogValidationError
from .igdb import IGDB, Cover, Genre, IGDBGame
from .models import Catalog, Category, Recent, Review, Section

logger = logging.getLogger(__name__)


def make_review(game_review: GameReviewRow, games: Dict[int, IGDBGame],
                genres: Dict[int, Genre], covers: Dict[int, Cover]) -> Review:
    """
    Combine a database review with its IGDB metadata.

    Args:
        game_review: Review row
        games: IGDB games by id
        genres: IGDB genres by id
        covers: IGDB covers by id

    Raises:
        CatalogValidationError: if the IGDB game or its cover is unknown
    """
    game = games.get(game_review.igdb_id)
    if game is None:
        raise CatalogValidationError(f"can't find igdb game for {game_review!r}")

    cover = covers.get(game.cover_id) if game.cover_id is not None else None
    if cover is None:
        raise CatalogValidationError(f"can't find cover for igdb game {game!r}")

    released = game.first_release_date
    return Review(
        id=game_review.id,
        title=game.name,
        link=game.url,
        cover_url=cover.https_url,
        description=game_review.description,
        date_released=released.strftime(RELEASE_DATE_FORMAT) if released is not None else None,
        rating=game_review.rating,
        heart_count=game_review.heart_count,
        genres=[genres[genre_id].name for genre_id in game.genres if genre_id in genres],
        pros=game_review.pros,
        cons=game_review.cons,
    )


def build_section(category: CategoryRow, game_reviews: List[GameReviewRow], igdb: IGDB) -> Section:
    """Fetch the IGDB data of a category's reviews and build its section."""
    games = {g.id: g for g in igdb.get_games([gr.igdb_id for gr in game_reviews])}

    genre_ids = sorted({genre_id for game in games.values() for genre_id in game.genres})
    genres = {g.id: g for g in igdb.get_genres(genre_ids)}

    cover_ids = [game.cover_id for game in games.values() if game.cover_id is not None]
    covers = {c.id: c for c in igdb.get_covers(cover_ids)}

    reviews = [make_review(gr, games, genres, covers) for gr in game_reviews]
    return Section(
        category=Category(title=category.title, description=category.description),
        reviews=reviews,
    )


def build_catalog(db: ReviewsDatabase, igdb: IGDB, recent_limit: int = RECENT_LIMIT) -> Catalog:
    """
    Build the catalog for one page.

    Args:
        db: Reviews database
        igdb: IGDB client
        recent_limit: Number of entries of the "last additions" list

    Returns:
        Validated catalog

    Raises:
        CatalogValidationError: on missing IGDB data or broken invariants
    """
    sections = []
    for category in db.get_categories():
        sections.append(build_section(category, db.get_game_reviews(category.id), igdb))

    titles = {review.id: review.title for section in sections for review in section.reviews}
    recents = []
    for gr in db.get_recent_reviews(recent_limit):
        if gr.id not in titles:
            logger.warning(f"Review {gr.id} ('{gr.title}') is not on the page, left out of last additions")
            continue
        recents.append(Recent(review_id=gr.id, title=titles[gr.id]))

    catalog = Catalog(sections=sections, recents=recents)
    logger.info(f"Built catalog with {catalog.review_count} reviews in {len(sections)} categories")
    return catalog
