"""
Markdown export of the review catalog, meant to be displayed on GitHub.
"""

import logging
from typing import List, Optional

from .config import RATING_SCALE
from .models import Catalog, Review

logger = logging.getLogger(__name__)


def review_to_markdown(review: Review) -> str:
    """
    Format one review as a Markdown bullet with GitHub emoji shortcodes.

    Args:
        review: Review to format

    Returns:
        Markdown text, without trailing blank line
    """
    header = f"* [{review.title}]({review.link})"
    if review.date_released is not None:
        header += f" - released in {review.date_released}"
    if review.heart_count:
        header += " " + ":heart:" * review.heart_count
    if review.rating is not None:
        header += f" **{review.rating}/{RATING_SCALE}**"

    lines = [header]
    if review.genres:
        lines.append(f"*{', '.join(review.genres)}*")
    lines.append(f":information_source: {review.description}")
    if review.pros is not None:
        lines.append(f":heavy_check_mark: {review.pros}")
    if review.cons is not None:
        lines.append(f":x: {review.cons}")
    return "\n".join(lines)


def render_markdown(catalog: Catalog, per_category_limit: Optional[int] = None) -> str:
    """
    Render the catalog as a Markdown document, one heading per category.

    Args:
        catalog: Catalog to render
        per_category_limit: Maximum number of reviews listed per category

    Returns:
        Markdown document
    """
    blocks: List[str] = []
    for section in catalog.sections:
        blocks.append(f"# {section.category.title}\n{section.category.description}")
        reviews = section.reviews
        if per_category_limit is not None:
            reviews = reviews[:per_category_limit]
        blocks.extend(review_to_markdown(review) for review in reviews)

    logger.info(f"Rendered {len(catalog.sections)} categories as markdown")
    return "\n\n".join(blocks) + "\n"
