"""
Shared data models for the game reviews package.

The models are validated when they are built; the renderers trust them.
Optional fields use None for absence, so an empty string or a zero is a
present value.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config import RATING_SCALE
from .error_handling import CatalogValidationError, MissingFieldError


def category_anchor(title: str) -> str:
    """In-page anchor of a category section: the title, lower-cased."""
    return title.lower()


def review_anchor(review_id: int) -> str:
    """In-page anchor of a review entry."""
    return f"review-{review_id}"


@dataclass(frozen=True)
class Category:
    """A named group of reviews, displayed as one section of the page."""
    title: str
    description: str

    def __post_init__(self):
        for name in ("title", "description"):
            if getattr(self, name) is None:
                raise MissingFieldError("Category", name, self.title)


@dataclass(frozen=True)
class Review:
    """One game entry with its required and optional descriptive fields."""
    id: int
    title: str
    link: str
    cover_url: str
    description: str
    date_released: Optional[str] = None
    rating: Optional[int] = None
    heart_count: Optional[int] = None
    genres: List[str] = field(default_factory=list)
    pros: Optional[str] = None
    cons: Optional[str] = None

    def __post_init__(self):
        for name in ("id", "title", "link", "cover_url", "description"):
            if getattr(self, name) is None:
                raise MissingFieldError("Review", name, self.id)
        if self.rating is not None and not 0 <= self.rating <= RATING_SCALE:
            raise CatalogValidationError(
                f"Review {self.id} has rating {self.rating}, expected 0 to {RATING_SCALE}"
            )
        if self.heart_count is not None and self.heart_count < 0:
            raise CatalogValidationError(
                f"Review {self.id} has negative heart_count {self.heart_count}"
            )

    @property
    def anchor(self) -> str:
        return review_anchor(self.id)


@dataclass(frozen=True)
class Section:
    """A category and its reviews, in display order."""
    category: Category
    reviews: List[Review] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        return category_anchor(self.category.title)


@dataclass(frozen=True)
class Recent:
    """Entry of the "last additions" index, pointing at a review of the page."""
    review_id: int
    title: str

    @property
    def anchor(self) -> str:
        return review_anchor(self.review_id)


@dataclass(frozen=True)
class Catalog:
    """
    Everything one page render needs: sections in display order and the
    independently ordered list of recent additions.

    Raises:
        CatalogValidationError: on duplicate anchors (between categories or
            between a category and a review), duplicate review ids or a
            recent entry pointing at an unknown review
    """
    sections: List[Section] = field(default_factory=list)
    recents: List[Recent] = field(default_factory=list)

    def __post_init__(self):
        # Category and review anchors share the page's id namespace
        anchors = {}
        review_ids = set()

        def claim(anchor: str, owner: str) -> None:
            if anchor in anchors:
                raise CatalogValidationError(
                    f"{anchors[anchor]} and {owner} share the anchor '{anchor}'"
                )
            anchors[anchor] = owner

        for section in self.sections:
            claim(section.anchor, f"Category {section.category.title!r}")

            for review in section.reviews:
                if review.id in review_ids:
                    raise CatalogValidationError(f"Duplicate review id {review.id}")
                review_ids.add(review.id)
                claim(review.anchor, f"Review {review.id}")

        for recent in self.recents:
            if recent.review_id not in review_ids:
                raise CatalogValidationError(
                    f"Recent entry {recent.title!r} references unknown review id {recent.review_id}"
                )

    @property
    def review_count(self) -> int:
        return sum(len(section.reviews) for section in self.sections)

    def iter_reviews(self):
        """Yield every review of the catalog, in page order."""
        for section in self.sections:
            yield from section.reviews
