import pytest
from bs4 import BeautifulSoup

from game_reviews.models import Catalog, Category, Recent, Review, Section


def make_review(review_id=1, **overrides):
    fields = dict(
        id=review_id,
        title=f"Game {review_id}",
        link=f"https://www.igdb.com/games/game-{review_id}",
        cover_url=f"https://images.igdb.com/cover-{review_id}.jpg",
        description=f"Review of game {review_id}.",
    )
    fields.update(overrides)
    return Review(**fields)


@pytest.fixture
def review_factory():
    return make_review


@pytest.fixture
def celeste():
    return Review(
        id=7,
        title="Celeste",
        link="https://x",
        cover_url="https://y.png",
        date_released="2018",
        rating=19,
        heart_count=3,
        genres=["Platformer", "Indie"],
        description="Great game.",
        pros="Tight controls",
        cons=None,
    )


@pytest.fixture
def celeste_catalog(celeste):
    section = Section(Category("Platformers", "Jump and run"), [celeste])
    return Catalog(sections=[section], recents=[Recent(7, "Celeste")])


@pytest.fixture
def parse():
    def _parse(html):
        return BeautifulSoup(html, "html.parser")
    return _parse


@pytest.hookimpl(hookwrapper=True, trylast=True)
def pytest_runtest_call(item):
    # pytest's logging plugin attaches capture handlers to the root logger
    # when the test body starts; tests using ``bare_root`` need it empty.
    if "bare_root" not in getattr(item, "fixturenames", ()):
        yield
        return
    import logging

    root = logging.getLogger()
    captured = list(root.handlers)
    root.handlers[:] = []
    try:
        yield
    finally:
        root.handlers[:] = root.handlers + captured
