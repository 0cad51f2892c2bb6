"""
Render the review catalog as a single static HTML page.

The page is produced by the Jinja2 template ``templates/reviews.html`` with
autoescaping on, so every text field of the catalog is HTML-escaped. The
style sheet is the only content inlined verbatim.
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .config import DEFAULT_STYLESHEET, HEART_GLYPH, PAGE_TITLE, RATING_SCALE, TEMPLATES_DIR
from .models import Catalog

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "reviews.html"


def repeat(value, count: int) -> str:
    """Jinja2 filter: ``value`` repeated ``count`` times (used for the heart count)."""
    return str(value) * count


def create_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["repeat"] = repeat
    env.globals.update(heart=HEART_GLYPH, rating_scale=RATING_SCALE, page_title=PAGE_TITLE)
    return env


def load_stylesheet(path: Path = DEFAULT_STYLESHEET) -> str:
    """Read a style sheet to inline in the page head."""
    return Path(path).read_text(encoding="utf-8")


class ReviewRenderer:
    """
    Renders catalogs with a shared Jinja2 environment.

    The environment is never modified after construction, so one renderer
    can serve concurrent renders.
    """

    def __init__(self, stylesheet: str = "", templates_dir: Path = TEMPLATES_DIR):
        """
        Args:
            stylesheet: CSS text inlined in every page rendered by this instance
            templates_dir: Directory holding ``reviews.html``
        """
        self.stylesheet = stylesheet
        self.environment = create_environment(templates_dir)

    def render(self, catalog: Catalog, stylesheet: Optional[str] = None) -> str:
        """
        Render ``catalog`` to an HTML document.

        Args:
            catalog: Validated catalog to render
            stylesheet: Overrides the renderer's style sheet for this call

        Returns:
            The complete HTML document
        """
        template = self.environment.get_template(TEMPLATE_NAME)
        html = template.render(
            sections=catalog.sections,
            recents=catalog.recents,
            stylesheet=self.stylesheet if stylesheet is None else stylesheet,
        )
        logger.info(
            f"Rendered {catalog.review_count} reviews in {len(catalog.sections)} sections "
            f"({len(catalog.recents)} recent additions)"
        )
        return html


_default_renderer: Optional[ReviewRenderer] = None


def render(catalog: Catalog, stylesheet: str = "") -> str:
    """Render ``catalog`` to an HTML document, inlining ``stylesheet``."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ReviewRenderer()
    return _default_renderer.render(catalog, stylesheet)
