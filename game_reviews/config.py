"""
Configuration settings for the game reviews page generator.
"""

import os
from pathlib import Path

# Project paths
PACKAGE_DIR = Path(__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent  # Go up one level to workspace root
TEMPLATES_DIR = PACKAGE_DIR / "templates"
DEFAULT_STYLESHEET = TEMPLATES_DIR / "style.css"
DATABASE_PATH = Path(os.environ.get("GAME_REVIEWS_DB", PROJECT_ROOT / "game_reviews.sqlite3"))
# Logs directory for per-run logs
LOGS_DIR = PROJECT_ROOT / "game_reviews_cache" / "logs"

# Page content
PAGE_TITLE = "Game reviews"
HEART_GLYPH = "❤"
RECENT_LIMIT = int(os.environ.get("GAME_REVIEWS_RECENT", "10"))
MARKDOWN_PER_CATEGORY_LIMIT = 8
RATING_SCALE = 20

# IGDB / Twitch credentials
IGDB_CLIENT_ID = os.environ.get("IGDB_TWITCH_CLIENT_ID")
IGDB_CLIENT_SECRET = os.environ.get("IGDB_TWITCH_CLIENT_SECRET")
TWITCH_ACCESS_TOKEN = os.environ.get("TWITCH_ACCESS_TOKEN")

# IGDB API configuration
IGDB_API_URL = "https://api.igdb.com/v4"
TWITCH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"
IGDB_REQUESTS_PER_SECOND = 4
IGDB_TIMEOUT = 30
RELEASE_DATE_FORMAT = "%m/%Y"
