"""
Command-line interface for the game reviews package.

This module provides CLI commands for:
- HTML page generation
- Markdown export
- Database management
"""

from .main import main

__all__ = [
    "main",
]
