"""
PR Changelog Builder

Renders changelog documents from merged GitHub pull requests
"""

__version__ = "1.0.0"

from .builder import ChangelogBuilder, build_changelog
from .config import ChangelogConfig
from .models import Category, PullRequestInfo, Transformer

__all__ = [
    "ChangelogBuilder",
    "build_changelog",
    "ChangelogConfig",
    "Category",
    "PullRequestInfo",
    "Transformer",
]
