"""
GitHub Integration Layer

This module converts GitHub pull request data into records for the
changelog builder.
"""

from .parser import PullRequestParser, PullRequestParseError

__all__ = ['PullRequestParser', 'PullRequestParseError']
