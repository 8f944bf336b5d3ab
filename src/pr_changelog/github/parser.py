"""
Pull Request Parser

Parses GitHub pull request data into PullRequestInfo records.
Handles optional fields, label objects and unmerged pull requests.
"""

import logging
from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import ValidationError

from ..models.pull_request import PullRequestInfo, PullRequestRequest


logger = logging.getLogger(__name__)


class PullRequestParseError(ValueError):
    """Raised when a pull request object cannot be parsed"""
    def __init__(self, message: str, number: Optional[Any] = None):
        super().__init__(message)
        self.number = number


class PullRequestParser:
    """
    Parser for GitHub pull request data.

    Converts GitHub REST API pull request objects into PullRequestInfo
    records used by the changelog builder.
    """

    def parse_pull_requests(self, items: List[Dict]) -> List[PullRequestInfo]:
        """
        Parse a list of pull request objects.

        Pull requests that were never merged are skipped.

        Args:
            items: Pull request objects from GitHub API

        Returns:
            Parsed records in input order
        """
        pull_requests = []

        for item in items:
            if isinstance(item, dict) and not item.get('merged_at'):
                logger.debug(f"Skipping unmerged pull request #{item.get('number')}")
                continue
            pull_requests.append(self.parse_pull_request(item))

        logger.info(f"Parsed {len(pull_requests)} merged pull requests out of {len(items)}")
        return pull_requests

    def parse_pull_request(self, pr_data: Dict) -> PullRequestInfo:
        """
        Parse one pull request object.

        Args:
            pr_data: Pull request object from GitHub API

        Returns:
            PullRequestInfo record

        Raises:
            PullRequestParseError: When required fields are missing or invalid
        """
        if not isinstance(pr_data, dict):
            raise PullRequestParseError(f"Pull request must be an object, got {type(pr_data).__name__}")

        number = pr_data.get('number')
        try:
            request = PullRequestRequest(
                number=number,
                title=pr_data.get('title') or "",
                html_url=pr_data.get('html_url') or pr_data.get('url') or "",
                merged_at=self._parse_timestamp(pr_data.get('merged_at')),
                author=self._login(pr_data.get('user')) or pr_data.get('author') or "",
                labels=self._names(pr_data.get('labels'), 'name'),
                body=pr_data.get('body'),
                milestone=self._milestone(pr_data.get('milestone')),
                assignees=self._names(pr_data.get('assignees'), 'login'),
                requested_reviewers=self._names(pr_data.get('requested_reviewers'), 'login'),
            )
        except (ValidationError, ValueError) as e:
            raise PullRequestParseError(f"Invalid pull request #{number}: {e}", number=number) from e

        return request.to_pull_request()

    def _parse_timestamp(self, value: Any) -> Optional[datetime]:
        """Parse GitHub ISO timestamps, which use a trailing 'Z'."""
        if value is None or isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))

    def _login(self, user: Any) -> Optional[str]:
        if isinstance(user, dict):
            return user.get('login')
        return user

    def _milestone(self, milestone: Any) -> Optional[str]:
        if isinstance(milestone, dict):
            return milestone.get('title')
        return milestone

    def _names(self, items: Optional[List[Any]], key: str) -> List[str]:
        """Extract names from a list of objects; plain strings are kept as they are."""
        names = []
        for item in items or []:
            if isinstance(item, dict):
                value = item.get(key)
                if value:
                    names.append(value)
            elif item:
                names.append(str(item))
        return names
