"""
Pull Request Ordering

Orders pull requests by merge time.
"""

import logging
from typing import List

from ..models.pull_request import PullRequestInfo


logger = logging.getLogger(__name__)


def is_ascending(sort: str) -> bool:
    """Only a case-insensitive 'ASC' means ascending; anything else is descending."""
    return (sort or "").upper() == "ASC"


def sort_pull_requests(pull_requests: List[PullRequestInfo], ascending: bool) -> List[PullRequestInfo]:
    """
    Return a new list ordered by merge time.

    The sort is stable in both directions, so records merged at the same
    instant keep their input order.

    Args:
        pull_requests: Records to order
        ascending: Oldest first when True, newest first otherwise

    Returns:
        Sorted copy of the input
    """
    ordered = sorted(pull_requests, key=lambda pr: pr.merged_at, reverse=not ascending)
    logger.debug(f"Sorted {len(ordered)} pull requests ({'ascending' if ascending else 'descending'})")
    return ordered
