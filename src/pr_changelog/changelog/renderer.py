"""
Pull Request Template Renderer

Fills the per-PR template with values from a pull request record.
"""

import re
from datetime import timezone
from typing import Callable, Dict, List, Optional

from ..models.pull_request import PullRequestInfo


PLACEHOLDER_PATTERN = re.compile(r'\$\{\{([A-Z_]+)\}\}')


def _join(values: Optional[List[str]]) -> str:
    return ", ".join(values) if values else ""


class PullRequestRenderer:
    """
    Renders pull request records with placeholder substitution.

    Recognized tokens are NUMBER, TITLE, URL, MERGED_AT, AUTHOR, LABELS,
    MILESTONE, BODY, ASSIGNEES and REVIEWERS, written as ``${{TOKEN}}``.
    Every occurrence is replaced in one left-to-right pass, so text coming
    from the record is never scanned for tokens again. Unknown tokens are
    kept as they are.
    """

    def __init__(self, template: str):
        """
        Initialize renderer.

        Args:
            template: Per-PR template string
        """
        self.template = template
        self.fields: Dict[str, Callable[[PullRequestInfo], str]] = {
            'NUMBER': lambda pr: str(pr.number),
            'TITLE': lambda pr: pr.title,
            'URL': lambda pr: pr.html_url,
            'MERGED_AT': lambda pr: pr.merged_at.astimezone(timezone.utc).isoformat(),
            'AUTHOR': lambda pr: pr.author,
            'LABELS': lambda pr: _join(pr.labels),
            'MILESTONE': lambda pr: pr.milestone or "",
            'BODY': lambda pr: pr.body or "",
            'ASSIGNEES': lambda pr: _join(pr.assignees),
            'REVIEWERS': lambda pr: _join(pr.requested_reviewers),
        }

    def render(self, pr: PullRequestInfo) -> str:
        """
        Fill the template for one pull request.

        Args:
            pr: Source record, left unmodified

        Returns:
            Rendered text block
        """
        def substitute(match: re.Match) -> str:
            value = self.fields.get(match.group(1))
            if value is None:
                return match.group(0)
            return value(pr)

        return PLACEHOLDER_PATTERN.sub(substitute, self.template)


def fill_template(pr: PullRequestInfo, template: str) -> str:
    """Render a single pull request with the given template."""
    return PullRequestRenderer(template).render(pr)
