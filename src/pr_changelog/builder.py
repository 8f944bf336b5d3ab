"""
Changelog Builder

Main interface that runs the complete pipeline from merged pull requests
to the finished changelog document.
"""

import logging
from typing import List, Optional

from .changelog.ordering import sort_pull_requests, is_ascending
from .changelog.renderer import PullRequestRenderer
from .changelog.transformer import validate_transformers, transform
from .changelog.classifier import LabelClassifier
from .changelog.assembler import assemble_changelog
from .models.changelog import CompiledRule, RenderedEntry
from .models.pull_request import PullRequestInfo
from .config import ChangelogConfig


logger = logging.getLogger(__name__)


class ChangelogBuilder:
    """
    Builds a changelog from merged pull requests.

    Runs the pipeline stages in order:
    1. Sort pull requests by merge time
    2. Render each pull request and apply the transformers
    3. Classify rendered entries by label
    4. Assemble the document from the outer template
    """

    def __init__(self, config: Optional[ChangelogConfig] = None):
        """
        Initialize changelog builder.

        Args:
            config: Optional changelog configuration, defaults when omitted
        """
        self.config = config or ChangelogConfig()

    def build(self, pull_requests: List[PullRequestInfo]) -> str:
        """
        Build the changelog document.

        Args:
            pull_requests: Merged pull requests

        Returns:
            Changelog text
        """
        ascending = is_ascending(self.config.sort)
        ordered = sort_pull_requests(pull_requests, ascending)
        logger.info(f"Sorted all pull requests ascending: {ascending}")

        rules = validate_transformers(self.config.transformers)
        logger.info(f"Used {len(rules)} transformers to adjust message")

        entries = self.render_entries(ordered, rules)
        logger.info(f"Wrote messages for {len(entries)} pull requests")

        classifier = LabelClassifier(self.config.categories)
        result = classifier.classify(entries)
        logger.info(f"Ordered all pull requests into {len(self.config.categories)} categories")
        logger.info(f"Wrote {result.categorized_count} categorized pull requests down")
        logger.info(f"Wrote {len(result.uncategorized)} non categorized pull requests down")

        changelog = assemble_changelog(result, self.config.template)
        logger.info("Filled template")
        return changelog

    def render_entries(
        self,
        pull_requests: List[PullRequestInfo],
        rules: List[CompiledRule],
    ) -> List[RenderedEntry]:
        """Render and rewrite every pull request, keeping the given order."""
        renderer = PullRequestRenderer(self.config.pr_template)
        return [
            RenderedEntry(pull_request=pr, body=transform(renderer.render(pr), rules))
            for pr in pull_requests
        ]


def build_changelog(
    pull_requests: List[PullRequestInfo],
    config: Optional[ChangelogConfig] = None,
) -> str:
    """Build a changelog with a one-off ChangelogBuilder."""
    return ChangelogBuilder(config).build(pull_requests)
