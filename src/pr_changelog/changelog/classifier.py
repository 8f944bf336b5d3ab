"""
Label Classifier

Sorts rendered pull requests into the configured categories.
"""

import logging
from typing import List

from ..models.changelog import CategoryBucket, ClassificationResult, RenderedEntry
from ..models.configuration import Category


logger = logging.getLogger(__name__)


class LabelClassifier:
    """
    Assigns rendered entries to categories by label intersection.

    Classification is not exclusive: an entry is added to every category
    it matches. Entries that match nothing go to the uncategorized bucket.
    """

    def __init__(self, categories: List[Category]):
        """
        Initialize classifier.

        Args:
            categories: Categories in declaration order
        """
        self.categories = list(categories)

    def classify(self, entries: List[RenderedEntry]) -> ClassificationResult:
        """
        Classify entries, keeping their input order inside every bucket.

        Args:
            entries: Rendered entries in changelog order

        Returns:
            ClassificationResult with one bucket per category
        """
        buckets = [CategoryBucket(category=category) for category in self.categories]
        uncategorized: List[str] = []

        for entry in entries:
            matched = False

            for bucket in buckets:
                if bucket.category.matches(entry.labels):
                    bucket.entries.append(entry.body)
                    matched = True

            if not matched:
                uncategorized.append(entry.body)

        result = ClassificationResult(buckets=buckets, uncategorized=uncategorized)
        logger.debug(
            f"Classified {len(entries)} entries: "
            f"{result.categorized_count} categorized, {len(uncategorized)} uncategorized"
        )
        return result
