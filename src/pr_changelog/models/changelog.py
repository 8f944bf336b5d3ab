"""
Changelog Data Models

Intermediate values produced while building a changelog
"""

from dataclasses import dataclass, field
import re
from typing import List, Optional

from .configuration import Category
from .pull_request import PullRequestInfo


@dataclass
class CompiledRule:
    """Rewrite rule with a validated regular expression"""
    pattern: re.Pattern
    target: str


@dataclass
class CompileOutcome:
    """Result of compiling one configured transformer"""
    source: str
    rule: Optional[CompiledRule] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.rule is not None


@dataclass
class RenderedEntry:
    """Text for one pull request, associated with its source record"""
    pull_request: PullRequestInfo
    body: str

    @property
    def labels(self) -> List[str]:
        return self.pull_request.labels


@dataclass
class CategoryBucket:
    """Entries matched by one category"""
    category: Category
    entries: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass
class ClassificationResult:
    """Per-category buckets plus the uncategorized fallback"""
    buckets: List[CategoryBucket]
    uncategorized: List[str] = field(default_factory=list)

    @property
    def non_empty_buckets(self) -> List[CategoryBucket]:
        """Buckets that have at least one entry, in category order"""
        return [b for b in self.buckets if not b.is_empty]

    @property
    def categorized_count(self) -> int:
        return sum(len(b.entries) for b in self.buckets)
