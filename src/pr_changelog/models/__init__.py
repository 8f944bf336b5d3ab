"""
Data Models

Core data models of the PR changelog builder
"""

from .pull_request import PullRequestInfo, PullRequestRequest
from .configuration import (
    Category,
    Transformer,
    CategoryRequest,
    TransformerRequest,
    ChangelogConfigRequest,
)
from .changelog import (
    CompiledRule,
    CompileOutcome,
    RenderedEntry,
    CategoryBucket,
    ClassificationResult,
)

__all__ = [
    "PullRequestInfo",
    "PullRequestRequest",
    "Category",
    "Transformer",
    "CategoryRequest",
    "TransformerRequest",
    "ChangelogConfigRequest",
    "CompiledRule",
    "CompileOutcome",
    "RenderedEntry",
    "CategoryBucket",
    "ClassificationResult",
]
