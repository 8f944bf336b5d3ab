"""
Changelog Pipeline

Ordering, rendering, rewriting, classification and assembly stages.
"""

from .ordering import sort_pull_requests, is_ascending
from .renderer import PullRequestRenderer, fill_template
from .transformer import validate_transformers, transform
from .classifier import LabelClassifier
from .assembler import assemble_changelog

__all__ = [
    'sort_pull_requests',
    'is_ascending',
    'PullRequestRenderer',
    'fill_template',
    'validate_transformers',
    'transform',
    'LabelClassifier',
    'assemble_changelog',
]
