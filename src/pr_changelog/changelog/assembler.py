"""
Changelog Document Assembler

Builds the categorized and uncategorized sections and fills the outer
document template.
"""

import re
import logging
from typing import Dict

from ..models.changelog import ClassificationResult


logger = logging.getLogger(__name__)


CHANGELOG_PLACEHOLDER = "${{CHANGELOG}}"
UNCATEGORIZED_PLACEHOLDER = "${{UNCATEGORIZED}}"

_SECTION_PATTERN = re.compile(
    re.escape(CHANGELOG_PLACEHOLDER) + '|' + re.escape(UNCATEGORIZED_PLACEHOLDER)
)


def build_categorized_section(result: ClassificationResult) -> str:
    """Category title, blank line, one entry per line, blank line; empty categories skipped."""
    changelog = ""
    for bucket in result.non_empty_buckets:
        changelog += f"{bucket.category.title}\n\n"
        for entry in bucket.entries:
            changelog += f"{entry}\n"
        changelog += "\n"
    return changelog


def build_uncategorized_section(result: ClassificationResult) -> str:
    return "".join(f"{entry}\n" for entry in result.uncategorized)


def fill_document_template(template: str, sections: Dict[str, str]) -> str:
    """
    Replace the first occurrence of each section placeholder.

    Both placeholders are substituted in one pass so that section content
    is never searched for placeholders.
    """
    seen = set()

    def substitute(match: re.Match) -> str:
        token = match.group(0)
        if token in seen:
            return token
        seen.add(token)
        return sections.get(token, token)

    return _SECTION_PATTERN.sub(substitute, template)


def assemble_changelog(result: ClassificationResult, template: str) -> str:
    """
    Assemble the final changelog document.

    Args:
        result: Classified entries
        template: Outer document template

    Returns:
        The filled template
    """
    categorized = build_categorized_section(result)
    uncategorized = build_uncategorized_section(result)
    logger.debug(
        f"Assembled {len(result.non_empty_buckets)} category sections "
        f"and {len(result.uncategorized)} uncategorized entries"
    )

    return fill_document_template(template, {
        CHANGELOG_PLACEHOLDER: categorized,
        UNCATEGORIZED_PLACEHOLDER: uncategorized,
    })
