"""
Configuration Data Models

Categories and rewrite rules declared in the changelog configuration
"""

from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, field_validator


@dataclass
class Category:
    """Output section selected by label intersection"""
    title: str
    labels: List[str]

    def __post_init__(self):
        """Data validation"""
        if not self.labels:
            raise ValueError(f"Category '{self.title}' must declare at least one label")
        self.labels = list(self.labels)

    def matches(self, labels: List[str]) -> bool:
        """True when the given labels share at least one element with this category"""
        return bool(set(self.labels) & set(labels))


@dataclass
class Transformer:
    """Find/replace rule applied to every rendered pull request"""
    pattern: str
    target: str = ""


# Pydantic models for configuration validation
class CategoryRequest(BaseModel):
    """Configuration model for a Category"""
    title: str
    labels: List[str]

    @field_validator('labels')
    @classmethod
    def validate_labels(cls, v):
        if not v:
            raise ValueError('Category labels cannot be empty')
        return v

    def to_category(self) -> Category:
        return Category(title=self.title, labels=list(self.labels))


class TransformerRequest(BaseModel):
    """Configuration model for a Transformer"""
    pattern: str
    target: str = ""

    def to_transformer(self) -> Transformer:
        return Transformer(pattern=self.pattern, target=self.target)


class ChangelogConfigRequest(BaseModel):
    """Configuration model for the changelog section; unset fields fall back to defaults"""
    sort: Optional[str] = None
    template: Optional[str] = None
    pr_template: Optional[str] = None
    categories: Optional[List[CategoryRequest]] = None
    transformers: Optional[List[TransformerRequest]] = None
