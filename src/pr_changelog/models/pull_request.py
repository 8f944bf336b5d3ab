"""
Pull Request Data Models

Merged pull request records consumed by the changelog pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, field_validator


@dataclass
class PullRequestInfo:
    """Merged pull request record"""
    number: int
    title: str
    html_url: str
    merged_at: datetime
    author: str
    labels: List[str] = field(default_factory=list)
    body: str = ""
    milestone: Optional[str] = None
    assignees: List[str] = field(default_factory=list)
    requested_reviewers: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Data validation"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")
        if not isinstance(self.merged_at, datetime):
            raise ValueError("merged_at must be a datetime")
        # naive timestamps are taken as UTC so that records stay comparable
        if self.merged_at.tzinfo is None:
            self.merged_at = self.merged_at.replace(tzinfo=timezone.utc)
        self.labels = list(self.labels or [])
        self.assignees = list(self.assignees or [])
        self.requested_reviewers = list(self.requested_reviewers or [])
        if self.body is None:
            self.body = ""


# Pydantic model for input validation
class PullRequestRequest(BaseModel):
    """Boundary model for a raw pull request record"""
    number: int
    title: str
    html_url: str
    merged_at: datetime
    author: str
    labels: List[str] = []
    body: Optional[str] = None
    milestone: Optional[str] = None
    assignees: List[str] = []
    requested_reviewers: List[str] = []

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @field_validator('labels', 'assignees', 'requested_reviewers', mode='before')
    @classmethod
    def validate_string_lists(cls, v):
        if v is None:
            return []
        return v

    def to_pull_request(self) -> PullRequestInfo:
        """Convert to the PullRequestInfo dataclass"""
        return PullRequestInfo(
            number=self.number,
            title=self.title,
            html_url=self.html_url,
            merged_at=self.merged_at,
            author=self.author,
            labels=list(self.labels),
            body=self.body or "",
            milestone=self.milestone,
            assignees=list(self.assignees),
            requested_reviewers=list(self.requested_reviewers),
        )
