"""GitHub access for fetching issue snapshots."""

from issue_rca.github.client import (
    CommentSnapshot,
    GitHubClient,
    IssueSnapshot,
    LabelSnapshot,
    RenderContext,
)

__all__ = [
    "CommentSnapshot",
    "GitHubClient",
    "IssueSnapshot",
    "LabelSnapshot",
    "RenderContext",
]
