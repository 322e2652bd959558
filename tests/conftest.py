"""Test configuration and fixtures."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from issue_rca.config import IssueRef
from issue_rca.github.client import (
    CommentSnapshot,
    IssueSnapshot,
    LabelSnapshot,
    RenderContext,
)

_SETTINGS_ENV_VARS = ("RCA_TOKEN_FILE", "GITHUB_BASE_URL", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment and .env out of settings loading."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def issue_ref() -> IssueRef:
    return IssueRef(organization="octo-org", repository="octo-repo", number=42)


@pytest.fixture
def token_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a token file and point RCA_TOKEN_FILE at it."""
    path = tmp_path / ".ghtoken"
    path.write_text("  test-token\n", encoding="utf-8")
    monkeypatch.setenv("RCA_TOKEN_FILE", str(path))
    return path


def make_page(items: list[object]) -> Mock:
    """Return a stand-in for a PyGithub PaginatedList."""
    paginated = Mock()
    paginated.get_page.return_value = items
    return paginated


def make_github_api(
    *,
    body: str | None = "Hello",
    comments: list[str] | None = None,
    labels: list[str] | None = None,
) -> Mock:
    """Build a mocked `github.Github` serving one issue."""
    comment_bodies = ["World"] if comments is None else comments
    label_names = ["bug"] if labels is None else labels

    label_objs = [
        SimpleNamespace(name=name, color="d73a4a", description=f"{name} label")
        for name in label_names
    ]
    comment_objs = [
        SimpleNamespace(
            body=text,
            user=SimpleNamespace(login="reviewer"),
            created_at=datetime(2025, 1, 2, tzinfo=UTC),
            html_url=f"https://github.com/octo-org/octo-repo/issues/42#issuecomment-{i}",
        )
        for i, text in enumerate(comment_bodies, start=1)
    ]

    issue = Mock()
    issue.number = 42
    issue.title = "Outage on 2025-01-01"
    issue.body = body
    issue.state = "open"
    issue.html_url = "https://github.com/octo-org/octo-repo/issues/42"
    issue.user = SimpleNamespace(login="octocat")
    issue.created_at = datetime(2025, 1, 1, tzinfo=UTC)
    issue.labels = label_objs
    issue.get_comments.return_value = make_page(comment_objs)
    issue.get_labels.return_value = make_page(label_objs)

    repo = Mock()
    repo.get_issue.return_value = issue

    github_api = Mock()
    github_api.get_repo.return_value = repo
    return github_api


@pytest.fixture
def github_api() -> Mock:
    return make_github_api()


@pytest.fixture
def render_context() -> RenderContext:
    """A context with body "Hello", one comment "World" and one label "bug"."""
    return RenderContext(
        issue=IssueSnapshot(
            number=42,
            title="Outage on 2025-01-01",
            body="Hello",
            state="open",
            html_url="https://github.com/octo-org/octo-repo/issues/42",
            author="octocat",
            created_at=datetime(2025, 1, 1, tzinfo=UTC),
            label_names=("bug",),
        ),
        comments=(
            CommentSnapshot(
                body="World",
                author="reviewer",
                created_at=datetime(2025, 1, 2, tzinfo=UTC),
                html_url="https://github.com/octo-org/octo-repo/issues/42#issuecomment-1",
            ),
        ),
        labels=(LabelSnapshot(name="bug", color="d73a4a", description="Something is broken"),),
    )


@pytest.fixture
def github_api_factory():
    """Return `make_github_api` so tests can build variations of the mocked API."""
    return make_github_api
