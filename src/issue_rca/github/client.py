"""GitHub API client wrapper.

This wraps PyGithub to keep GitHub calls out of CLI code and make tests easy.
Everything a template can see is copied out of the PyGithub objects into frozen
snapshots, so templates never call back into the API.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import requests
from github import Auth, Github, GithubException

from issue_rca.config import IssueRef
from issue_rca.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IssueSnapshot:
    """Read-only issue fields exposed to templates."""

    number: int
    title: str
    body: str
    state: str
    html_url: str
    author: str
    created_at: datetime | None
    label_names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CommentSnapshot:
    """Read-only comment fields exposed to templates."""

    body: str
    author: str
    created_at: datetime | None
    html_url: str


@dataclass(frozen=True, slots=True)
class LabelSnapshot:
    name: str
    color: str
    description: str


@dataclass(frozen=True, slots=True)
class RenderContext:
    """The issue, its comments and its labels, in listing order."""

    issue: IssueSnapshot
    comments: tuple[CommentSnapshot, ...]
    labels: tuple[LabelSnapshot, ...]

    def as_template_vars(self) -> dict[str, Any]:
        """Return the variables a template can reference by name."""

        return {
            "issue": self.issue,
            "comments": list(self.comments),
            "labels": list(self.labels),
        }


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _safe_login(user: object) -> str:
    login = getattr(user, "login", None)
    if isinstance(login, str) and login.strip():
        return login
    return "unknown"


def _datetime_or_none(value: object) -> datetime | None:
    return value if isinstance(value, datetime) else None


def _issue_snapshot(issue: Any) -> IssueSnapshot:
    number = getattr(issue, "number", None)
    if not isinstance(number, int) or number <= 0:
        raise ValueError("Invalid issue response: missing number")

    labels = getattr(issue, "labels", None) or []
    label_names = tuple(label.name for label in labels if isinstance(getattr(label, "name", None), str))
    return IssueSnapshot(
        number=number,
        title=_text(getattr(issue, "title", None)),
        body=_text(getattr(issue, "body", None)),
        state=_text(getattr(issue, "state", None)),
        html_url=_text(getattr(issue, "html_url", None)),
        author=_safe_login(getattr(issue, "user", None)),
        created_at=_datetime_or_none(getattr(issue, "created_at", None)),
        label_names=label_names,
    )


def _comment_snapshot(comment: Any) -> CommentSnapshot:
    return CommentSnapshot(
        body=_text(getattr(comment, "body", None)),
        author=_safe_login(getattr(comment, "user", None)),
        created_at=_datetime_or_none(getattr(comment, "created_at", None)),
        html_url=_text(getattr(comment, "html_url", None)),
    )


def _label_snapshot(label: Any) -> LabelSnapshot:
    return LabelSnapshot(
        name=_text(getattr(label, "name", None)),
        color=_text(getattr(label, "color", None)),
        description=_text(getattr(label, "description", None)),
    )


class GitHubClient:
    """Small wrapper around PyGithub for reading one issue."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = base_url.rstrip("/")
        if github_api is not None:
            self._github = github_api
            logger.debug("Using injected Github instance")
            return

        # Lazy objects load on first attribute read; failures are never retried.
        self._github = Github(
            auth=Auth.Token(token),
            base_url=self._base_url,
            retry=None,
            lazy=True,
        )

    def fetch_render_context(self, ref: IssueRef) -> RenderContext:
        """Fetch the issue, its comments and its labels.

        Makes three requests: the issue, then the first page of comments, then
        the first page of labels. Any failure aborts the whole fetch.

        Raises:
            FetchError: if any of the calls fail.
        """

        with _translate_errors("fetch issue", ref):
            repo = self._github.get_repo(ref.full_name)
            issue = repo.get_issue(ref.number)
            issue_snapshot = _issue_snapshot(issue)
        logger.info(
            "Fetched issue",
            extra={"repo": ref.full_name, "issue_number": ref.number},
        )

        with _translate_errors("list comments", ref):
            comments = tuple(_comment_snapshot(c) for c in issue.get_comments().get_page(0))
        logger.info(
            "Fetched comments",
            extra={"repo": ref.full_name, "issue_number": ref.number, "count": len(comments)},
        )

        with _translate_errors("list labels", ref):
            labels = tuple(_label_snapshot(label) for label in issue.get_labels().get_page(0))
        logger.info(
            "Fetched labels",
            extra={"repo": ref.full_name, "issue_number": ref.number, "count": len(labels)},
        )

        return RenderContext(issue=issue_snapshot, comments=comments, labels=labels)

    def close(self) -> None:
        self._github.close()


@contextmanager
def _translate_errors(operation: str, ref: IssueRef) -> Iterator[None]:
    """Re-raise PyGithub, transport and response errors as `FetchError`."""

    try:
        yield
    except GithubException as e:
        logger.debug("GitHub call failed", extra={"operation": operation, "status": e.status})
        raise FetchError(operation, ref, f"GitHub returned {e.status}: {_github_message(e)}") from e
    except (requests.RequestException, ValueError) as e:
        logger.debug("GitHub call failed", extra={"operation": operation})
        raise FetchError(operation, ref, str(e) or type(e).__name__) from e


def _github_message(exc: GithubException) -> str:
    data = exc.data
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return str(data) if data else type(exc).__name__
