"""Render a GitHub issue, its comments and labels into a reviewable document.

`rca` fetches a single issue and renders it through a Jinja2 template so that
an RCA discussion can be moved into a Markdown file and submitted in a PR.
"""

__version__ = "0.1.0"

from issue_rca.config import IssueRef, RcaSettings, RunConfig

__all__ = ["__version__", "IssueRef", "RcaSettings", "RunConfig"]
