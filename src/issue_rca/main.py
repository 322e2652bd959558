"""CLI entrypoint for `rca`.

Fetches one issue with its comments and labels and renders it to stdout:

    rca [-token TOKEN] [-template PATH] org repo issue_number
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from issue_rca import __version__
from issue_rca.config import IssueRef, RcaSettings, RunConfig
from issue_rca.credentials import resolve_token
from issue_rca.errors import RcaError
from issue_rca.github.client import GitHubClient
from issue_rca.logging import configure_logging
from issue_rca.render import DEFAULT_TEMPLATE_NAME, compile_template, load_template_source, render

logger = logging.getLogger(__name__)

TEMPLATE_HELP = """Template file to render instead of the default.
The template has access to: issue, comments, labels"""


def _issue_number(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid issue number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"issue number must be positive: {value!r}")
    return number


def _template_path(value: str) -> Path | None:
    # An empty value selects the default template.
    return Path(value) if value.strip() else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rca",
        description="Render a GitHub issue, its comments and labels into a document on stdout",
    )
    parser.add_argument("--version", action="version", version=f"issue-rca {__version__}")
    parser.add_argument(
        "-token",
        "--token",
        dest="token",
        default=None,
        help="GitHub token (defaults to the contents of ~/.ghtoken, or RCA_TOKEN_FILE)",
    )
    parser.add_argument(
        "-template",
        "--template",
        dest="template",
        type=_template_path,
        default=None,
        help=TEMPLATE_HELP,
    )
    parser.add_argument("org", help="Organization or user that owns the repository")
    parser.add_argument("repo", help="Repository name")
    parser.add_argument("issue_number", type=_issue_number, help="Issue number")
    return parser


def run(config: RunConfig, settings: RcaSettings, out: TextIO) -> None:
    """Fetch the issue described by `config` and render it to `out`.

    Nothing is written to `out` until the issue, comments and labels have all
    been fetched and the template has compiled.
    """

    token = resolve_token(config, settings)

    github = GitHubClient(token=token, base_url=settings.github_base_url)
    try:
        context = github.fetch_render_context(config.issue)
    finally:
        github.close()

    source = load_template_source(config.template_file)
    name = str(config.template_file) if config.template_file is not None else DEFAULT_TEMPLATE_NAME
    template = compile_template(source, name=name)

    render(template, context, out)


def main(argv: list[str] | None = None, *, stdout: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        issue = IssueRef(organization=args.org, repository=args.repo, number=args.issue_number)
    except ValueError as e:
        parser.error(str(e))

    try:
        settings = RcaSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    config = RunConfig(issue=issue, token=args.token, template_file=args.template)

    try:
        run(config, settings, stdout if stdout is not None else sys.stdout)
        return 0

    except RcaError as e:
        logger.error(str(e), extra={"error_type": type(e).__name__, "issue": str(config.issue)})
        print(f"error: {e}", file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
