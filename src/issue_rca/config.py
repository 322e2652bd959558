"""Configuration for the `rca` tool.

Settings are loaded once at startup from:
- environment variables
- and a local `.env` file (if present)

Per-invocation values (the target issue, a token override, a template path) come
from the command line and are collected into a `RunConfig` that is passed
explicitly to each step of the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOKEN_FILENAME = ".ghtoken"


def _default_token_file() -> Path:
    return Path.home() / DEFAULT_TOKEN_FILENAME


class RcaSettings(BaseSettings):
    """Settings for the `rca` CLI.

    Environment variables:
    - RCA_TOKEN_FILE    (optional, defaults to ~/.ghtoken)
    - GITHUB_BASE_URL   (optional)
    - LOG_LEVEL         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `RcaSettings(_env_file=path_to_env)`.
    """

    token_file: Path = Field(
        default_factory=_default_token_file,
        validation_alias="RCA_TOKEN_FILE",
        description="File holding the GitHub token used when -token is not given",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level; logs go to stderr",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("github_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@dataclass(frozen=True, slots=True)
class IssueRef:
    """Identifies one issue on the hosting platform."""

    organization: str
    repository: str
    number: int

    def __post_init__(self) -> None:
        if not self.organization.strip():
            raise ValueError("organization is required")
        if not self.repository.strip():
            raise ValueError("repository is required")
        if self.number <= 0:
            raise ValueError("issue number must be a positive integer")

    @property
    def full_name(self) -> str:
        """Return the repository name as "owner/repo"."""

        return f"{self.organization}/{self.repository}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Everything a single invocation needs, built once from the command line."""

    issue: IssueRef
    token: str | None = None
    template_file: Path | None = None
