"""Error types raised by the `rca` pipeline.

Components raise these; only the CLI driver decides how a failure terminates the
process.
"""

from __future__ import annotations

from pathlib import Path


class RcaError(Exception):
    """Base class for every expected failure of an `rca` run."""


class CredentialError(RcaError):
    """Raised when the GitHub token cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load GitHub token from {path}: {reason}")
        self.path = path
        self.reason = reason


class FetchError(RcaError):
    """Raised when a GitHub API call fails."""

    def __init__(self, operation: str, ref: object, reason: str) -> None:
        super().__init__(f"Failed to {operation} for {ref}: {reason}")
        self.operation = operation
        self.ref = ref
        self.reason = reason


class TemplateLoadError(RcaError):
    """Raised when a template file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read template {path}: {reason}")
        self.path = path


class TemplateCompileError(RcaError):
    """Raised when a template has a syntax error."""

    def __init__(self, name: str, message: str, lineno: int | None = None) -> None:
        where = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"Template syntax error in {where}: {message}")
        self.name = name
        self.lineno = lineno


class TemplateRenderError(RcaError):
    """Raised when a compiled template fails while rendering."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"Template {name} failed to render: {message}")
        self.name = name
