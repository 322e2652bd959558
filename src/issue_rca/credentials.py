"""Resolve the GitHub token used to authenticate API calls."""

from __future__ import annotations

import logging
from pathlib import Path

from issue_rca.config import RcaSettings, RunConfig
from issue_rca.errors import CredentialError

logger = logging.getLogger(__name__)


def load_token(path: Path) -> str:
    """Read a token from `path` and return it with surrounding whitespace removed.

    Raises:
        CredentialError: if the file is missing, unreadable or empty.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CredentialError(path, "file not found") from None
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialError(path, str(e)) from e

    token = raw.strip()
    if not token:
        raise CredentialError(path, "file is empty")

    logger.debug("Loaded GitHub token from file", extra={"path": str(path)})
    return token


def resolve_token(config: RunConfig, settings: RcaSettings) -> str:
    """Return the -token override if given, otherwise the token from the token file."""

    if config.token is not None and config.token.strip():
        return config.token.strip()
    return load_token(settings.token_file)
