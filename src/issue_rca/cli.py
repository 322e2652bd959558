"""Console script entrypoint.

The CLI itself is implemented in `issue_rca.main`.
"""

from __future__ import annotations

from issue_rca.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
