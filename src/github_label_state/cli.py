"""Console script entrypoint.

The implementation lives in `github_label_state.main`.
"""

from __future__ import annotations

from github_label_state.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
