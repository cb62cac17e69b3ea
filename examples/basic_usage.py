#!/usr/bin/env python3
"""Programmatic state example.

This demonstrates using the label state components directly:

* load settings from the environment / `.env`
* read the current state labels of an issue
* set a key and print the resulting state

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from github_label_state.config import LabelStateSettings
from github_label_state.github.client import GitHubClient
from github_label_state.logging import configure_logging
from github_label_state.operations import (
    OperationContext,
    get_all_operation,
    set_operation,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Set a state key on an issue (example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--issue-number", type=int, required=True, help="Issue number")
    parser.add_argument("--key", required=True, help="State key")
    parser.add_argument("--value", required=True, help="State value")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    owner, repo = args.repo.split("/", 1)

    settings = LabelStateSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(token=settings.github_token, base_url=settings.github_base_url)
    try:
        context = OperationContext(
            gateway=github,
            owner=owner,
            repo=repo,
            issue_number=args.issue_number,
            prefix=settings.prefix,
            separator=settings.separator,
        )

        labels = github.list_labels(owner=owner, repo=repo, issue_number=args.issue_number)
        print(set_operation(context, args.key, args.value, labels).message)

        labels = github.list_labels(owner=owner, repo=repo, issue_number=args.issue_number)
        print(f"State: {get_all_operation(context, labels).state}")
    finally:
        github.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
