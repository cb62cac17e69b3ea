"""CLI entrypoint for the label state tool.

Exit codes are designed to be CI-friendly:
- 0: success, or a key that was not found
- 1: the GitHub API call failed
- 2: invalid configuration or invocation inputs
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass

from pydantic import ValidationError

from github_label_state import __version__
from github_label_state.config import LabelStateSettings
from github_label_state.github.client import GitHubClient
from github_label_state.github.gateway import LabelGateway
from github_label_state.labels import extract_state_labels
from github_label_state.logging import configure_logging
from github_label_state.operations import (
    KEYED_OPERATIONS,
    OPERATIONS,
    OperationContext,
    perform_operation,
)
from github_label_state.outputs import ActionOutputs

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when invocation inputs are rejected before any API call."""


@dataclass(frozen=True, slots=True)
class Invocation:
    """Validated invocation inputs."""

    operation: str
    owner: str
    repo: str
    issue_number: int
    prefix: str
    separator: str
    key: str
    value: str
    token: str


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-state",
        description="Store key/value state in issue and pull request labels",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-label-state {__version__}"
    )
    parser.add_argument(
        "operation",
        nargs="?",
        default="",
        help="Operation to perform: " + ", ".join(OPERATIONS),
    )
    parser.add_argument(
        "--issue-number",
        default="",
        help="Issue or pull request number",
    )
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/repo' (defaults to GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="State label prefix (defaults to LABEL_STATE_PREFIX or 'state')",
    )
    parser.add_argument(
        "--separator",
        default=None,
        help="State label separator (defaults to LABEL_STATE_SEPARATOR or '::')",
    )
    parser.add_argument("--key", default="", help="State key (set, get, remove)")
    parser.add_argument("--value", default="", help="State value (set)")
    return parser


REQUIRED_INPUTS = ("operation", "issue_number")


def _parse_issue_number(raw: str) -> int:
    # int() alone would also take "+5", "1_2_3" and non-ASCII digits.
    digits = raw.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidInputError("Invalid issue number")
    return int(digits, 10)


def validate_inputs(args: argparse.Namespace, settings: LabelStateSettings) -> Invocation:
    for name in REQUIRED_INPUTS:
        if not getattr(args, name).strip():
            raise InvalidInputError(
                f"Input required and not supplied: {name.replace('_', '-')}"
            )

    repository = args.repository if args.repository is not None else settings.github_repository
    parts = repository.split("/")
    owner = parts[0]
    repo = parts[1] if len(parts) > 1 else ""
    if not owner or not repo:
        raise InvalidInputError("Invalid repository format. Expected: owner/repo")

    operation = args.operation
    if operation not in OPERATIONS:
        raise InvalidInputError(
            f"Invalid operation: {operation}. Must be: " + ", ".join(OPERATIONS)
        )

    if operation in KEYED_OPERATIONS and not args.key:
        raise InvalidInputError(f"Key is required for operation: {operation}")

    if operation == "set" and not args.value:
        raise InvalidInputError(f"Value is required for operation: {operation}")

    issue_number = _parse_issue_number(args.issue_number)

    prefix = args.prefix if args.prefix is not None else settings.prefix
    separator = args.separator if args.separator is not None else settings.separator
    if not prefix:
        raise InvalidInputError("Prefix must not be empty")
    if not separator:
        raise InvalidInputError("Separator must not be empty")

    if not settings.github_token:
        raise InvalidInputError("GitHub token is required")

    return Invocation(
        operation=operation,
        owner=owner,
        repo=repo,
        issue_number=issue_number,
        prefix=prefix,
        separator=separator,
        key=args.key,
        value=args.value,
        token=settings.github_token,
    )


def _fail(outputs: ActionOutputs, message: str) -> None:
    outputs.set_failed(message)
    outputs.set("success", False)
    outputs.set("message", message)


def run(invocation: Invocation, github: LabelGateway, outputs: ActionOutputs) -> None:
    logger.info(
        f"Performing operation: {invocation.operation}",
        extra={
            "issue_number": invocation.issue_number,
            "repo": f"{invocation.owner}/{invocation.repo}",
            "prefix": invocation.prefix,
            "separator": invocation.separator,
        },
    )

    current_labels = github.list_labels(
        owner=invocation.owner,
        repo=invocation.repo,
        issue_number=invocation.issue_number,
    )
    current_state = extract_state_labels(current_labels, invocation.prefix, invocation.separator)
    logger.debug(f"Current state: {json.dumps(current_state, ensure_ascii=False)}")

    context = OperationContext(
        gateway=github,
        owner=invocation.owner,
        repo=invocation.repo,
        issue_number=invocation.issue_number,
        prefix=invocation.prefix,
        separator=invocation.separator,
    )
    result = perform_operation(
        context,
        invocation.operation,
        current_labels,
        key=invocation.key,
        value=invocation.value,
    )

    logger.info(result.message, extra={"success": result.success})
    outputs.set_many(result.to_outputs())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabelStateSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    outputs = ActionOutputs(settings.github_output)

    try:
        invocation = validate_inputs(args, settings)
    except InvalidInputError as e:
        logger.error(str(e))
        _fail(outputs, str(e))
        print(outputs.to_json())
        return 2

    try:
        github = GitHubClient(token=invocation.token, base_url=settings.github_base_url)
        try:
            run(invocation, github, outputs)
        finally:
            github.close()
    except Exception as e:
        logger.exception("Operation failed")
        _fail(outputs, str(e) or "An unknown error occurred")
        print(outputs.to_json())
        return 1

    print(outputs.to_json())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
