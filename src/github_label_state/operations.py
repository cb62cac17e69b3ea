"""Key/value state operations over issue labels.

Each operation receives the labels currently attached to the issue, reconciles
them against the requested change and commits the result with a single
replace-all call. Deleting a stale label definition from the repository is a
separate best-effort step: its failure is logged and never changes the outcome.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from github_label_state.github.gateway import LabelGateway
from github_label_state.labels import (
    Label,
    convert_value,
    create_state_label_name,
    extract_state_labels,
    has_state_key,
)

logger = logging.getLogger(__name__)

OPERATIONS: tuple[str, ...] = ("set", "remove", "get", "get-all")
KEYED_OPERATIONS: frozenset[str] = frozenset({"set", "remove", "get"})


@dataclass(frozen=True, slots=True)
class OperationContext:
    """Everything an operation needs to talk to one issue's labels."""

    gateway: LabelGateway
    owner: str
    repo: str
    issue_number: int
    prefix: str
    separator: str

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Outcome of deleting a stale label definition from the repository."""

    label_name: str
    deleted: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class OperationOutput:
    """Result of an operation.

    ``data`` holds the operation-specific outputs (``value`` for get, ``state``
    for get-all); a key that is present with a None value is reported as empty.
    """

    success: bool
    message: str
    data: dict[str, str | None] = field(default_factory=dict)
    cleanup: CleanupResult | None = None

    @property
    def value(self) -> str | None:
        return self.data.get("value")

    @property
    def state(self) -> str | None:
        return self.data.get("state")

    def to_outputs(self) -> dict[str, object]:
        return {**self.data, "success": self.success, "message": self.message}


def _find_state_label(
    context: OperationContext, key: str, labels: Sequence[Label]
) -> Label | None:
    for label in labels:
        if has_state_key(label, key, context.prefix, context.separator):
            return label
    return None


def _labels_without_key(
    context: OperationContext, key: str, labels: Sequence[Label]
) -> list[Label]:
    return [
        label
        for label in labels
        if not has_state_key(label, key, context.prefix, context.separator)
    ]


def _commit(context: OperationContext, label_names: list[str]) -> None:
    context.gateway.replace_labels(
        owner=context.owner,
        repo=context.repo,
        issue_number=context.issue_number,
        label_names=label_names,
    )


def delete_label_definition(context: OperationContext, label_name: str) -> CleanupResult:
    """Best-effort removal of a label from the repository; never raises."""

    try:
        context.gateway.delete_label_definition(
            owner=context.owner, repo=context.repo, label_name=label_name
        )
    except Exception as e:
        return CleanupResult(label_name=label_name, deleted=False, error=str(e) or type(e).__name__)
    return CleanupResult(label_name=label_name, deleted=True)


def _log_cleanup(context: OperationContext, result: CleanupResult, *, what: str) -> None:
    extra = {"repo": context.repository, "label": result.label_name}
    if result.deleted:
        logger.info(f"Deleted {what} '{result.label_name}' from repository", extra=extra)
    else:
        logger.warning(
            f"Failed to delete {what} '{result.label_name}' from repository: {result.error}",
            extra=extra,
        )


def get_operation(
    context: OperationContext, key: str, current_labels: Sequence[Label]
) -> OperationOutput:
    state = extract_state_labels(current_labels, context.prefix, context.separator)

    if key not in state:
        return OperationOutput(
            success=False,
            message=f"Key '{key}' not found",
            data={"value": None},
        )

    return OperationOutput(
        success=True,
        message=f"Retrieved value for key '{key}'",
        data={"value": state[key]},
    )


def get_all_operation(
    context: OperationContext, current_labels: Sequence[Label]
) -> OperationOutput:
    state = extract_state_labels(current_labels, context.prefix, context.separator)

    return OperationOutput(
        success=True,
        message=f"Retrieved {len(state)} state values",
        data={"state": json.dumps(state, separators=(",", ":"), ensure_ascii=False)},
    )


def set_operation(
    context: OperationContext, key: str, value: str, current_labels: Sequence[Label]
) -> OperationOutput:
    """Create or update a state key.

    Every label currently carrying ``key`` is dropped from the issue and the new
    label is appended after the preserved ones. The replaced label definition is
    then deleted from the repository, unless it is the label being set.
    """

    converted_value = convert_value(value)
    new_label_name = create_state_label_name(
        key, converted_value, context.prefix, context.separator
    )

    existing_label = _find_state_label(context, key, current_labels)
    labels_to_keep = _labels_without_key(context, key, current_labels)

    _commit(context, [label.name for label in labels_to_keep] + [new_label_name])

    cleanup: CleanupResult | None = None
    if existing_label is not None and existing_label.name != new_label_name:
        cleanup = delete_label_definition(context, existing_label.name)
        _log_cleanup(context, cleanup, what="old label")

    return OperationOutput(
        success=True,
        message=f"Set state: {key}={converted_value}",
        cleanup=cleanup,
    )


def remove_operation(
    context: OperationContext, key: str, current_labels: Sequence[Label]
) -> OperationOutput:
    label_to_remove = _find_state_label(context, key, current_labels)
    if label_to_remove is None:
        return OperationOutput(success=False, message=f"Key '{key}' not found")

    labels_to_keep = _labels_without_key(context, key, current_labels)
    _commit(context, [label.name for label in labels_to_keep])

    cleanup = delete_label_definition(context, label_to_remove.name)
    _log_cleanup(context, cleanup, what="label")

    return OperationOutput(
        success=True,
        message=f"Removed state key: {key}",
        cleanup=cleanup,
    )


def perform_operation(
    context: OperationContext,
    operation: str,
    current_labels: Sequence[Label],
    *,
    key: str = "",
    value: str = "",
) -> OperationOutput:
    if operation == "get":
        return get_operation(context, key, current_labels)
    if operation == "get-all":
        return get_all_operation(context, current_labels)
    if operation == "set":
        return set_operation(context, key, value, current_labels)
    if operation == "remove":
        return remove_operation(context, key, current_labels)
    raise ValueError(f"Unsupported operation: {operation}")
