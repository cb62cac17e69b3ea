"""Abstract label store used by the state operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from github_label_state.labels import Label


class LabelGateway(ABC):
    """Remote label collection for issues and pull requests.

    Implementations raise on transport or API failures; callers decide which
    failures are fatal.
    """

    @abstractmethod
    def list_labels(self, *, owner: str, repo: str, issue_number: int) -> list[Label]:
        """Return the labels currently attached to an issue, in API order."""

    @abstractmethod
    def replace_labels(
        self,
        *,
        owner: str,
        repo: str,
        issue_number: int,
        label_names: Sequence[str],
    ) -> list[Label]:
        """Replace the full label set of an issue.

        Args:
            owner: Repository owner.
            repo: Repository name.
            issue_number: Issue or pull request number.
            label_names: Complete, ordered list of label names to attach.

        Returns:
            The labels attached to the issue after the update.
        """

    @abstractmethod
    def delete_label_definition(self, *, owner: str, repo: str, label_name: str) -> None:
        """Delete a label from the repository itself (not just from one issue)."""
