"""GitHub API client wrapper.

Issue label reads and writes go through the REST API directly so the replace call
returns the resulting label list; repository label deletion goes through PyGithub.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import requests
from github import Auth, Github

from github_label_state import __version__
from github_label_state.github.gateway import LabelGateway
from github_label_state.labels import Label

logger = logging.getLogger(__name__)

# The label list is read as a single page; 100 is the API maximum.
_LABELS_PER_PAGE = 100


class GitHubClient(LabelGateway):
    """Label gateway backed by the GitHub REST API."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        session: requests.Session | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"github-label-state/{__version__}",
            }
        )

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=self._rest_base_url)

    def _repo_url(self, *, owner: str, repo: str, path: str) -> str:
        path = path.lstrip("/")
        return f"{self._rest_base_url}/repos/{owner.strip()}/{repo.strip().rstrip('/')}/{path}"

    def _issue_labels_url(self, *, owner: str, repo: str, issue_number: int) -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        return self._repo_url(owner=owner, repo=repo, path=f"issues/{issue_number}/labels")

    @staticmethod
    def _parse_labels(payload: object) -> list[Label]:
        if not isinstance(payload, list):
            raise ValueError("Unexpected labels response: expected a list")

        labels: list[Label] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            name = item.get("name")
            if not isinstance(name, str):
                continue
            color = item.get("color")
            description = item.get("description")
            labels.append(
                Label(
                    name=name,
                    color=color if isinstance(color, str) else None,
                    description=description if isinstance(description, str) else None,
                )
            )
        return labels

    def list_labels(self, *, owner: str, repo: str, issue_number: int) -> list[Label]:
        url = self._issue_labels_url(owner=owner, repo=repo, issue_number=issue_number)
        resp = self._session.get(url, params={"per_page": _LABELS_PER_PAGE}, timeout=30)
        resp.raise_for_status()
        labels = self._parse_labels(resp.json())
        logger.debug(
            "Issue labels fetched",
            extra={
                "repo": f"{owner}/{repo}",
                "issue_number": issue_number,
                "labels": [label.name for label in labels],
            },
        )
        return labels

    def replace_labels(
        self,
        *,
        owner: str,
        repo: str,
        issue_number: int,
        label_names: Sequence[str],
    ) -> list[Label]:
        url = self._issue_labels_url(owner=owner, repo=repo, issue_number=issue_number)
        payload: dict[str, Any] = {"labels": list(label_names)}
        resp = self._session.put(url, json=payload, timeout=30)
        resp.raise_for_status()
        labels = self._parse_labels(resp.json())
        logger.info(
            "Issue labels replaced",
            extra={
                "repo": f"{owner}/{repo}",
                "issue_number": issue_number,
                "labels": [label.name for label in labels],
            },
        )
        return labels

    def delete_label_definition(self, *, owner: str, repo: str, label_name: str) -> None:
        if not label_name:
            raise ValueError("label_name is required")
        repository = self._github.get_repo(f"{owner}/{repo}", lazy=True)
        repository.get_label(label_name).delete()
        logger.debug(
            "Repository label deleted",
            extra={"repo": f"{owner}/{repo}", "label": label_name},
        )

    def close(self) -> None:
        """Release the HTTP session and the PyGithub connection."""
        self._session.close()
        self._github.close()
