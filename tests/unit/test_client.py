"""Unit tests for the GitHub label gateway (mocked HTTP session and PyGithub)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from github_label_state.github.client import GitHubClient
from github_label_state.labels import Label


def _response(payload: object, status_code: int = 200) -> Mock:
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error: Not Found for url: https://api.github.com/x"
        )
    return resp


@pytest.fixture
def session() -> Mock:
    mock = Mock(spec=requests.Session)
    mock.headers = {}
    return mock


@pytest.fixture
def github_api() -> Mock:
    return Mock()


@pytest.fixture
def client(session: Mock, github_api: Mock) -> GitHubClient:
    return GitHubClient(
        token="test-token",
        base_url="https://api.github.com/",
        session=session,
        github_api=github_api,
    )


def test_requires_token(session: Mock, github_api: Mock) -> None:
    with pytest.raises(ValueError, match="GitHub token is required"):
        GitHubClient(token="", session=session, github_api=github_api)


def test_session_headers(client: GitHubClient, session: Mock) -> None:
    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Accept"] == "application/vnd.github+json"
    assert session.headers["User-Agent"].startswith("github-label-state/")


def test_list_labels(client: GitHubClient, session: Mock) -> None:
    session.get.return_value = _response(
        [
            {"id": 1, "name": "bug", "color": "f29513", "description": None, "default": True},
            {"id": 2, "name": "state::step::1", "color": "a2eeef", "description": "State"},
            {"id": 3, "color": "ffffff"},
            "not-a-label",
        ]
    )

    labels = client.list_labels(owner="test-owner", repo="test-repo", issue_number=123)

    assert labels == [
        Label(name="bug", color="f29513", description=None),
        Label(name="state::step::1", color="a2eeef", description="State"),
    ]
    session.get.assert_called_once_with(
        "https://api.github.com/repos/test-owner/test-repo/issues/123/labels",
        params={"per_page": 100},
        timeout=30,
    )


def test_list_labels_propagates_http_errors(client: GitHubClient, session: Mock) -> None:
    session.get.return_value = _response({"message": "Not Found"}, status_code=404)

    with pytest.raises(requests.HTTPError, match="404 Client Error"):
        client.list_labels(owner="test-owner", repo="test-repo", issue_number=123)


def test_list_labels_rejects_unexpected_payload(client: GitHubClient, session: Mock) -> None:
    session.get.return_value = _response({"message": "oops"})

    with pytest.raises(ValueError, match="expected a list"):
        client.list_labels(owner="test-owner", repo="test-repo", issue_number=123)


def test_rejects_non_positive_issue_number(client: GitHubClient, session: Mock) -> None:
    with pytest.raises(ValueError, match="positive integer"):
        client.list_labels(owner="test-owner", repo="test-repo", issue_number=0)
    session.get.assert_not_called()


def test_replace_labels(client: GitHubClient, session: Mock) -> None:
    session.put.return_value = _response(
        [{"name": "bug", "color": "f29513"}, {"name": "state::step::2", "color": "ededed"}]
    )

    labels = client.replace_labels(
        owner="test-owner",
        repo="test-repo",
        issue_number=123,
        label_names=("bug", "state::step::2"),
    )

    assert [label.name for label in labels] == ["bug", "state::step::2"]
    session.put.assert_called_once_with(
        "https://api.github.com/repos/test-owner/test-repo/issues/123/labels",
        json={"labels": ["bug", "state::step::2"]},
        timeout=30,
    )


def test_replace_labels_with_empty_set(client: GitHubClient, session: Mock) -> None:
    session.put.return_value = _response([])

    assert client.replace_labels(owner="o", repo="r", issue_number=5, label_names=[]) == []
    assert session.put.call_args.kwargs["json"] == {"labels": []}


def test_delete_label_definition(client: GitHubClient, github_api: Mock) -> None:
    repository = github_api.get_repo.return_value
    label = repository.get_label.return_value

    client.delete_label_definition(
        owner="test-owner", repo="test-repo", label_name="state::step::1"
    )

    github_api.get_repo.assert_called_once_with("test-owner/test-repo", lazy=True)
    repository.get_label.assert_called_once_with("state::step::1")
    label.delete.assert_called_once_with()


def test_delete_label_definition_propagates_errors(client: GitHubClient, github_api: Mock) -> None:
    github_api.get_repo.return_value.get_label.side_effect = RuntimeError("Not Found")

    with pytest.raises(RuntimeError, match="Not Found"):
        client.delete_label_definition(owner="o", repo="r", label_name="state::x::1")


def test_close(client: GitHubClient, session: Mock, github_api: Mock) -> None:
    client.close()

    session.close.assert_called_once_with()
    github_api.close.assert_called_once_with()
