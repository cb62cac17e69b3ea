"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from github_label_state.github.gateway import LabelGateway
from github_label_state.labels import Label
from github_label_state.operations import OperationContext


@pytest.fixture
def issue_labels() -> list[Label]:
    """Labels on a typical issue: two foreign labels around two state labels."""
    return [
        Label(name="bug", color="f29513", description="Something isn't working"),
        Label(name="state::step::1", color="a2eeef", description="State label"),
        Label(name="state::status::pending", color="fbca04", description="State label"),
        Label(name="enhancement", color="0e8a16", description="New feature or request"),
    ]


@pytest.fixture
def gateway() -> Mock:
    """Provide a mocked label gateway."""
    mock = Mock(spec=LabelGateway)
    mock.replace_labels.return_value = []
    return mock


@pytest.fixture
def context(gateway: Mock) -> OperationContext:
    """Provide an operation context with the default prefix and separator."""
    return OperationContext(
        gateway=gateway,
        owner="test-owner",
        repo="test-repo",
        issue_number=123,
        prefix="state",
        separator="::",
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate settings from the developer's environment and `.env`."""
    for name in (
        "LABEL_STATE_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_BASE_URL",
        "GITHUB_REPOSITORY",
        "LABEL_STATE_PREFIX",
        "LABEL_STATE_SEPARATOR",
        "LOG_LEVEL",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
