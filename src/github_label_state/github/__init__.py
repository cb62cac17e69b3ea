"""GitHub label store integration."""

from github_label_state.github.client import GitHubClient
from github_label_state.github.gateway import LabelGateway

__all__ = ["GitHubClient", "LabelGateway"]
