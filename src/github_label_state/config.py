"""Configuration for the label state tool.

Configuration is loaded from:
- environment variables (including the ones a workflow runner provides)
- and a local `.env` file (if present)

A dedicated `LABEL_STATE_GITHUB_TOKEN` takes precedence over `GITHUB_TOKEN` so the
tool can run with a different token than other steps of the same job.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PREFIX = "state"
DEFAULT_SEPARATOR = "::"


class LabelStateSettings(BaseSettings):
    """Settings for the label state tool.

    Environment variables:
    - LABEL_STATE_GITHUB_TOKEN / GITHUB_TOKEN
    - GITHUB_API_URL / GITHUB_BASE_URL   (optional)
    - GITHUB_REPOSITORY                  (optional default for --repository)
    - LABEL_STATE_PREFIX                 (optional)
    - LABEL_STATE_SEPARATOR              (optional)
    - LOG_LEVEL                          (optional)
    - GITHUB_OUTPUT                      (optional, set by the workflow runner)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LabelStateSettings(_env_file=path_to_env)`.
    """

    # The token is checked together with the other invocation inputs so that
    # a missing token is reported through the regular failure outputs.
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("LABEL_STATE_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL", "GITHUB_BASE_URL"),
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_repository: str = Field(
        default="",
        validation_alias="GITHUB_REPOSITORY",
        description="Default repository in the form 'owner/repo'",
    )

    prefix: str = Field(
        default=DEFAULT_PREFIX,
        validation_alias="LABEL_STATE_PREFIX",
        description="Prefix marking state labels",
    )
    separator: str = Field(
        default=DEFAULT_SEPARATOR,
        validation_alias="LABEL_STATE_SEPARATOR",
        description="Separator between prefix, key and value",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    github_output: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="File that receives step outputs",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("github_output", mode="before")
    @classmethod
    def _empty_output_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
