"""Step outputs for workflow runners.

Outputs are appended to the file named by ``GITHUB_OUTPUT`` using the multi-line
delimiter syntax, and kept in memory so the CLI can also print them.
"""

from __future__ import annotations

import json
import sys
import uuid
from pathlib import Path
from typing import TextIO


def to_output_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def escape_command_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionOutputs:
    """Collects step outputs and the failure signal of one invocation."""

    def __init__(self, output_file: Path | None = None, *, stream: TextIO | None = None) -> None:
        self._output_file = output_file
        self._stream = stream
        self.values: dict[str, str] = {}
        self.failed = False

    def set(self, name: str, value: object) -> None:
        rendered = to_output_value(value)
        self.values[name] = rendered

        if self._output_file is None:
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in rendered:
            raise ValueError(f"Output delimiter collides with output {name!r}")
        with self._output_file.open("a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{rendered}\n{delimiter}\n")

    def set_many(self, outputs: dict[str, object]) -> None:
        for name, value in outputs.items():
            self.set(name, value)

    def set_failed(self, message: str) -> None:
        """Emit an error annotation and mark the invocation as failed."""
        self.failed = True
        stream = self._stream or sys.stdout
        print(f"::error::{escape_command_data(message)}", file=stream)

    def to_json(self) -> str:
        return json.dumps(self.values, ensure_ascii=False)
