"""GitHub Label State.

Key/value state for issues and pull requests, stored entirely in label names:
- `state::step::1` is the key `step` with the value `1`
- set / get / get-all / remove operations over the issue's labels
- step outputs for workflow runners
"""

__version__ = "0.1.0"

from github_label_state.config import LabelStateSettings
from github_label_state.labels import (
    Label,
    StateEntry,
    convert_value,
    create_state_label_name,
    extract_state_labels,
    parse_state_label,
)

__all__ = [
    "__version__",
    "Label",
    "LabelStateSettings",
    "StateEntry",
    "convert_value",
    "create_state_label_name",
    "extract_state_labels",
    "parse_state_label",
]
