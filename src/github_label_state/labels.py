"""State label conventions.

A state label encodes one key/value pair in its name:

    <prefix><separator><key><separator><value>

The key ends at the first separator after the prefix; everything after it is the
value, so values may contain the separator but keys may not. Nothing is escaped.
Labels that do not start with ``prefix + separator`` are foreign and never touched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Label:
    """A label attached to an issue or pull request."""

    name: str
    color: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class StateEntry:
    key: str
    value: str


def parse_state_label(name: str, prefix: str, separator: str) -> StateEntry | None:
    """Decode a label name into a state entry.

    Returns None for foreign labels and for malformed state labels (no separator
    between key and value).
    """

    head = prefix + separator
    if not name.startswith(head):
        return None

    key, sep, value = name[len(head) :].partition(separator)
    if not sep:
        return None
    return StateEntry(key=key, value=value)


def create_state_label_name(key: str, value: str, prefix: str, separator: str) -> str:
    return f"{prefix}{separator}{key}{separator}{value}"


def convert_value(raw: str) -> str:
    """Canonicalize integer values; anything else is returned unchanged.

    Only strings that are already the canonical decimal form of an integer are
    rewritten, so ``"007"`` and ``"+5"`` stay as they are.
    """

    try:
        number = int(raw, 10)
    except ValueError:
        return raw

    canonical = str(number)
    if canonical != raw:
        return raw
    return canonical


def extract_state_labels(
    labels: Iterable[Label], prefix: str, separator: str
) -> dict[str, str]:
    """Build the key -> value mapping from a list of labels.

    Later labels win on duplicate keys.
    """

    state: dict[str, str] = {}
    for label in labels:
        entry = parse_state_label(label.name, prefix, separator)
        if entry is not None:
            state[entry.key] = entry.value
    return state


def has_state_key(label: Label, key: str, prefix: str, separator: str) -> bool:
    entry = parse_state_label(label.name, prefix, separator)
    return entry is not None and entry.key == key
