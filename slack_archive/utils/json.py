# slack_archive/utils/json.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

if TYPE_CHECKING:
    from slack_archive.source import LogSource


def read_source_json(source: LogSource, name: str, type_: Any) -> Any:
    """
    Read an entry from a log source and validate its JSON against type_.

    Raises LogEntryNotFoundError when the entry is missing and
    pydantic.ValidationError when the content does not match.
    """
    with source.open(name) as f:
        content = f.read()
    return TypeAdapter(type_).validate_json(content)
