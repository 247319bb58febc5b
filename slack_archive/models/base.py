"""Base model shared by every record decoded from an export."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ExportModel(BaseModel):
    """Unknown keys are ignored and an explicit null falls back to the field default.

    Exports are written by several Slack generations; a key may be missing,
    null or extra depending on when the workspace was exported.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, v: Any, info: Any) -> Any:
        if v is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return v
