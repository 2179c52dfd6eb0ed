# src/tetris_engine/config/base.py
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict

C = TypeVar("C", bound="ConfigBase")


class ConfigBase(BaseModel):
    """
    Strict, immutable config node: unknown keys are errors.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def with_overrides(self: C, updates: Mapping[str, Any]) -> C:
        """Re-validate a copy with `updates` applied on top (None values are ignored)."""
        data = self.model_dump(mode="json")
        data.update({k: v for k, v in updates.items() if v is not None})
        return type(self).model_validate(data)


__all__ = ["ConfigBase"]
