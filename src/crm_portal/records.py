from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

# Columns shown on the listing page; always requested as a fixed set.
DEFAULT_PROPERTIES: tuple[str, ...] = ("name", "full_name", "bio", "other", "email")

PAGE_SIZE = 100


class CrmRecord(BaseModel):
    id: str
    properties: dict[str, str | None] = Field(default_factory=dict)
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    archived: bool | None = None

    def value(self, prop: str) -> str:
        return self.properties.get(prop) or ""


@dataclass(frozen=True)
class RecordSubmission:
    """Values posted by the create form.

    ``name`` and ``full_name`` stand in for each other when one is left blank.
    """

    name: str = ""
    full_name: str = ""
    bio: str = ""
    other: str = ""
    email: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> RecordSubmission:
        def _field(key: str) -> str:
            raw = form.get(key)
            return raw if isinstance(raw, str) else ""

        name = _field("name")
        full_name = _field("full_name")
        return cls(
            name=name or full_name,
            full_name=full_name or name,
            bio=_field("bio"),
            other=_field("other"),
            email=_field("email"),
        )

    def to_properties(self) -> dict[str, str]:
        return {
            "name": self.name,
            "full_name": self.full_name,
            "bio": self.bio,
            "other": self.other,
            "email": self.email,
        }
