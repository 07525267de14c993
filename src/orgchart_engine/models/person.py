"""Person records and the reporting forest built from them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Person(BaseModel):
    """One employee record.

    Field aliases match the host dataset columns (``managerId``, ``ag_userid``).
    ``level`` and ``children`` are never part of the raw input: they are
    filled in by the hierarchy builder on its own copies of the records.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: str = ""
    position: str | None = None
    email: str | None = None
    external_user_id: str | None = Field(default=None, alias="ag_userid")
    manager_id: str | None = Field(default=None, alias="managerId")
    level: int = 0
    children: list[Person] = Field(default_factory=list)

    @field_validator("position", "email", "external_user_id", "manager_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        # The host hands over "" for empty lookup columns.
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _none_name(cls, value: object) -> object:
        return "" if value is None else value

    def has_children(self) -> bool:
        return bool(self.children)


class Hierarchy(BaseModel):
    """Result of building a forest: the roots plus the flat source list."""

    forest: list[Person]
    all_people: list[Person]
