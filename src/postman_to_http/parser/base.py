"""Data models for exported Postman documents.

Collections and environments are decoded into these models before any
conversion happens. Fields whose shape varies between exports (request URL
and body) are kept untyped and resolved later by the serializer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_to_text(value: Any) -> Any:
    """Render scalar JSON values as text; leave everything else to validation."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Header(BaseModel):
    """A single request header. Order and duplicates are significant."""

    model_config = ConfigDict(frozen=True)

    key: str = ""
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _scalar_to_text(value)


class Request(BaseModel):
    """A concrete HTTP request carried by a leaf item."""

    model_config = ConfigDict(frozen=True)

    method: str = ""
    url: Any = None  # str, {raw, host, path} or anything else
    header: list[Header] = Field(default_factory=list)
    body: Any = None  # str, {raw, mode} or anything else

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("header", mode="before")
    @classmethod
    def default_headers(cls, value: Any) -> Any:
        # Some exports write "header": null for requests without headers
        return [] if value is None else value


class Item(BaseModel):
    """A node of the collection tree: a folder, a request, both or neither."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    request: Request | None = None
    children: list["Item"] = Field(default_factory=list, alias="item")

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("children", mode="before")
    @classmethod
    def default_children(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_folder(self) -> bool:
        return bool(self.children)


class Collection(BaseModel):
    """Root of an exported collection. Only the item tree is used."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[Item] = Field(default_factory=list, alias="item")

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, value: Any) -> Any:
        return [] if value is None else value


class EnvironmentValue(BaseModel):
    """One variable of an environment."""

    model_config = ConfigDict(frozen=True)

    key: str = ""
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _scalar_to_text(value)


class Environment(BaseModel):
    """An exported environment: a name plus ordered key/value pairs."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    values: list[EnvironmentValue] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("values", mode="before")
    @classmethod
    def default_values(cls, value: Any) -> Any:
        return [] if value is None else value
