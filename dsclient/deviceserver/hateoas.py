"""
Hypermedia Links.

Every navigable device server resource embeds a `Links` section that maps
relation names to URLs. Clients discover operation URLs by resolving a
relation at runtime instead of hardcoding paths.

The server sends links as a list of `{"rel": ..., "href": ...}` objects;
a plain `{rel: {"href": ...}}` mapping is accepted as well. Relation names
match exactly and case-sensitively. When a document repeats a relation the
last occurrence wins, but callers should not rely on that.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, RootModel, model_validator
from pydantic_core import PydanticUndefined

from dsclient.core.exceptions import MissingRelationError, NotFoundError


class Link(BaseModel):
    """A single navigable link. Extra metadata (e.g. methods) is preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    href: str = Field(validation_alias=AliasChoices("href", "Href"))
    rel: str | None = Field(default=None, validation_alias=AliasChoices("rel", "Rel"))


class Links(RootModel[dict[str, Link]]):
    """Relation name to link mapping of one decoded resource."""

    root: dict[str, Link] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _index_by_relation(cls, data: Any) -> Any:
        if data is None or data is PydanticUndefined:
            return {}
        if isinstance(data, list):
            indexed: dict[str, Any] = {}
            for item in data:
                if not isinstance(item, dict):
                    raise ValueError("link entries must be objects")
                rel = item.get("rel", item.get("Rel"))
                if not isinstance(rel, str):
                    raise ValueError("link entries must carry a 'rel' name")
                indexed[rel] = item
            return indexed
        return data

    @model_validator(mode="after")
    def _fill_relation_names(self) -> "Links":
        for rel, link in self.root.items():
            if link.rel is None:
                link.rel = rel
        return self

    def get(self, rel: str) -> Link:
        """
        Look up a relation for best-effort use (e.g. display).

        Raises:
            NotFoundError: If the relation is absent.
        """
        try:
            return self.root[rel]
        except KeyError:
            raise NotFoundError(f"relation not found: {rel}") from None

    def get_link(self, rel: str) -> Link:
        """
        Look up a relation that an operation needs in order to proceed.

        Raises:
            MissingRelationError: If the relation is absent.
        """
        try:
            return self.root[rel]
        except KeyError:
            raise MissingRelationError(rel) from None

    def __contains__(self, rel: object) -> bool:
        return rel in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)
