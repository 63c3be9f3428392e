"""
Device Server Resources.

Typed shapes for the resource documents the client navigates. Field names
follow the server's JSON (PascalCase) through aliases; unknown fields are
kept so nothing the server sends is lost when a resource is printed.
"""

from pydantic import BaseModel, ConfigDict, Field

from dsclient.deviceserver.hateoas import Links


class Resource(BaseModel):
    """Base for hypermedia resources: any document carrying `Links`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    links: Links = Field(default_factory=Links, alias="Links")


class EntryPoint(Resource):
    """Root resource from which every other relation is discovered."""


class AccessKey(Resource):
    """An access key/secret pair. Its `self` link addresses it for deletion."""

    name: str = Field(default="", alias="Name")
    key: str = Field(default="", alias="Key")
    secret: str | None = Field(default=None, alias="Secret")


class AccessKeys(Resource):
    """Collection of access keys."""

    items: list[AccessKey] = Field(default_factory=list, alias="Items")
