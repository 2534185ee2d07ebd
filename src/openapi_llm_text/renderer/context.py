"""Render contexts: where a type descriptor is shown decides how verbose it is."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

REQUEST_BODY_PROPERTY_LIMIT = 3


class ContextKind(str, Enum):
    PARAMETER = "parameter"
    REQUEST_BODY = "requestBody"
    RESPONSE = "response"
    SCHEMA_LISTING = "schemaListing"


class RenderContext(BaseModel):
    """Verbosity flags derived once from a ContextKind."""

    model_config = ConfigDict(frozen=True)

    kind: ContextKind
    include_format: bool
    include_properties: bool = True
    property_limit: int | None = None

    @classmethod
    def for_kind(cls, kind: ContextKind) -> "RenderContext":
        return cls(
            kind=kind,
            include_format=kind is ContextKind.RESPONSE,
            property_limit=REQUEST_BODY_PROPERTY_LIMIT if kind is ContextKind.REQUEST_BODY else None,
        )

    @property
    def unknown(self) -> str:
        return "unknown" if self.kind is ContextKind.PARAMETER else "Unknown"


PARAMETER = RenderContext.for_kind(ContextKind.PARAMETER)
REQUEST_BODY = RenderContext.for_kind(ContextKind.REQUEST_BODY)
RESPONSE = RenderContext.for_kind(ContextKind.RESPONSE)
SCHEMA_LISTING = RenderContext.for_kind(ContextKind.SCHEMA_LISTING)
