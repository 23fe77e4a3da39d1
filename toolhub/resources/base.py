from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from toolhub.models.resource import MimeType, ResourceMetadata, ResourceResponse

ResourceProducer = Callable[[], Awaitable[ResourceResponse]]


@dataclass(frozen=True)
class ResourceDescriptor:
    """A URI-addressable resource and the coroutine that produces its content."""

    uri: str
    name: str
    description: str
    mime_type: MimeType
    producer: ResourceProducer

    def metadata(self) -> ResourceMetadata:
        return ResourceMetadata(
            uri=self.uri,
            name=self.name,
            description=self.description,
            mime_type=self.mime_type,
        )
