from __future__ import annotations

from collections.abc import Iterable

from toolhub.core.errors import RegistryConflictError, ResourceNotFoundError
from toolhub.models.resource import ResourceMetadata
from toolhub.resources.base import ResourceDescriptor


def normalize_uri(uri: str) -> str:
    """Drop a single trailing slash (``weather://seoul/`` -> ``weather://seoul``)."""
    return uri[:-1] if uri.endswith("/") else uri


class ResourceRegistry:
    """Registry of resource descriptors keyed by URI, in registration order."""

    def __init__(self) -> None:
        self._resources: dict[str, ResourceDescriptor] = {}

    def register(self, descriptor: ResourceDescriptor) -> None:
        """Raises RegistryConflictError when the URI is already taken."""
        uri = normalize_uri(descriptor.uri)
        if uri in self._resources:
            raise RegistryConflictError(f"Resource '{descriptor.uri}' is already registered")
        self._resources[uri] = descriptor

    def register_all(self, descriptors: Iterable[ResourceDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def get(self, uri: str) -> ResourceDescriptor:
        """Get a descriptor by URI. Raises ResourceNotFoundError (a KeyError) if absent."""
        descriptor = self._resources.get(normalize_uri(uri))
        if descriptor is None:
            raise ResourceNotFoundError(f"Unknown resource: '{uri}'")
        return descriptor

    def list_resources(self) -> list[ResourceMetadata]:
        return [descriptor.metadata() for descriptor in self._resources.values()]

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, uri: str) -> bool:
        return normalize_uri(uri) in self._resources
