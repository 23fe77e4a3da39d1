from __future__ import annotations

from toolhub.resources.base import ResourceDescriptor, ResourceProducer
from toolhub.resources.cities import CITIES, City, build_city_resources

__all__ = ["CITIES", "City", "ResourceDescriptor", "ResourceProducer", "build_city_resources"]
