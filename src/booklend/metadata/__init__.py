# ABOUTME: Metadata package for ISBN lookup against bibliographic providers.
# ABOUTME: Exports BookMetadata, the provider protocol, and the resolver.

from booklend.metadata.provider import MetadataProvider
from booklend.metadata.resolver import MetadataResolver, build_providers
from booklend.metadata.types import BookMetadata

__all__ = [
    "BookMetadata",
    "MetadataProvider",
    "MetadataResolver",
    "build_providers",
]
