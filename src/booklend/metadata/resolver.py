# ABOUTME: Metadata resolution chain: catalog confirmation and provider fallback discovery.
# ABOUTME: Turns a scanned identifier into fully-populated BookMetadata or None.

import logging
from collections.abc import Sequence

from booklend.config import Settings
from booklend.errors import ConfigurationError
from booklend.isbn import normalize_isbn
from booklend.metadata.googlebooks import GoogleBooksProvider
from booklend.metadata.http import HttpClient, MetadataFetchError
from booklend.metadata.openbd import OpenBDProvider
from booklend.metadata.openlibrary import OpenLibraryProvider
from booklend.metadata.provider import MetadataProvider
from booklend.metadata.types import BookMetadata

logger = logging.getLogger(__name__)


def build_providers(settings: Settings, http_client: HttpClient) -> list[MetadataProvider]:
    """Instantiate the configured providers in discovery order."""
    factories = {
        "googlebooks": lambda: GoogleBooksProvider(http_client, settings.google_books_api_key),
        "openbd": lambda: OpenBDProvider(http_client),
        "openlibrary": lambda: OpenLibraryProvider(http_client),
    }
    providers: list[MetadataProvider] = []
    for name in settings.providers:
        if name not in factories:
            raise ConfigurationError(f"Unknown metadata provider: {name}")
        providers.append(factories[name]())
    return providers


class MetadataResolver:
    """Resolves identifiers in one of two modes.

    Discovery mode walks ``providers`` in order and returns the first usable
    result. Catalog-confirmation mode asks only ``inventory`` (our own
    catalog) and never falls through to external providers.
    """

    def __init__(
        self,
        providers: Sequence[MetadataProvider],
        inventory: MetadataProvider | None = None,
    ) -> None:
        self._providers = list(providers)
        self._inventory = inventory

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self._providers]

    def resolve_discovery(self, identifier: str) -> BookMetadata | None:
        """Query external providers in order until one returns data.

        A provider that fails (after its HTTP client's retry) or answers with
        a malformed payload is logged and skipped. Returns None when every
        provider is exhausted.

        Raises:
            ValidationError: If the identifier is empty after normalization.
        """
        isbn = normalize_isbn(identifier)
        for provider in self._providers:
            try:
                metadata = provider.lookup(isbn)
            except MetadataFetchError as exc:
                logger.warning("Provider %s failed for %s: %s", provider.name, isbn, exc)
                continue
            except (KeyError, TypeError, AttributeError) as exc:
                logger.warning(
                    "Provider %s returned a malformed payload for %s: %r",
                    provider.name,
                    isbn,
                    exc,
                )
                continue

            if metadata is not None:
                logger.info("Resolved %s via %s", isbn, provider.name)
                return metadata
            logger.info("Provider %s has no match for %s", provider.name, isbn)

        return None

    def resolve_catalog(self, identifier: str) -> BookMetadata | None:
        """Exact normalized-isbn match against our own inventory only.

        Raises:
            ValidationError: If the identifier is empty after normalization.
            ConfigurationError: If no inventory source was configured.
        """
        isbn = normalize_isbn(identifier)
        if self._inventory is None:
            raise ConfigurationError("Catalog confirmation requires an inventory store")
        return self._inventory.lookup(isbn)
