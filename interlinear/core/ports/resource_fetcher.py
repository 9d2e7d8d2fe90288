# interlinear/core/ports/resource_fetcher.py
from typing import Any, Protocol


class IResourceFetcher(Protocol):
    """
    Port for retrieving the static JSON documents (lexicon, dictionary,
    tagged books). Implementations: HttpResourceFetcher, FileSystemResourceFetcher.
    """

    async def fetch_json(self, path: str) -> Any:
        """
        Retrieves and decodes one document.

        Args:
            path: Relative resource path (e.g., 'bible/kjv/Jhn.json').

        Returns:
            The decoded JSON value.

        Raises:
            ResourceUnavailableError: network failure, missing resource or invalid JSON.
        """
        ...

    async def close(self) -> None:
        """Releases any pooled connections."""
        ...
